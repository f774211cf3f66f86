# src/localprice/domain/models.py
"""
Domain Models - Pure Business Objects

This module contains domain models representing core business concepts:
- Cached rate tables and their fetch time
- Currency display descriptors
- Upstream fetch outcomes

Files that USE this module:
- localprice.domain.currencies (CurrencyDescriptor, Placement)
- localprice.application.* (CacheEntry, FetchResult)
- localprice.adapters.providers.* (rate tables returned by sources)
- tests.* (tests use domain models for test data)

Files that this module USES:
- None (pure domain layer, no external dependencies)
"""

from __future__ import annotations  # Enable postponed evaluation of annotations

from dataclasses import dataclass  # Decorator for creating data classes
from datetime import datetime  # Date/time utilities for timestamps
from enum import Enum  # Enumerations for symbol placement
from types import MappingProxyType  # Read-only view over rate tables
from typing import Mapping, Optional  # Type hints for mappings and optional values

# 1 unit of base currency = rate units of target currency
RateTable = Mapping[str, float]


def freeze_rates(rates: Mapping[str, float]) -> RateTable:
    """
    Copy a rate table into a read-only mapping.

    Args:
        rates: Mapping of currency code to multiplier

    Returns:
        Read-only mapping that cannot be mutated by callers
    """
    return MappingProxyType(dict(rates))


class Placement(str, Enum):
    """Where the currency symbol goes relative to the amount."""
    PREFIX = "prefix"
    SUFFIX = "suffix"


@dataclass(frozen=True)
class CurrencyDescriptor:
    """
    Display metadata for a supported currency.

    Attributes:
        code: ISO 4217 code (e.g., "EUR")
        symbol: Display glyph (e.g., "€")
        name: Human readable name
        placement: Whether the symbol precedes or follows the amount
    """
    code: str
    symbol: str
    name: str
    placement: Placement = Placement.PREFIX

    def to_dict(self) -> dict:
        return {"symbol": self.symbol, "name": self.name, "placement": self.placement.value}


@dataclass(frozen=True)
class CacheEntry:
    """
    A rate table together with the time it was fetched.

    Entries are replaced as a whole on refresh, never mutated.

    Attributes:
        rates: Read-only rate table for one base currency
        fetched_at: When the table was fetched from upstream
    """
    rates: RateTable
    fetched_at: datetime


@dataclass(frozen=True)
class FetchResult:
    """
    Outcome of a single upstream fetch attempt.

    Exactly one of rates/error is set.
    """
    rates: Optional[RateTable] = None
    error: Optional[BaseException] = None

    @property
    def ok(self) -> bool:
        return self.rates is not None

    @classmethod
    def success(cls, rates: Mapping[str, float]) -> FetchResult:
        return cls(rates=freeze_rates(rates))

    @classmethod
    def failure(cls, error: BaseException) -> FetchResult:
        return cls(error=error)
