"""
Domain Layer - Pure Business Objects

This package contains domain models, the currency registry and the
conversion/formatting functions. No dependencies on infrastructure or
external systems.
"""

from localprice.domain.models import (
    CacheEntry,
    CurrencyDescriptor,
    FetchResult,
    Placement,
    RateTable,
    freeze_rates,
)
from localprice.domain.errors import (
    DomainError,
    InvalidCurrencyError,
    MalformedPayloadError,
    ProviderUnavailableError,
    RateNotFoundError,
    UpstreamError,
)
from localprice.domain.currencies import (
    COUNTRY_TO_CURRENCY,
    SUFFIX_CURRENCIES,
    CurrencyRegistry,
    registry,
)
from localprice.domain.conversion import convert, format_price, round_cents

__all__ = [
    "CacheEntry",
    "CurrencyDescriptor",
    "FetchResult",
    "Placement",
    "RateTable",
    "freeze_rates",
    "DomainError",
    "InvalidCurrencyError",
    "MalformedPayloadError",
    "ProviderUnavailableError",
    "RateNotFoundError",
    "UpstreamError",
    "COUNTRY_TO_CURRENCY",
    "SUFFIX_CURRENCIES",
    "CurrencyRegistry",
    "registry",
    "convert",
    "format_price",
    "round_cents",
]
