# src/localprice/adapters/providers/base.py
"""
Base Provider Interface for Exchange Rate Sources

This module defines the abstract base class for upstream rate sources.
A source fetches one full rate table per base currency and does no caching
of its own; caching and stale fallback live in the application layer.

Files that USE this module:
- localprice.adapters.providers.exchangerate_api (ExchangeRateApiSource implements RateSource)
- localprice.application.rates_service (RateProvider depends on RateSource)
- tests.* (stub sources)

Files that this module USES:
- localprice.domain.models (RateTable)
"""
from abc import ABC, abstractmethod

from localprice.domain.models import RateTable


class RateSource(ABC):
    name: str = "unknown"

    @abstractmethod
    def fetch_rates(self, base_currency: str) -> RateTable:
        """
        Return the rate table for base_currency.

        Raises:
            ProviderUnavailableError: On transport failure, non-2xx status or malformed payload
        """
        raise NotImplementedError
