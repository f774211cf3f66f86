# src/localprice/application/rates_service.py
"""
Rates Service - Rate Retrieval, Caching and Conversion Use-cases

This module contains the core business logic of the service:

- RateProvider: returns the rate table for a base currency, serving fresh
  cache entries without a network call, refreshing expired ones, and
  falling back to the last cached table when upstream fails.
- select_rates: the pure fallback-selection rule over (cached entry,
  fetch result).
- CurrencyService: the query facade used by the HTTP layer and admin
  preview (rates, conversion, formatting, country defaults, cache reset).

Concurrent misses for the same base are not coalesced; each caller may
fetch, and whichever response is stored last wins.

Files that USE this module:
- localprice.app (composition root builds RateProvider and CurrencyService)
- localprice.adapters.http.api (endpoints call CurrencyService)
- localprice.application.health (reads provider cache and duration)
- tests.test_rates_service (unit tests)

Files that this module USES:
- localprice.adapters.providers.base (RateSource interface)
- localprice.application.rate_cache (RateCache)
- localprice.domain.* (models, errors, registry, conversion)
- localprice.shared.validators (normalize_currency_code)
"""
from __future__ import annotations  # Enable postponed evaluation of annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable, Dict, Iterable, Mapping, Optional

from localprice.adapters.providers.base import RateSource
from localprice.application.rate_cache import RateCache
from localprice.domain import conversion
from localprice.domain.currencies import CurrencyRegistry, registry as default_registry
from localprice.domain.errors import UpstreamError
from localprice.domain.models import CacheEntry, FetchResult, RateTable
from localprice.shared.validators import normalize_currency_code

log = logging.getLogger(__name__)

CACHE_DURATION = timedelta(hours=1)

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class RateSelection:
    """
    Result of choosing between a fetch result and the cached entry.

    Attributes:
        rates: Rate table to hand back to the caller
        store: New entry to put in the cache, or None to leave the cache untouched
        stale: True if rates came from an entry past its freshness window
    """
    rates: RateTable
    store: Optional[CacheEntry] = None
    stale: bool = False


def is_fresh(entry: Optional[CacheEntry], now: datetime, duration: timedelta) -> bool:
    """True if entry exists and was fetched less than duration ago."""
    return entry is not None and now - entry.fetched_at < duration


def select_rates(
    base_currency: str,
    cached: Optional[CacheEntry],
    result: FetchResult,
    now: datetime,
) -> RateSelection:
    """
    Pick the rates to serve after a refresh attempt.

    A successful fetch always wins and replaces the cache entry. A failed
    fetch falls back to the cached entry unchanged (its fetched_at is kept,
    so it stays stale for later calls). With neither, the call fails.

    Args:
        base_currency: Base the fetch was for
        cached: Entry in the cache before the fetch (fresh or expired), if any
        result: Outcome of the fetch
        now: Time to stamp a new entry with

    Returns:
        RateSelection describing what to return and what to store

    Raises:
        UpstreamError: If the fetch failed and nothing is cached
    """
    if result.ok:
        entry = CacheEntry(rates=result.rates, fetched_at=now)
        return RateSelection(rates=entry.rates, store=entry)
    if cached is not None:
        return RateSelection(rates=cached.rates, stale=True)
    raise UpstreamError(base_currency) from result.error


class RateProvider:
    """
    Cached access to upstream rate tables, one table per base currency.

    The cache, the upstream source and the clock are all injected so tests
    can drive expiry deterministically.
    """

    def __init__(
        self,
        source: RateSource,
        cache: Optional[RateCache] = None,
        cache_duration: timedelta = CACHE_DURATION,
        clock: Clock = utc_now,
    ):
        """
        Initialize the provider.

        Args:
            source: Upstream rate source
            cache: Shared cache (a new empty one when omitted)
            cache_duration: Freshness window for cached tables
            clock: Callable returning the current aware datetime
        """
        self.source = source
        self.cache = cache if cache is not None else RateCache()
        self.cache_duration = cache_duration
        self.clock = clock

    def _fetch(self, base_currency: str) -> FetchResult:
        try:
            return FetchResult.success(self.source.fetch_rates(base_currency))
        except Exception as e:
            log.warning("Fetching rates for %s failed: %s", base_currency, e)
            return FetchResult.failure(e)

    def get_rates(self, base_currency: str) -> RateTable:
        """
        Get the rate table for a base currency.

        Args:
            base_currency: Base currency code (non-empty; not checked against the registry)

        Returns:
            Read-only rate table

        Raises:
            InvalidCurrencyError: If base_currency is blank
            UpstreamError: If upstream fails and nothing is cached for this base
        """
        base = normalize_currency_code(base_currency)
        cached = self.cache.get(base)

        if is_fresh(cached, self.clock(), self.cache_duration):
            log.debug("Using cached rates for %s", base)
            return cached.rates

        result = self._fetch(base)
        try:
            selection = select_rates(base, cached, result, self.clock())
        except UpstreamError:
            log.error("No cached rates for %s to fall back on", base)
            raise

        if selection.store is not None:
            self.cache.set(base, selection.store)
        elif selection.stale:
            log.warning("Using expired cached rates for %s due to upstream error", base)
        return selection.rates

    def clear_cache(self) -> None:
        self.cache.clear()


def filter_rates(rates: Mapping[str, float], currencies: Optional[Iterable[str]]) -> Dict[str, float]:
    """
    Narrow a rate table to the requested codes.

    Codes absent from the table are skipped silently. An empty or missing
    request returns the whole table.

    Args:
        rates: Full rate table
        currencies: Requested codes, in the order they should appear

    Returns:
        New plain dict
    """
    requested = list(currencies or [])
    if not requested:
        return dict(rates)
    return {code: rates[code] for code in requested if code in rates}


class CurrencyService:
    """
    Query facade for rates, conversion and formatting.

    This is the single place the HTTP endpoints and the admin preview go
    through, so server-side and storefront formatting cannot drift apart.
    """

    def __init__(self, provider: RateProvider, currencies: Optional[CurrencyRegistry] = None):
        self.provider = provider
        self.currencies = currencies or default_registry

    def get_exchange_rates(self, base_currency: str, currencies: Optional[Iterable[str]] = None) -> dict:
        """
        Get rates for a base currency, optionally narrowed to some codes.

        Returns:
            {"base": base_currency, "rates": {code: rate}}

        Raises:
            UpstreamError: If no rates can be obtained
        """
        base = normalize_currency_code(base_currency)
        rates = self.provider.get_rates(base)
        return {"base": base, "rates": filter_rates(rates, currencies)}

    def convert_currency(
        self,
        amount: float,
        from_currency: str,
        to_currency: str,
        round_result: bool = False,
    ) -> float:
        """
        Convert an amount between currencies at current rates.

        No rates are fetched when the currencies match.

        Raises:
            UpstreamError: If rates for from_currency cannot be obtained
            RateNotFoundError: If to_currency is not in the rate table
        """
        if from_currency == to_currency:
            return amount
        rates = self.provider.get_rates(from_currency)
        return conversion.convert(amount, from_currency, to_currency, rates, round_result)

    def format_price(self, amount: float, currency_code: str) -> str:
        return conversion.format_price(amount, currency_code, self.currencies)

    def get_currency_by_country(self, country_code: Optional[str]) -> str:
        return self.currencies.default_currency_for_country(country_code)

    def clear_cache(self) -> None:
        self.provider.clear_cache()
