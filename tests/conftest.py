# tests/conftest.py
"""
Shared Test Fixtures - Stub Rate Source and Fake Clock

Files that USE this module:
- pytest (fixtures are injected into every test module)

Files that this module USES:
- localprice.adapters.providers.base (RateSource for the stub)
- localprice.application (RateCache, RateProvider, CurrencyService)
"""
from datetime import datetime, timedelta, timezone  # Date/time utilities for the fake clock

import pytest  # Testing framework for writing and running tests

from localprice.adapters.providers.base import RateSource  # Interface the stub implements
from localprice.application.rate_cache import RateCache  # In-memory rate cache
from localprice.application.rates_service import CurrencyService, RateProvider  # Services under test
from localprice.domain.errors import ProviderUnavailableError  # Error raised by the failing stub
from localprice.domain.models import freeze_rates  # Read-only rate tables

USD_RATES = {"USD": 1.0, "EUR": 0.8567, "GBP": 0.79, "JPY": 149.5, "SEK": 10.9}


class FakeClock:
    """Clock whose time only moves when told to."""

    def __init__(self, start=None):
        self.now = start or datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)

    def __call__(self):
        return self.now

    def advance(self, **kwargs):
        self.now = self.now + timedelta(**kwargs)


class StubSource(RateSource):
    """Rate source serving canned tables; can be switched to failing."""
    name = "stub"

    def __init__(self, tables=None):
        self.tables = dict(tables if tables is not None else {"USD": USD_RATES})
        self.calls = []
        self.fail = False

    def fetch_rates(self, base_currency):
        self.calls.append(base_currency)
        if self.fail:
            raise ProviderUnavailableError("upstream down")
        if base_currency not in self.tables:
            raise ProviderUnavailableError(f"HTTP 404 for {base_currency}")
        return freeze_rates(self.tables[base_currency])


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def source():
    return StubSource()


@pytest.fixture
def provider(source, clock):
    return RateProvider(source=source, cache=RateCache(), cache_duration=timedelta(hours=1), clock=clock)


@pytest.fixture
def service(provider):
    return CurrencyService(provider)
