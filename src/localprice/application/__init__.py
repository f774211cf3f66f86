"""
Application Layer - Use Cases and Services

This package contains the rate cache, the cached rate provider, the
currency query facade and health reporting. It reaches upstream only
through the RateSource interface.
"""

from localprice.application.rate_cache import RateCache
from localprice.application.rates_service import (
    CACHE_DURATION,
    CurrencyService,
    RateProvider,
    RateSelection,
    filter_rates,
    select_rates,
)
from localprice.application.health import HealthChecker, HealthStatus

__all__ = [
    "RateCache",
    "CACHE_DURATION",
    "CurrencyService",
    "RateProvider",
    "RateSelection",
    "filter_rates",
    "select_rates",
    "HealthChecker",
    "HealthStatus",
]
