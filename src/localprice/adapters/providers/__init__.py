"""
Provider Adapters - External Rate Sources

This package contains adapters for external exchange rate APIs.
All sources implement the RateSource interface.
"""

from localprice.adapters.providers.base import RateSource
from localprice.adapters.providers.exchangerate_api import ExchangeRateApiSource

__all__ = [
    "RateSource",
    "ExchangeRateApiSource",
]
