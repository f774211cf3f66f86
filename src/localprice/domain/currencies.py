# src/localprice/domain/currencies.py
"""
Currency Registry - Supported Currencies and Country Defaults

Static lookup tables for the currencies the storefront can display:
symbol, name and symbol placement per code, plus the country → currency
table used to pick a shopper's default currency from their locale.

Files that USE this module:
- localprice.domain.conversion (format_price looks up descriptors)
- localprice.application.rates_service (CurrencyService exposes the registry)
- localprice.adapters.http.api (currency listing and country lookup endpoints)
- tests.test_currencies (unit tests)

Files that this module USES:
- localprice.domain.models (CurrencyDescriptor, Placement)
"""
from __future__ import annotations

from types import MappingProxyType
from typing import Dict, List, Mapping, Optional

from localprice.domain.models import CurrencyDescriptor, Placement

FALLBACK_CURRENCY = "USD"

# Currencies whose symbol follows the amount ("12.50€")
SUFFIX_CURRENCIES = frozenset({"EUR", "SEK", "NOK", "DKK"})

_CURRENCY_TABLE = (
    ("USD", "$", "US Dollar"),
    ("EUR", "€", "Euro"),
    ("GBP", "£", "British Pound"),
    ("CAD", "C$", "Canadian Dollar"),
    ("AUD", "A$", "Australian Dollar"),
    ("JPY", "¥", "Japanese Yen"),
    ("INR", "₹", "Indian Rupee"),
    ("CNY", "¥", "Chinese Yuan"),
    ("CHF", "CHF", "Swiss Franc"),
    ("SEK", "kr", "Swedish Krona"),
    ("NZD", "NZ$", "New Zealand Dollar"),
    ("MXN", "MX$", "Mexican Peso"),
    ("SGD", "S$", "Singapore Dollar"),
    ("HKD", "HK$", "Hong Kong Dollar"),
    ("NOK", "kr", "Norwegian Krone"),
    ("KRW", "₩", "South Korean Won"),
    ("TRY", "₺", "Turkish Lira"),
    ("RUB", "₽", "Russian Ruble"),
    ("BRL", "R$", "Brazilian Real"),
    ("ZAR", "R", "South African Rand"),
    ("DKK", "kr", "Danish Krone"),
)

_EURO_COUNTRIES = ("DE", "FR", "IT", "ES", "NL", "BE", "AT", "IE", "PT", "FI", "GR")

COUNTRY_TO_CURRENCY: Mapping[str, str] = MappingProxyType({
    "US": "USD",
    "CA": "CAD",
    "GB": "GBP",
    "AU": "AUD",
    "NZ": "NZD",
    "IN": "INR",
    "JP": "JPY",
    "CN": "CNY",
    **{country: "EUR" for country in _EURO_COUNTRIES},
    "CH": "CHF",
    "SE": "SEK",
    "NO": "NOK",
    "DK": "DKK",
    "MX": "MXN",
    "SG": "SGD",
    "HK": "HKD",
    "KR": "KRW",
    "TR": "TRY",
    "RU": "RUB",
    "BR": "BRL",
    "ZA": "ZAR",
})


def _build_descriptors() -> Dict[str, CurrencyDescriptor]:
    return {
        code: CurrencyDescriptor(
            code=code,
            symbol=symbol,
            name=name,
            placement=Placement.SUFFIX if code in SUFFIX_CURRENCIES else Placement.PREFIX,
        )
        for code, symbol, name in _CURRENCY_TABLE
    }


class CurrencyRegistry:
    """
    Read-only registry of supported currencies and country defaults.

    Lookups are exact-match on the code as given; no I/O, no failure modes.
    """

    def __init__(
        self,
        descriptors: Optional[Mapping[str, CurrencyDescriptor]] = None,
        country_map: Optional[Mapping[str, str]] = None,
        fallback_currency: str = FALLBACK_CURRENCY,
    ):
        self._descriptors = MappingProxyType(dict(descriptors if descriptors is not None else _build_descriptors()))
        self._country_map = MappingProxyType(dict(country_map if country_map is not None else COUNTRY_TO_CURRENCY))
        self.fallback_currency = fallback_currency

    def describe(self, code: str) -> Optional[CurrencyDescriptor]:
        """Return the descriptor for a currency code, or None if unsupported."""
        return self._descriptors.get(code)

    def is_supported(self, code: str) -> bool:
        return code in self._descriptors

    def supported_codes(self) -> List[str]:
        """Supported codes in registry order."""
        return list(self._descriptors)

    def default_currency_for_country(self, country_code: Optional[str]) -> str:
        """
        Resolve the default display currency for an ISO country code.

        Args:
            country_code: Two-letter country code (e.g., "DE"); may be None

        Returns:
            Currency code, falling back to USD for unmapped countries
        """
        if not country_code:
            return self.fallback_currency
        return self._country_map.get(country_code, self.fallback_currency)

    def as_dict(self) -> Dict[str, dict]:
        """Registry as plain JSON-ready data: code -> {symbol, name, placement}."""
        return {code: descriptor.to_dict() for code, descriptor in self._descriptors.items()}


# Global registry instance
registry = CurrencyRegistry()
