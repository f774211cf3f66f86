# src/localprice/shared/validators.py
"""
Input Validation Utilities - Currency and Country Input Checks

This module provides validation and normalization helpers for the codes
that arrive from configuration and from query strings.

Files that USE this module:
- localprice.config.settings (validates DEFAULT_BASE_CURRENCY)
- localprice.application.rates_service (normalizes base currencies)
- localprice.adapters.http.api (parses the ?currencies= list)

Files that this module USES:
- localprice.domain.errors (InvalidCurrencyError)
"""
import re
from typing import List, Optional

from localprice.domain.errors import InvalidCurrencyError

_CURRENCY_PATTERN = re.compile(r'^[A-Z]{3}$')
_COUNTRY_PATTERN = re.compile(r'^[A-Z]{2}$')


def validate_currency_code(code: str) -> bool:
    """
    Validate ISO 4217-style currency code format (three upper-case letters).
    
    Args:
        code: Currency code to validate
        
    Returns:
        True if valid, False otherwise
    """
    if not code:
        return False
    return bool(_CURRENCY_PATTERN.match(code))


def validate_country_code(code: str) -> bool:
    """
    Validate ISO 3166 alpha-2 country code format.
    
    Args:
        code: Country code to validate
        
    Returns:
        True if valid, False otherwise
    """
    if not code:
        return False
    return bool(_COUNTRY_PATTERN.match(code))


def normalize_currency_code(code: Optional[str]) -> str:
    """
    Normalize a base currency before it is used as a cache key.

    Only surrounding whitespace is stripped; case is kept as supplied and
    unknown codes are allowed through.

    Args:
        code: Raw currency code

    Returns:
        Stripped currency code

    Raises:
        InvalidCurrencyError: If code is not a string or is blank
    """
    if not isinstance(code, str) or not code.strip():
        raise InvalidCurrencyError(f"Currency code must be a non-empty string, got {code!r}")
    return code.strip()


def parse_currency_list(raw: Optional[str]) -> List[str]:
    """
    Split a comma-separated currency list, dropping blanks.

    Args:
        raw: Value like "EUR,GBP, JPY" (or None)

    Returns:
        List of stripped codes in the given order
    """
    if not raw:
        return []
    return [part.strip() for part in raw.split(",") if part.strip()]
