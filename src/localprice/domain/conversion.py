# src/localprice/domain/conversion.py
"""
Conversion Engine - Currency Conversion and Price Formatting

Pure functions for turning an amount in one currency into another using a
rate table, and for rendering an amount with its currency symbol. No I/O;
the rate table is supplied by the caller.

Files that USE this module:
- localprice.application.rates_service (CurrencyService.convert_currency / format_price)
- localprice.adapters.http.api (convert and format endpoints, via CurrencyService)
- tests.test_conversion (unit tests)

Files that this module USES:
- localprice.domain.currencies (registry for symbols and placement)
- localprice.domain.errors (RateNotFoundError)
"""
from __future__ import annotations

import math
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional

from localprice.domain.currencies import CurrencyRegistry, registry as default_registry
from localprice.domain.errors import RateNotFoundError
from localprice.domain.models import Placement, RateTable

_CENT = Decimal("0.01")
_NO_CENTS_ABOVE = 1e15


def round_cents(value: float) -> float:
    """
    Round to 2 decimal places, halves away from zero.

    The float is first taken at its shortest repr so 85.66999999999999
    (from 100 * 0.8567) lands on 85.67 rather than binary noise deciding.

    Args:
        value: Amount to round

    Returns:
        Amount rounded at the cent boundary
    """
    # Non-finite values and floats this large carry no cent digits
    if not math.isfinite(value) or abs(value) >= _NO_CENTS_ABOVE:
        return value
    return float(Decimal(repr(value)).quantize(_CENT, rounding=ROUND_HALF_UP))


def convert(
    amount: float,
    from_currency: str,
    to_currency: str,
    rates: Optional[RateTable],
    round_result: bool = False,
) -> float:
    """
    Convert an amount using a rate table keyed relative to from_currency.

    Identical currencies short-circuit: the amount comes back untouched and
    rounding is not applied.

    Args:
        amount: Amount expressed in from_currency
        from_currency: Base currency of the rate table
        to_currency: Target currency
        rates: Rate table for base from_currency (unused when currencies match)
        round_result: Round to cents when True

    Returns:
        Converted amount

    Raises:
        RateNotFoundError: If to_currency is absent from the rate table
    """
    if from_currency == to_currency:
        return amount

    rate = (rates or {}).get(to_currency)
    if not rate:
        raise RateNotFoundError(from_currency, to_currency)

    converted = amount * rate
    if round_result:
        return round_cents(converted)
    return converted


def format_price(amount: float, currency_code: str, currencies: Optional[CurrencyRegistry] = None) -> str:
    """
    Render an amount with its currency symbol.

    Always two fraction digits, '.' as decimal point, no grouping.
    Unsupported codes render as "12.50 XYZ".

    Args:
        amount: Amount to render
        currency_code: Currency code to look up
        currencies: Registry to consult (defaults to the global registry)

    Returns:
        Formatted price string
    """
    descriptor = (currencies or default_registry).describe(currency_code)
    formatted = f"{amount:.2f}"

    if descriptor is None:
        return f"{formatted} {currency_code}"
    if descriptor.placement is Placement.SUFFIX:
        return f"{formatted}{descriptor.symbol}"
    return f"{descriptor.symbol}{formatted}"
