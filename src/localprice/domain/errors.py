# src/localprice/domain/errors.py
"""
Domain Errors - Business Logic Exceptions

This module defines domain-specific exceptions raised by the rate and
conversion core. Callers (HTTP endpoints, admin preview) decide how to
present them; the core only classifies and raises.
"""
from typing import Optional


class DomainError(Exception):
    """Base exception for domain errors."""
    pass


class InvalidCurrencyError(DomainError, ValueError):
    """Raised when a currency code is empty or not a string."""
    pass


class ProviderUnavailableError(DomainError):
    """Raised by a rate source when the upstream cannot be reached or answers with a non-2xx status."""
    pass


class MalformedPayloadError(ProviderUnavailableError):
    """Raised when the upstream answered 2xx but the body has no usable 'rates' mapping."""
    pass


class UpstreamError(DomainError):
    """
    Raised when rates cannot be fetched and there is no cached table to fall back on.

    Attributes:
        base_currency: Base currency that was requested
    """

    def __init__(self, base_currency: str, message: Optional[str] = None):
        self.base_currency = base_currency
        super().__init__(message or f"Failed to fetch exchange rates for {base_currency}")


class RateNotFoundError(DomainError):
    """
    Raised when the target currency is absent from a retrieved rate table.

    Attributes:
        base_currency: Base of the rate table that was searched
        target_currency: Currency that was missing
    """

    def __init__(self, base_currency: str, target_currency: str):
        self.base_currency = base_currency
        self.target_currency = target_currency
        super().__init__(f"Exchange rate not found for {target_currency}")
