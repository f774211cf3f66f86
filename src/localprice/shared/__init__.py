"""
Shared Utilities - Cross-cutting Concerns

This package contains shared utilities used across all layers:
- Validation
- Logging configuration
"""

from localprice.shared.validators import (
    normalize_currency_code,
    parse_currency_list,
    validate_country_code,
    validate_currency_code,
)
from localprice.shared.logging_conf import setup_logging

__all__ = [
    "normalize_currency_code",
    "parse_currency_list",
    "validate_country_code",
    "validate_currency_code",
    "setup_logging",
]
