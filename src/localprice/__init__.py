"""
LocalPrice - Storefront Currency Conversion Service

Fetches and caches exchange rates, converts amounts between currencies
and formats them with the right symbol, for a storefront script that
shows prices in the shopper's local currency.
"""

__version__ = "1.0.0"
