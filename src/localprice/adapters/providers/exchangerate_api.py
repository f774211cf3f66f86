# src/localprice/adapters/providers/exchangerate_api.py
"""
ExchangeRate-API Source for Full Rate Tables

This module implements the client for the public exchangerate-api.com
"latest" endpoint: GET {base_url}/{BASE} returns
{"base": "USD", "rates": {"EUR": 0.85, ...}}. Any 2xx answer with a
parsable 'rates' mapping is a success; everything else is a failure.

Files that USE this module:
- localprice.app (wires the source into RateProvider)
- tests.test_providers (unit tests)

Files that this module USES:
- localprice.adapters.providers.base (RateSource interface)
- localprice.config (settings for URL and timeout)
- localprice.domain.errors (ProviderUnavailableError, MalformedPayloadError)
"""
import logging
import math
import urllib.parse
from typing import Any, Dict, Optional

import requests

from localprice.adapters.providers.base import RateSource
from localprice.config import settings
from localprice.domain.errors import MalformedPayloadError, ProviderUnavailableError
from localprice.domain.models import RateTable, freeze_rates

log = logging.getLogger(__name__)


class ExchangeRateApiSource(RateSource):
    name = "exchangerate-api"

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[int] = None,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize the rate source.
        
        Args:
            base_url: Optional custom API root (defaults to settings.rates_base_url)
            timeout: Optional HTTP timeout in seconds (defaults to settings.http_timeout_seconds)
            session: Optional requests session for connection reuse
        """
        self.base_url = (base_url or settings.rates_base_url).rstrip("/")
        self.timeout = timeout or settings.http_timeout_seconds
        self.session = session

    def url_for(self, base_currency: str) -> str:
        return f"{self.base_url}/{urllib.parse.quote(base_currency, safe='')}"

    def _get(self, url: str) -> requests.Response:
        if self.session is not None:
            return self.session.get(url, timeout=self.timeout)
        return requests.get(url, timeout=self.timeout)

    def fetch_rates(self, base_currency: str) -> RateTable:
        """
        Fetch the full rate table for a base currency.
        
        The base currency always maps to 1.0 in the result, even when the
        upstream payload leaves it out.
        
        Args:
            base_currency: Base currency code as supplied by the caller
            
        Returns:
            Read-only rate table
            
        Raises:
            ProviderUnavailableError: On timeout, connection error or non-2xx status
            MalformedPayloadError: If the body is not JSON or has no usable 'rates'
        """
        url = self.url_for(base_currency)
        try:
            log.info("Fetching exchange rates for %s from %s", base_currency, self.name)
            resp = self._get(url)
            resp.raise_for_status()
        except requests.exceptions.Timeout:
            log.warning("Rate API timeout after %d seconds (base=%s)", self.timeout, base_currency)
            raise ProviderUnavailableError(f"Rate API timeout after {self.timeout}s")
        except requests.exceptions.HTTPError as e:
            status = e.response.status_code if e.response is not None else "?"
            log.warning("Rate API HTTP error %s (base=%s)", status, base_currency)
            raise ProviderUnavailableError(f"Rate API HTTP error {status}") from e
        except requests.exceptions.RequestException as e:
            log.warning("Rate API request failed (base=%s): %s", base_currency, e)
            raise ProviderUnavailableError(f"Rate API request failed: {e}") from e

        try:
            data = resp.json()
        except ValueError as e:
            log.error("Rate API returned invalid JSON: %s", e)
            raise MalformedPayloadError(f"Rate API returned invalid JSON: {e}") from e

        rates = self.parse_rates(data, base_currency)
        log.info("Fetched %d rates for base %s", len(rates), base_currency)
        return rates

    @staticmethod
    def parse_rates(data: Any, base_currency: str) -> RateTable:
        """
        Extract and validate the 'rates' mapping from a response body.
        
        Args:
            data: Decoded JSON body
            base_currency: Base the table is relative to
            
        Returns:
            Read-only rate table with the base mapped to 1.0
            
        Raises:
            MalformedPayloadError: If 'rates' is missing, not a mapping, or holds non-positive/non-numeric values
        """
        if not isinstance(data, dict):
            log.error("Rate API unexpected response type: %r", type(data))
            raise MalformedPayloadError("Rate API returned non-dict JSON")

        raw = data.get("rates")
        if not isinstance(raw, dict):
            log.error("Rate API response missing 'rates' mapping")
            raise MalformedPayloadError("Rate API response missing 'rates' mapping")

        rates: Dict[str, float] = {}
        for code, value in raw.items():
            # bool is an int subclass; reject it explicitly
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise MalformedPayloadError(f"Rate for {code} is not a number: {value!r}")
            value = float(value)
            if not math.isfinite(value) or value <= 0:
                raise MalformedPayloadError(f"Rate for {code} is not positive: {value!r}")
            rates[str(code)] = value

        rates.setdefault(base_currency, 1.0)
        return freeze_rates(rates)
