# src/localprice/application/rate_cache.py
"""
Rate Cache - In-process Store of Fetched Rate Tables

One CacheEntry per base currency string (case-sensitive, as supplied).
Entries are never evicted on expiry: an expired entry is still the stale
fallback when upstream fails. Only clear() removes them.

Files that USE this module:
- localprice.application.rates_service (RateProvider reads and replaces entries)
- localprice.application.health (snapshot for the health report)
- tests.test_rate_cache (unit tests)

Files that this module USES:
- localprice.domain.models (CacheEntry)
"""
from __future__ import annotations

import logging
import threading
from typing import Dict, Optional

from localprice.domain.models import CacheEntry

logger = logging.getLogger(__name__)


class RateCache:
    """Thread-safe map of base currency -> CacheEntry with whole-value replacement."""

    def __init__(self):
        self._entries: Dict[str, CacheEntry] = {}
        self._lock = threading.Lock()

    def get(self, base: str) -> Optional[CacheEntry]:
        with self._lock:
            return self._entries.get(base)

    def set(self, base: str, entry: CacheEntry) -> None:
        with self._lock:
            self._entries[base] = entry

    def clear(self) -> None:
        with self._lock:
            count = len(self._entries)
            self._entries = {}
        logger.info("Rate cache cleared (%d entries dropped)", count)

    def snapshot(self) -> Dict[str, CacheEntry]:
        """Shallow copy of all entries, for reporting."""
        with self._lock:
            return dict(self._entries)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
