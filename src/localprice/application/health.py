# src/localprice/application/health.py
"""
Health Checker - Cache and Registry Diagnostics

Reports what the rate cache holds (per base: fetch time, age, freshness)
and checks the currency registry is consistent. Never calls upstream, so
it is safe to poll from a load balancer.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional

from localprice.application.rates_service import RateProvider, is_fresh
from localprice.domain.currencies import SUFFIX_CURRENCIES, CurrencyRegistry

logger = logging.getLogger(__name__)


@dataclass
class HealthStatus:
    """Represents the health status of a component."""
    is_healthy: bool
    message: str
    last_check: datetime
    details: Optional[Dict[str, Any]] = None


class HealthChecker:
    """Health checks over the in-process rate cache and currency registry."""
    
    def __init__(self, provider: RateProvider, currencies: CurrencyRegistry):
        self.provider = provider
        self.currencies = currencies
    
    def check_rate_cache(self) -> HealthStatus:
        """Describe cached rate tables; an empty or stale cache is still healthy."""
        now = self.provider.clock()
        entries = self.provider.cache.snapshot()
        details = {
            base: {
                "fetched_at": entry.fetched_at.isoformat(),
                "age_seconds": int((now - entry.fetched_at).total_seconds()),
                "fresh": is_fresh(entry, now, self.provider.cache_duration),
                "rates_count": len(entry.rates),
            }
            for base, entry in entries.items()
        }
        stale = [base for base, info in details.items() if not info["fresh"]]
        if stale:
            message = f"{len(entries)} base(s) cached, stale: {', '.join(sorted(stale))}"
        else:
            message = f"{len(entries)} base(s) cached"
        return HealthStatus(is_healthy=True, message=message, last_check=now, details=details)
    
    def check_registry(self) -> HealthStatus:
        """Every suffix currency must have a descriptor, or it would render without a symbol."""
        now = self.provider.clock()
        missing = sorted(code for code in SUFFIX_CURRENCIES if not self.currencies.is_supported(code))
        if missing:
            logger.error("Suffix currencies missing from registry: %s", missing)
            return HealthStatus(
                is_healthy=False,
                message=f"Suffix currencies missing from registry: {', '.join(missing)}",
                last_check=now,
            )
        return HealthStatus(
            is_healthy=True,
            message=f"{len(self.currencies.supported_codes())} currencies registered",
            last_check=now,
        )
    
    def get_overall_health(self) -> Dict[str, Any]:
        """Aggregate all checks; degraded if any check fails."""
        checks = {
            "rate_cache": self.check_rate_cache(),
            "registry": self.check_registry(),
        }
        failed_checks = [name for name, check in checks.items() if not check.is_healthy]
        overall_healthy = not failed_checks
        
        return {
            "overall_healthy": overall_healthy,
            "status": "ok" if overall_healthy else "degraded",
            "failed_components": failed_checks,
            "timestamp": self.provider.clock().isoformat(),
            "checks": {
                name: {
                    "healthy": check.is_healthy,
                    "message": check.message,
                    "last_check": check.last_check.isoformat(),
                    "details": check.details,
                }
                for name, check in checks.items()
            },
        }
