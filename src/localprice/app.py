# src/localprice/app.py
"""
Application Entry Point - Service Wiring and Startup

This module serves as the composition root for the LocalPrice service.
It builds the rate source, cache, provider and currency facade once,
attaches them to the FastAPI app, and starts uvicorn.

Files that USE this module:
- python -m localprice (module entry point)
- localprice console script
- tests.test_api (create_app with stub source and fake clock)

Files that this module USES:
- localprice.shared.logging_conf (setup_logging for logging configuration)
- localprice.config (settings for configuration management)
- localprice.adapters.providers.exchangerate_api (upstream rate source)
- localprice.application.* (RateCache, RateProvider, CurrencyService, HealthChecker)
- localprice.adapters.http (router and error handlers)
"""

from __future__ import annotations  # Enable postponed evaluation of annotations for forward references

import logging  # Standard library for logging messages and errors
from typing import Optional  # Type hints for optional values

import uvicorn  # ASGI server
from fastapi import FastAPI  # Web framework for the public rate endpoint

from localprice import __version__
from localprice.adapters.http import register_error_handlers, router
from localprice.adapters.providers.base import RateSource
from localprice.adapters.providers.exchangerate_api import ExchangeRateApiSource
from localprice.application.health import HealthChecker
from localprice.application.rate_cache import RateCache
from localprice.application.rates_service import Clock, CurrencyService, RateProvider, utc_now
from localprice.config.settings import Settings
from localprice.domain.currencies import registry
from localprice.shared.logging_conf import setup_logging

logger = logging.getLogger(__name__)


def create_app(
    settings_override: Optional[Settings] = None,
    source: Optional[RateSource] = None,
    clock: Clock = utc_now,
) -> FastAPI:
    """
    Application factory.
    
    Args:
        settings_override: Settings instance to use instead of the global one (tests)
        source: Upstream rate source (defaults to ExchangeRateApiSource)
        clock: Clock for cache freshness checks
        
    Returns:
        Configured FastAPI application
    """
    if settings_override is None:
        from localprice.config import settings as settings_override
    settings = settings_override
    
    source = source or ExchangeRateApiSource(
        base_url=settings.rates_base_url,
        timeout=settings.http_timeout_seconds,
    )
    provider = RateProvider(
        source=source,
        cache=RateCache(),
        cache_duration=settings.cache_duration,
        clock=clock,
    )
    currency_service = CurrencyService(provider, registry)
    
    app = FastAPI(title="LocalPrice", version=__version__)
    app.state.settings = settings
    app.state.currency_service = currency_service
    app.state.health_checker = HealthChecker(provider, registry)
    
    register_error_handlers(app)
    app.include_router(router)
    
    logger.info(
        "LocalPrice app created (source=%s, cache=%sm, default base=%s)",
        getattr(source, "name", type(source).__name__),
        settings.rates_cache_minutes,
        settings.default_base_currency,
    )
    return app


def main() -> None:
    """
    Start the HTTP service.
    
    This function:
    1. Loads settings and sets up logging
    2. Builds the application via create_app()
    3. Serves it with uvicorn on HOST:PORT
    """
    from localprice.config import settings
    
    setup_logging(
        level=logging.INFO,
        log_file=settings.log_file,
        log_dir=settings.log_dir,
        max_bytes=settings.log_max_bytes,
        backup_count=settings.log_backup_count,
        log_stdout=settings.log_stdout,
    )
    
    app = create_app(settings)
    logger.info("Starting LocalPrice on %s:%d", settings.host, settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    main()
