# src/localprice/adapters/http/api.py
"""
HTTP API - Public Rate Endpoint and Conversion Helpers

Endpoints called from the storefront script and the admin preview:

    GET     /api/exchange-rates          -> rates for ?base=, narrowed by ?currencies=
    OPTIONS /api/exchange-rates          -> CORS preflight
    GET     /api/convert                 -> convert ?amount= from ?from= to ?to=
    GET     /api/format                  -> render ?amount= in ?currency=
    GET     /api/currencies              -> supported currency registry
    GET     /api/currency-by-country/XX  -> default currency for a country
    POST    /api/cache/clear             -> drop cached rates (X-Admin-Token)
    GET     /health                      -> cache report

Handlers are plain functions: the upstream fetch blocks, so FastAPI runs
them in its threadpool.

Files that USE this module:
- localprice.app (includes the router)
- tests.test_api (endpoint tests)

Files that this module USES:
- localprice.application.rates_service (CurrencyService)
- localprice.application.health (HealthChecker)
- localprice.shared.validators (parse_currency_list)
"""
from __future__ import annotations

import logging
import secrets
import time
from typing import Optional

from fastapi import APIRouter, Depends, Header, HTTPException, Query, Request, Response
from fastapi.responses import JSONResponse

from localprice.application.health import HealthChecker
from localprice.application.rates_service import CurrencyService
from localprice.config.settings import Settings
from localprice.shared.validators import parse_currency_list, validate_country_code

logger = logging.getLogger(__name__)

router = APIRouter()


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_currency_service(request: Request) -> CurrencyService:
    return request.app.state.currency_service


def get_health_checker(request: Request) -> HealthChecker:
    return request.app.state.health_checker


def cors_headers(settings: Settings) -> dict:
    return {
        "Access-Control-Allow-Origin": settings.cors_allow_origin,
        "Access-Control-Allow-Methods": "GET, OPTIONS",
        "Access-Control-Allow-Headers": "Content-Type",
    }


@router.get("/api/exchange-rates", summary="Exchange rates for a base currency")
def exchange_rates(
    base: Optional[str] = Query(None, description="Base currency (defaults to DEFAULT_BASE_CURRENCY)"),
    currencies: Optional[str] = Query(None, description="Comma-separated codes to include"),
    settings: Settings = Depends(get_settings),
    svc: CurrencyService = Depends(get_currency_service),
) -> JSONResponse:
    result = svc.get_exchange_rates(base or settings.default_base_currency, parse_currency_list(currencies))
    headers = cors_headers(settings)
    headers["Cache-Control"] = f"public, max-age={settings.public_cache_max_age}"
    return JSONResponse(
        content={
            "success": True,
            "base": result["base"],
            "rates": result["rates"],
            "currencies": svc.currencies.as_dict(),
            "timestamp": int(time.time() * 1000),
        },
        headers=headers,
    )


@router.options("/api/exchange-rates", include_in_schema=False)
def exchange_rates_preflight(settings: Settings = Depends(get_settings)) -> Response:
    return Response(status_code=204, headers=cors_headers(settings))


@router.get("/api/convert", summary="Convert an amount between currencies")
def convert(
    amount: float = Query(..., allow_inf_nan=False),
    from_currency: str = Query(..., alias="from", min_length=1),
    to_currency: str = Query(..., alias="to", min_length=1),
    round_result: bool = Query(False, alias="round"),
    settings: Settings = Depends(get_settings),
    svc: CurrencyService = Depends(get_currency_service),
) -> JSONResponse:
    converted = svc.convert_currency(amount, from_currency, to_currency, round_result)
    return JSONResponse(
        content={
            "success": True,
            "amount": amount,
            "from": from_currency,
            "to": to_currency,
            "converted": converted,
            "formatted": svc.format_price(converted, to_currency),
        },
        headers=cors_headers(settings),
    )


@router.get("/api/format", summary="Format an amount with its currency symbol")
def format_amount(
    amount: float = Query(..., allow_inf_nan=False),
    currency: str = Query(..., min_length=1),
    settings: Settings = Depends(get_settings),
    svc: CurrencyService = Depends(get_currency_service),
) -> JSONResponse:
    return JSONResponse(
        content={"success": True, "formatted": svc.format_price(amount, currency)},
        headers=cors_headers(settings),
    )


@router.get("/api/currencies", summary="Supported currencies")
def list_currencies(svc: CurrencyService = Depends(get_currency_service)) -> dict:
    return {"success": True, "currencies": svc.currencies.as_dict()}


@router.get("/api/currency-by-country/{country_code}", summary="Default currency for a country")
def currency_by_country(country_code: str, svc: CurrencyService = Depends(get_currency_service)) -> dict:
    country = country_code.strip().upper()
    if not validate_country_code(country):
        raise HTTPException(status_code=400, detail=f"Invalid country code: {country_code!r}")
    return {"country": country, "currency": svc.get_currency_by_country(country)}


@router.post("/api/cache/clear", summary="Drop all cached rate tables")
def clear_cache(
    x_admin_token: Optional[str] = Header(None),
    settings: Settings = Depends(get_settings),
    svc: CurrencyService = Depends(get_currency_service),
) -> dict:
    if not settings.admin_token or not x_admin_token or not secrets.compare_digest(
        x_admin_token, settings.admin_token
    ):
        raise HTTPException(status_code=403, detail="cache clearing not permitted")
    svc.clear_cache()
    logger.info("Rate cache cleared via admin endpoint")
    return {"success": True}


@router.get("/health", summary="Service health and cache report")
def health(checker: HealthChecker = Depends(get_health_checker)) -> dict:
    return checker.get_overall_health()
