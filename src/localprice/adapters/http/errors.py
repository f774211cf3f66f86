# src/localprice/adapters/http/errors.py
"""
HTTP Error Handlers - Domain Errors to JSON Responses

Maps the domain error taxonomy onto status codes and a uniform
{"success": false, "error": ...} body. Upstream transport details are
logged, never returned.

Files that USE this module:
- localprice.app (registers handlers on the FastAPI app)

Files that this module USES:
- localprice.domain.errors (error taxonomy)
"""
import logging

from fastapi import Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette import status
from starlette.exceptions import HTTPException as StarletteHTTPException

from localprice.domain.errors import InvalidCurrencyError, RateNotFoundError, UpstreamError

logger = logging.getLogger(__name__)


def _cors_headers(request: Request) -> dict:
    settings = request.app.state.settings
    return {"Access-Control-Allow-Origin": settings.cors_allow_origin}


def _failure(request: Request, status_code: int, error: str, headers=None, **extra) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "error": error, **extra},
        headers={**(headers or {}), **_cors_headers(request)},
    )


def upstream_error_handler(request: Request, exc: UpstreamError):  # type: ignore
    logger.error("Rate request failed for %s: %s", exc.base_currency, exc.__cause__ or exc)
    return _failure(request, status.HTTP_500_INTERNAL_SERVER_ERROR, "Failed to fetch exchange rates")


def rate_not_found_handler(request: Request, exc: RateNotFoundError):  # type: ignore
    return _failure(request, status.HTTP_404_NOT_FOUND, str(exc))


def invalid_currency_handler(request: Request, exc: InvalidCurrencyError):  # type: ignore
    return _failure(request, status.HTTP_400_BAD_REQUEST, str(exc))


def http_error_handler(request: Request, exc: StarletteHTTPException):  # type: ignore
    return _failure(request, exc.status_code, str(exc.detail), headers=exc.headers)


def validation_error_handler(request: Request, exc: RequestValidationError):  # type: ignore
    return _failure(
        request,
        422,
        "validation_error",
        detail=jsonable_encoder(exc.errors()),
    )


def server_error_handler(request: Request, exc: Exception):  # type: ignore
    logger.error("unhandled exception", exc_info=exc)
    return _failure(request, status.HTTP_500_INTERNAL_SERVER_ERROR, "An unexpected error occurred.")


def register_error_handlers(app) -> None:
    app.add_exception_handler(UpstreamError, upstream_error_handler)
    app.add_exception_handler(RateNotFoundError, rate_not_found_handler)
    app.add_exception_handler(InvalidCurrencyError, invalid_currency_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, server_error_handler)
