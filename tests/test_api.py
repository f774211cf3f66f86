# tests/test_api.py
"""
API Tests - Endpoint Tests for the Public Rate and Conversion API

This module drives the FastAPI app through TestClient with a stub rate
source and fake clock, so no network access happens.

Files that USE this module:
- pytest (test runner executes these tests)

Files that this module USES:
- localprice.app (create_app)
- localprice.config.settings (Settings overrides)
- tests.conftest (StubSource, FakeClock)
- fastapi.testclient (TestClient)
"""
import logging

import pytest  # Testing framework for writing and running tests

from unittest.mock import Mock  # Mock objects for forcing failures

from fastapi.testclient import TestClient  # In-process HTTP client for the ASGI app

from localprice.app import create_app
from localprice.config.settings import Settings


@pytest.fixture
def settings():
    return Settings(admin_token="s3cret-token", cors_allow_origin="*")


@pytest.fixture
def client(settings, source, clock):
    app = create_app(settings, source=source, clock=clock)
    return TestClient(app, raise_server_exceptions=False)


class TestExchangeRates:
    def test_success(self, client, source):
        resp = client.get("/api/exchange-rates", params={"base": "USD"})

        assert resp.status_code == 200
        body = resp.json()
        assert body["success"] is True
        assert body["base"] == "USD"
        assert body["rates"]["EUR"] == 0.8567
        assert body["currencies"]["EUR"]["symbol"] == "€"
        assert isinstance(body["timestamp"], int)
        assert source.calls == ["USD"]

    def test_headers(self, client):
        resp = client.get("/api/exchange-rates")

        assert resp.headers["cache-control"] == "public, max-age=3600"
        assert resp.headers["access-control-allow-origin"] == "*"
        assert resp.headers["access-control-allow-methods"] == "GET, OPTIONS"

    def test_default_base(self, client, source):
        client.get("/api/exchange-rates")
        assert source.calls == ["USD"]

    def test_filtered_currencies(self, client):
        resp = client.get("/api/exchange-rates", params={"base": "USD", "currencies": "EUR,GBP,ZZZ"})

        assert resp.json()["rates"] == {"EUR": 0.8567, "GBP": 0.79}

    def test_blank_entries_in_filter_ignored(self, client):
        resp = client.get("/api/exchange-rates", params={"currencies": "EUR,, "})
        assert resp.json()["rates"] == {"EUR": 0.8567}

    def test_second_request_served_from_cache(self, client, source):
        client.get("/api/exchange-rates")
        client.get("/api/exchange-rates")
        assert source.calls == ["USD"]

    def test_upstream_failure_is_generic(self, client, source):
        source.fail = True

        resp = client.get("/api/exchange-rates", params={"base": "USD"})

        assert resp.status_code == 500
        assert resp.json() == {"success": False, "error": "Failed to fetch exchange rates"}
        assert resp.headers["access-control-allow-origin"] == "*"
        assert "cache-control" not in resp.headers

    def test_stale_rates_served_when_upstream_down(self, client, source, clock):
        client.get("/api/exchange-rates")
        clock.advance(hours=3)
        source.fail = True

        resp = client.get("/api/exchange-rates")

        assert resp.status_code == 200
        assert resp.json()["rates"]["EUR"] == 0.8567

    def test_preflight(self, client):
        resp = client.options("/api/exchange-rates")

        assert resp.status_code == 204
        assert resp.headers["access-control-allow-headers"] == "Content-Type"

    def test_custom_cache_minutes(self, source, clock):
        app = create_app(Settings(rates_cache_minutes=30), source=source, clock=clock)
        resp = TestClient(app).get("/api/exchange-rates")
        assert resp.headers["cache-control"] == "public, max-age=1800"


class TestConvert:
    def test_convert_rounded(self, client):
        resp = client.get("/api/convert", params={"amount": 100, "from": "USD", "to": "EUR", "round": "true"})

        assert resp.status_code == 200
        body = resp.json()
        assert body["converted"] == 85.67
        assert body["formatted"] == "85.67€"

    def test_convert_identity(self, client, source):
        resp = client.get("/api/convert", params={"amount": 10.555, "from": "GBP", "to": "GBP", "round": "true"})

        assert resp.json()["converted"] == 10.555
        assert source.calls == []

    def test_missing_rate(self, client):
        resp = client.get("/api/convert", params={"amount": 100, "from": "USD", "to": "XYZ"})

        assert resp.status_code == 404
        assert resp.json() == {"success": False, "error": "Exchange rate not found for XYZ"}

    def test_bad_amount(self, client):
        resp = client.get("/api/convert", params={"amount": "lots", "from": "USD", "to": "EUR"})

        assert resp.status_code == 422
        assert resp.json()["success"] is False

    def test_blank_from_rejected(self, client):
        resp = client.get("/api/convert", params={"amount": 1, "from": "  ", "to": "EUR"})
        assert resp.status_code == 400

    @pytest.mark.parametrize("amount", ["nan", "inf", "-inf"])
    def test_non_finite_amount_rejected(self, client, amount):
        resp = client.get("/api/convert", params={"amount": amount, "from": "USD", "to": "USD"})

        assert resp.status_code == 422
        assert resp.json()["success"] is False

    def test_unknown_route_uses_failure_body(self, client):
        resp = client.get("/api/nope")

        assert resp.status_code == 404
        assert resp.json()["success"] is False


class TestLookups:
    def test_format(self, client):
        resp = client.get("/api/format", params={"amount": 5, "currency": "JPY"})
        assert resp.json() == {"success": True, "formatted": "¥5.00"}

    @pytest.mark.parametrize("amount", ["nan", "inf", "-inf"])
    def test_format_non_finite_amount_rejected(self, client, amount):
        resp = client.get("/api/format", params={"amount": amount, "currency": "USD"})

        assert resp.status_code == 422
        assert resp.json()["success"] is False

    def test_currencies(self, client):
        body = client.get("/api/currencies").json()
        assert len(body["currencies"]) == 21

    def test_currency_by_country(self, client):
        assert client.get("/api/currency-by-country/se").json() == {"country": "SE", "currency": "SEK"}
        assert client.get("/api/currency-by-country/AQ").json()["currency"] == "USD"

    @pytest.mark.parametrize("country", ["USA", "1X", "d"])
    def test_currency_by_country_invalid_code(self, client, country):
        resp = client.get(f"/api/currency-by-country/{country}")

        assert resp.status_code == 400
        assert resp.json()["success"] is False
        assert "Invalid country code" in resp.json()["error"]


class TestAdmin:
    def test_clear_cache(self, client, source):
        client.get("/api/exchange-rates")

        resp = client.post("/api/cache/clear", headers={"X-Admin-Token": "s3cret-token"})
        client.get("/api/exchange-rates")

        assert resp.json() == {"success": True}
        assert source.calls == ["USD", "USD"]

    @pytest.mark.parametrize("headers", [{}, {"X-Admin-Token": "wrong"}])
    def test_clear_cache_forbidden(self, client, headers):
        resp = client.post("/api/cache/clear", headers=headers)

        assert resp.status_code == 403
        assert resp.json() == {"success": False, "error": "cache clearing not permitted"}
        assert resp.headers["access-control-allow-origin"] == "*"

    def test_clear_cache_disabled_without_token(self, source, clock):
        app = create_app(Settings(admin_token=""), source=source, clock=clock)
        resp = TestClient(app).post("/api/cache/clear", headers={"X-Admin-Token": ""})
        assert resp.status_code == 403

    def test_health(self, client, clock):
        client.get("/api/exchange-rates")
        clock.advance(hours=2)

        body = client.get("/health").json()

        assert body["status"] == "ok"
        cache = body["checks"]["rate_cache"]["details"]["USD"]
        assert cache["fresh"] is False
        assert cache["age_seconds"] == 7200


class TestServerErrors:
    def test_unhandled_exception_logged_with_traceback(self, client, caplog):
        client.app.state.currency_service.provider.get_rates = Mock(side_effect=KeyError("boom"))

        with caplog.at_level(logging.ERROR, logger="localprice.adapters.http.errors"):
            resp = client.get("/api/exchange-rates")

        assert resp.status_code == 500
        assert resp.json() == {"success": False, "error": "An unexpected error occurred."}
        record = next(r for r in caplog.records if r.getMessage() == "unhandled exception")
        assert record.exc_info is not None
        assert record.exc_info[0] is KeyError
