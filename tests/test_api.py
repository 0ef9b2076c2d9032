# tests/test_api.py
"""
API Tests - Endpoint Tests for the JSON API

This module tests the FastAPI application against a mocked rate cache:
snapshot documents, conversions, health reporting and the mapping of
cache and conversion errors to HTTP status codes.

Files that USE this module:
- pytest (test runner executes these tests)

Files that this module USES:
- hnbrate.adapters.http.api (create_app for testing)
- fastapi.testclient (TestClient for HTTP requests)
- unittest.mock (Mock for the updater)
- pytest (testing framework)
"""
import pytest

from datetime import date, datetime, timezone
from unittest.mock import Mock

from fastapi.testclient import TestClient

from hnbrate.adapters.http.api import create_app
from hnbrate.application.cache_updater import UpdaterStatus
from hnbrate.domain.errors import CacheClosedError, SnapshotUnavailableError


@pytest.fixture
def updater(usd_eur_snapshot):
    mock_updater = Mock()
    mock_updater.latest_snapshot.return_value = usd_eur_snapshot
    mock_updater.status.return_value = UpdaterStatus(
        state="running",
        application_date=date(2017, 3, 25),
        currencies=2,
        generation=1,
        failures=0,
        last_success_at=datetime(2017, 3, 24, 12, 0, tzinfo=timezone.utc),
        last_error=None,
    )
    return mock_updater


@pytest.fixture
def client(updater):
    return TestClient(create_app(updater))


class TestRatesEndpoint:
    @pytest.mark.parametrize("path", ["/", "/rates"])
    def test_get_rates(self, client, path):
        resp = client.get(path)

        assert resp.status_code == 200
        assert resp.headers["content-type"].startswith("application/json")
        body = resp.json()
        assert body["date"] == "2017-03-25"
        assert body["rates"]["USD"] == {"buy": "6.839371", "middle": "6.859951", "sell": "6.880531"}
        assert body["rates"]["EUR"]["sell"] == "7.433037"
        assert len(body["rates"]) == 2

    def test_closed_cache(self, client, updater):
        updater.latest_snapshot.side_effect = CacheClosedError()

        resp = client.get("/")

        assert resp.status_code == 503
        assert resp.json() == {"detail": "rate cache is closed"}

    def test_not_yet_available(self, client, updater):
        updater.latest_snapshot.side_effect = SnapshotUnavailableError()

        resp = client.get("/rates")

        assert resp.status_code == 503
        assert "not available" in resp.json()["detail"]


class TestConvertEndpoint:
    @pytest.mark.parametrize("currency,rate,result", [
        ("USD", "middle", "68.599510"),
        ("EUR", "buy", "73.885730"),
        ("EUR", "sell", "74.330370"),
    ])
    def test_convert(self, client, currency, rate, result):
        resp = client.post("/convert", json={"value": 10, "currency": currency, "rate": rate})

        assert resp.status_code == 200
        body = resp.json()
        assert body["result"] == result
        assert body["currency"] == currency
        assert body["date"] == "2017-03-25"

    def test_default_rate_is_middle(self, client):
        resp = client.post("/convert", json={"value": "1", "currency": "USD"})

        assert resp.status_code == 200
        assert resp.json()["rate"] == "middle"

    def test_invalid_rate_type(self, client):
        resp = client.post("/convert", json={"value": 10, "currency": "EUR", "rate": "not-valid"})
        assert resp.status_code == 400

    def test_unknown_currency(self, client):
        resp = client.post("/convert", json={"value": 10, "currency": "WAT", "rate": "middle"})
        assert resp.status_code == 400

    @pytest.mark.parametrize("value", ["1e60", "0.0000000000001", "NaN", "Infinity"])
    def test_rejects_out_of_range_value(self, client, value):
        resp = client.post("/convert", json={"value": value, "currency": "USD", "rate": "middle"})
        assert resp.status_code == 422

    def test_large_value_within_bounds(self, client):
        resp = client.post("/convert", json={"value": "1e17", "currency": "USD"})

        assert resp.status_code == 200
        assert resp.json()["result"] == "685995100000000000.000000"

    def test_value_echoed_in_plain_notation(self, client):
        resp = client.post("/convert", json={"value": "1e2", "currency": "USD"})

        assert resp.status_code == 200
        assert resp.json()["value"] == "100"
        assert resp.json()["result"] == "685.995100"

    def test_missing_value(self, client):
        resp = client.post("/convert", json={"currency": "USD"})
        assert resp.status_code == 422

    def test_closed_cache(self, client, updater):
        updater.latest_snapshot.side_effect = CacheClosedError()

        resp = client.post("/convert", json={"value": 10, "currency": "USD"})

        assert resp.status_code == 503


class TestHealthEndpoint:
    def test_healthy(self, client):
        resp = client.get("/health")

        assert resp.status_code == 200
        body = resp.json()
        assert body["state"] == "running"
        assert body["date"] == "2017-03-25"
        assert body["generation"] == 1

    def test_without_snapshot(self, client, updater):
        updater.status.return_value = UpdaterStatus("running", None, 0, 0, 3, None, "down")

        resp = client.get("/health")

        assert resp.status_code == 503
        assert resp.json()["last_error"] == "down"

    def test_closed(self, client, updater):
        updater.status.return_value = UpdaterStatus(
            "closed", date(2017, 3, 25), 2, 1, 0, None, None
        )

        resp = client.get("/health")

        assert resp.status_code == 503
        assert resp.json()["state"] == "closed"
