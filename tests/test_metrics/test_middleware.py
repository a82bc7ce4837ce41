"""Tests for the Prometheus request middleware."""

from __future__ import annotations

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from prometheus_client import CollectorRegistry

from iotex_chainmeta_exporter.metrics.middleware import PrometheusMiddleware

_COUNT = "iotex_chainmeta_exporter_http_requests_total"


@pytest.fixture
def _app_with_metrics() -> tuple[FastAPI, CollectorRegistry]:
    registry = CollectorRegistry()
    app = FastAPI()
    app.add_middleware(PrometheusMiddleware, registry=registry)

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    return app, registry


class TestPrometheusMiddleware:
    """Tests for PrometheusMiddleware."""

    def test_increments_request_count(self, _app_with_metrics: tuple) -> None:
        app, registry = _app_with_metrics
        client = TestClient(app)
        client.get("/health")
        value = registry.get_sample_value(
            _COUNT, {"method": "GET", "path": "/health", "status_code": "200"}
        )
        assert value == 1.0

    def test_records_duration(self, _app_with_metrics: tuple) -> None:
        app, registry = _app_with_metrics
        client = TestClient(app)
        client.get("/health")
        value = registry.get_sample_value(
            "iotex_chainmeta_exporter_http_request_duration_seconds_count",
            {"method": "GET", "path": "/health"},
        )
        assert value == 1.0

    def test_unknown_paths_folded(self, _app_with_metrics: tuple) -> None:
        app, registry = _app_with_metrics
        client = TestClient(app)
        client.get("/wp-admin")
        client.get("/random/123")
        value = registry.get_sample_value(
            _COUNT, {"method": "GET", "path": "other", "status_code": "404"}
        )
        assert value == 2.0
        assert (
            registry.get_sample_value(
                _COUNT, {"method": "GET", "path": "/wp-admin", "status_code": "404"}
            )
            is None
        )

    def test_multiple_requests(self, _app_with_metrics: tuple) -> None:
        app, registry = _app_with_metrics
        client = TestClient(app)
        for _ in range(3):
            client.get("/health")
        value = registry.get_sample_value(
            _COUNT, {"method": "GET", "path": "/health", "status_code": "200"}
        )
        assert value == 3.0
