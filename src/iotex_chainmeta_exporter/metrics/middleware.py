"""Prometheus HTTP request metrics middleware for the exporter's own API.

Tracks:
- ``iotex_chainmeta_exporter_http_requests_total`` (counter) by method, path, status
- ``iotex_chainmeta_exporter_http_request_duration_seconds`` (histogram) by method, path

Paths outside the known routes are folded into ``other`` so stray requests
cannot grow the label set.
"""

from __future__ import annotations

import time
from typing import TYPE_CHECKING

from prometheus_client import Counter, Histogram
from starlette.middleware.base import BaseHTTPMiddleware

from iotex_chainmeta_exporter.metrics.descriptors import NAMESPACE

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from prometheus_client import CollectorRegistry
    from starlette.requests import Request
    from starlette.responses import Response

_PREFIX = f"{NAMESPACE}_exporter"
_OTHER_PATH = "other"

_LABELS = ("method", "path", "status_code")
_DURATION_LABELS = ("method", "path")


class PrometheusMiddleware(BaseHTTPMiddleware):
    """Starlette middleware that records request count and duration."""

    def __init__(
        self,
        app: object,
        *,
        registry: CollectorRegistry,
        known_paths: Iterable[str] = ("/", "/metrics", "/health"),
    ) -> None:
        super().__init__(app)  # type: ignore[arg-type]
        self._known_paths = frozenset(known_paths)
        self._request_count = Counter(
            f"{_PREFIX}_http_requests_total",
            "Total HTTP requests served by the exporter",
            _LABELS,
            registry=registry,
        )
        self._request_duration = Histogram(
            f"{_PREFIX}_http_request_duration_seconds",
            "Exporter HTTP request duration in seconds",
            _DURATION_LABELS,
            registry=registry,
        )

    async def dispatch(self, request: Request, call_next: Callable) -> Response:  # type: ignore[type-arg]
        """Wrap each request with timing and counting."""
        method = request.method
        path = request.url.path
        if path not in self._known_paths:
            path = _OTHER_PATH
        start = time.monotonic()

        response: Response = await call_next(request)

        duration = time.monotonic() - start
        self._request_count.labels(
            method=method,
            path=path,
            status_code=str(response.status_code),
        ).inc()
        self._request_duration.labels(method=method, path=path).observe(duration)

        return response
