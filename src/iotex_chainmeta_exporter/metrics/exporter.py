"""Exporter self-metrics: build info, scrape duration and scrape errors.

These live in one process-wide registry, apart from the per-scrape chain
gauges:

- ``iotex_chainmeta_exporter_build_info`` gauge (version, revision, build_time)
- ``iotex_chainmeta_exporter_scrape_duration_seconds`` histogram
- ``iotex_chainmeta_exporter_scrape_errors_total`` counter-vec (cause)
"""

from __future__ import annotations

import time
from contextlib import contextmanager
from typing import TYPE_CHECKING

from prometheus_client import CollectorRegistry, Counter, Gauge, Histogram

from iotex_chainmeta_exporter import __version__
from iotex_chainmeta_exporter.metrics.descriptors import NAMESPACE

if TYPE_CHECKING:
    from collections.abc import Iterator

_PREFIX = f"{NAMESPACE}_exporter"

_BUILD_LABELS = ("version", "revision", "build_time")
_ERROR_LABELS = ("cause",)


class ExporterMetrics:
    """Owns the exporter's own Prometheus registry and metrics."""

    def __init__(
        self,
        registry: CollectorRegistry | None = None,
        *,
        version: str = __version__,
        revision: str = "N/A",
        build_time: str = "N/A",
    ) -> None:
        self._registry = registry or CollectorRegistry()

        self._build_info = Gauge(
            f"{_PREFIX}_build_info",
            "A metric with a constant '1' value labeled by version, revision and build time",
            _BUILD_LABELS,
            registry=self._registry,
        )
        self._build_info.labels(version=version, revision=revision, build_time=build_time).set(1)

        self._scrape_duration = Histogram(
            f"{_PREFIX}_scrape_duration_seconds",
            "Duration of chain metadata scrapes against the node",
            registry=self._registry,
        )
        self._scrape_errors = Counter(
            f"{_PREFIX}_scrape_errors_total",
            "Chain metadata scrapes that failed, by cause",
            _ERROR_LABELS,
            registry=self._registry,
        )

    @property
    def registry(self) -> CollectorRegistry:
        """Return the underlying Prometheus registry."""
        return self._registry

    def record_scrape_error(self, cause: str) -> None:
        """Count one failed scrape."""
        self._scrape_errors.labels(cause=cause).inc()

    @contextmanager
    def track_scrape(self) -> Iterator[None]:
        """Track the duration of one scrape, successful or not."""
        start = time.monotonic()
        try:
            yield
        finally:
            self._scrape_duration.observe(time.monotonic() - start)
