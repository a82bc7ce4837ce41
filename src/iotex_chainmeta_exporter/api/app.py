"""FastAPI application factory for the ``/metrics`` endpoint."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, Any

from fastapi import FastAPI
from prometheus_client import generate_latest
from starlette.responses import Response

from iotex_chainmeta_exporter import __version__
from iotex_chainmeta_exporter.chain.client import ChainMetaClient
from iotex_chainmeta_exporter.config.settings import AppConfig
from iotex_chainmeta_exporter.metrics.collector import ChainMetaCollector
from iotex_chainmeta_exporter.metrics.exporter import ExporterMetrics
from iotex_chainmeta_exporter.metrics.middleware import PrometheusMiddleware

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from iotex_chainmeta_exporter.errors.exporter_errors import ScrapeError

logger = logging.getLogger(__name__)

_CONTENT_TYPE = "text/plain; version=0.0.4; charset=utf-8"
_ERROR_HEADER = "X-Scrape-Error"


def _error_comment(error: ScrapeError) -> bytes:
    """Render a scrape failure as one exposition comment line."""
    message = " ".join(error.message.split())
    return f"# scrape failed: {error.code} ({error.cause}): {message}\n".encode()


@asynccontextmanager
async def _lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Startup / shutdown lifecycle hooks."""
    collector: ChainMetaCollector = app.state.collector
    logger.info(
        "Chain meta exporter %s serving %d gauges for %s",
        __version__,
        len(collector.describe()),
        collector.endpoint,
    )
    try:
        yield
    finally:
        logger.info("Chain meta exporter shut down")


def create_app(
    *,
    config: AppConfig | None = None,
    collector: ChainMetaCollector | None = None,
    metrics: ExporterMetrics | None = None,
) -> FastAPI:
    """Build and return the FastAPI application.

    Args:
        config: Optional AppConfig. If *None*, a default config is created
            from environment variables.
        collector: Optional pre-built collector. If *None*, one is wired to
            the node named in ``config.rpc``.
        metrics: Optional self-metrics. Pass the same instance the injected
            collector records into so its scrape counters are exposed.
    """
    if config is None:
        config = AppConfig()

    if metrics is None:
        metrics = ExporterMetrics(
            version=config.version,
            revision=config.revision,
            build_time=config.build_time,
        )
    if collector is None:
        collector = ChainMetaCollector(ChainMetaClient.from_config(config.rpc), metrics=metrics)

    app = FastAPI(
        title="iotex-chainmeta-exporter",
        version=__version__,
        description="Prometheus exporter for IoTeX chain metadata",
        lifespan=_lifespan,
    )

    app.state.config = config
    app.state.metrics = metrics
    app.state.collector = collector

    # -- Routes --
    @app.get("/", tags=["base"])
    async def root() -> dict[str, Any]:
        return {
            "service": "iotex-chainmeta-exporter",
            "version": __version__,
            "endpoint": collector.endpoint,
            "metrics_path": "/metrics",
        }

    @app.get("/health", tags=["base"])
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/metrics", tags=["base"], include_in_schema=False)
    async def metrics_endpoint() -> Response:
        """Scrape the node once and expose the result.

        A failed scrape answers 503 with only the exporter's own metrics, never
        stale or zero-filled chain gauges.
        """
        result = await collector.collect()
        if result.error is not None:
            error = result.error
            body = _error_comment(error) + generate_latest(metrics.registry)
            return Response(
                content=body,
                status_code=error.status_code,
                media_type=_CONTENT_TYPE,
                headers={_ERROR_HEADER: f"{error.code}; cause={error.cause}"},
            )
        body = generate_latest(metrics.registry) + collector.render(result.samples)
        return Response(content=body, media_type=_CONTENT_TYPE)

    # -- Prometheus request metrics middleware --
    app.add_middleware(PrometheusMiddleware, registry=metrics.registry)

    return app
