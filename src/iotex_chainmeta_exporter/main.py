"""Application entry point for the chain meta exporter."""

from __future__ import annotations

import logging

import uvicorn

from iotex_chainmeta_exporter.config.settings import AppConfig


def main() -> None:
    """Start the exporter's HTTP server."""
    config = AppConfig()
    logging.basicConfig(
        level=config.log_level.value,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    uvicorn.run(
        "iotex_chainmeta_exporter.api.app:create_app",
        factory=True,
        host=config.server.host,
        port=config.server.port,
        log_level=config.log_level.value.lower(),
    )


if __name__ == "__main__":
    main()
