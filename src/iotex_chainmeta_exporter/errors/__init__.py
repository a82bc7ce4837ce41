"""Errors — typed failures raised by the RPC client and the collector."""

from __future__ import annotations

from iotex_chainmeta_exporter.errors.exporter_errors import ExporterError, ScrapeError
from iotex_chainmeta_exporter.errors.fetch_errors import (
    FetchCause,
    FetchError,
    MalformedResponseError,
    NodeConnectionError,
    NodeTimeoutError,
    RemoteError,
)

__all__ = [
    "ExporterError",
    "FetchCause",
    "FetchError",
    "MalformedResponseError",
    "NodeConnectionError",
    "NodeTimeoutError",
    "RemoteError",
    "ScrapeError",
]
