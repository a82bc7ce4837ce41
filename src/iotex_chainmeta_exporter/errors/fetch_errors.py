"""RPC fetch errors, one family distinguished by cause."""

from __future__ import annotations

import enum

from iotex_chainmeta_exporter.errors.exporter_errors import ExporterError


class FetchCause(enum.StrEnum):
    """Why a chain metadata fetch failed."""

    TIMEOUT = "timeout"
    UNREACHABLE = "unreachable"
    REMOTE = "remote"
    MALFORMED = "malformed"


class FetchError(ExporterError):
    """Failure while fetching chain metadata from the node."""

    default_cause = FetchCause.REMOTE

    def __init__(
        self,
        message: str,
        *,
        cause: FetchCause | None = None,
        status_code: int = 502,
        code: str = "fetch-error",
    ) -> None:
        super().__init__(message, status_code=status_code, code=code)
        self.cause = cause or self.default_cause


class NodeConnectionError(FetchError):
    """The node could not be reached (refused, DNS failure, no route)."""

    default_cause = FetchCause.UNREACHABLE

    def __init__(
        self,
        message: str,
        *,
        status_code: int = 502,
        code: str = "node-unreachable",
    ) -> None:
        super().__init__(message, status_code=status_code, code=code)


class NodeTimeoutError(NodeConnectionError):
    """The deadline elapsed before the node answered."""

    default_cause = FetchCause.TIMEOUT

    def __init__(self, message: str) -> None:
        super().__init__(message, status_code=504, code="node-timeout")


class RemoteError(FetchError):
    """The node answered with an application-level gRPC error."""

    default_cause = FetchCause.REMOTE

    def __init__(self, message: str, *, grpc_status: str = "UNKNOWN") -> None:
        super().__init__(message, code="node-error")
        self.grpc_status = grpc_status


class MalformedResponseError(FetchError):
    """The node's response could not be decoded into a chain snapshot."""

    default_cause = FetchCause.MALFORMED

    def __init__(self, message: str) -> None:
        super().__init__(message, code="malformed-response")
