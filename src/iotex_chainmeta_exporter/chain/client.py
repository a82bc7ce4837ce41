"""IoTeX gRPC client — fetch one chain-metadata snapshot.

Calls ``iotexapi.APIService/GetChainMeta`` on a node:

- a fresh ``grpc.aio`` channel per fetch, closed on every exit path
- one deadline covering connection setup and the round trip
- plaintext or TLS, chosen by configuration rather than by the endpoint
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import grpc
from google.protobuf.message import DecodeError

from iotex_chainmeta_exporter.chain import proto
from iotex_chainmeta_exporter.chain.models import ChainMetadataSnapshot
from iotex_chainmeta_exporter.config.settings import DEFAULT_TIMEOUT_SECONDS
from iotex_chainmeta_exporter.errors.fetch_errors import (
    FetchError,
    MalformedResponseError,
    NodeConnectionError,
    NodeTimeoutError,
    RemoteError,
)

if TYPE_CHECKING:
    from iotex_chainmeta_exporter.config.settings import RPCConfig

logger = logging.getLogger(__name__)

_EMPTY_REQUEST = proto.GetChainMetaRequest().SerializeToString()


class ChainMetaClient:
    """Fetches chain metadata snapshots from one IoTeX node.

    The client holds no connection between calls, so one instance can serve
    concurrent scrapes.

    Usage::

        client = ChainMetaClient("api.mainnet.iotex.one:80", timeout=10.0)
        snapshot = await client.fetch()
    """

    def __init__(
        self,
        endpoint: str,
        *,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        secure: bool = False,
    ) -> None:
        """Initialize the client.

        Args:
            endpoint: Node gRPC address as ``host:port``.
            timeout: Deadline in seconds for one fetch.
            secure: If True, dial with TLS credentials.
        """
        if timeout <= 0:
            msg = f"timeout must be positive, got {timeout}"
            raise ValueError(msg)
        self._endpoint = endpoint
        self._timeout = timeout
        self._secure = secure

    @classmethod
    def from_config(cls, config: RPCConfig) -> ChainMetaClient:
        """Build a client from the ``rpc`` config section."""
        return cls(config.endpoint, timeout=config.timeout, secure=config.secure)

    @property
    def endpoint(self) -> str:
        """The node address this client targets."""
        return self._endpoint

    @property
    def timeout(self) -> float:
        """Deadline in seconds for one fetch."""
        return self._timeout

    @property
    def secure(self) -> bool:
        """Whether fetches use a TLS channel."""
        return self._secure

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def fetch(self) -> ChainMetadataSnapshot:
        """Fetch the node's current chain metadata.

        Returns:
            ChainMetadataSnapshot decoded from the node's answer.

        Raises:
            NodeTimeoutError: The deadline elapsed.
            NodeConnectionError: The node could not be reached.
            RemoteError: The node returned a gRPC error status.
            MalformedResponseError: The answer could not be decoded.
        """
        try:
            async with self._open_channel() as channel:
                get_chain_meta = channel.unary_unary(proto.GET_CHAIN_META_METHOD)
                payload = await get_chain_meta(_EMPTY_REQUEST, timeout=self._timeout)
        except grpc.aio.AioRpcError as exc:
            raise self._translate(exc) from exc

        snapshot = self._decode(payload)
        logger.debug(
            "Fetched chain meta from %s: height=%d chain_id=%d",
            self._endpoint,
            snapshot.height,
            snapshot.chain_id,
        )
        return snapshot

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _open_channel(self) -> grpc.aio.Channel:
        if self._secure:
            return grpc.aio.secure_channel(self._endpoint, grpc.ssl_channel_credentials())
        return grpc.aio.insecure_channel(self._endpoint)

    def _translate(self, exc: grpc.aio.AioRpcError) -> FetchError:
        status = exc.code()
        details = exc.details() or status.name
        if status == grpc.StatusCode.DEADLINE_EXCEEDED:
            return NodeTimeoutError(
                f"GetChainMeta on {self._endpoint} timed out after {self._timeout}s"
            )
        if status == grpc.StatusCode.UNAVAILABLE:
            return NodeConnectionError(f"node {self._endpoint} unavailable: {details}")
        return RemoteError(
            f"GetChainMeta on {self._endpoint} failed: {status.name}: {details}",
            grpc_status=status.name,
        )

    def _decode(self, payload: bytes) -> ChainMetadataSnapshot:
        try:
            response = proto.GetChainMetaResponse.FromString(payload)
        except DecodeError as exc:
            msg = f"undecodable GetChainMeta response from {self._endpoint}: {exc}"
            raise MalformedResponseError(msg) from exc
        return ChainMetadataSnapshot.from_proto(response)


async def fetch_chain_meta(
    endpoint: str,
    *,
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
    secure: bool = False,
) -> ChainMetadataSnapshot:
    """Fetch one snapshot from *endpoint* without keeping a client around."""
    return await ChainMetaClient(endpoint, timeout=timeout, secure=secure).fetch()
