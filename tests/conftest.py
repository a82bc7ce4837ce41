"""Shared test fixtures for the chain meta exporter test suite."""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

import grpc
import pytest

from iotex_chainmeta_exporter.chain import proto
from iotex_chainmeta_exporter.chain.models import ChainMetadataSnapshot, EpochData

if TYPE_CHECKING:
    from collections.abc import AsyncIterator


def make_response(
    *,
    height: int = 100,
    num_actions: int = 5000,
    tps: int = 50,
    tps_float: float = 50.5,
    epoch_num: int = 2,
    epoch_height: int = 80,
    gravity_chain_start_height: int = 1000,
    chain_id: int = 1,
) -> bytes:
    """Serialize a ``GetChainMetaResponse`` the way a node would send it."""
    response = proto.GetChainMetaResponse(
        chainMeta=proto.ChainMeta(
            height=height,
            numActions=num_actions,
            tps=tps,
            tpsFloat=tps_float,
            chainID=chain_id,
            epoch=proto.EpochData(
                num=epoch_num,
                height=epoch_height,
                gravityChainStartHeight=gravity_chain_start_height,
            ),
        )
    )
    return response.SerializeToString()


class FakeNode:
    """In-process stand-in for an IoTeX node's APIService."""

    def __init__(self) -> None:
        self.endpoint = ""
        self.response: bytes = make_response()
        self.delay = 0.0
        self.abort_status: grpc.StatusCode | None = None
        self.calls = 0

    async def get_chain_meta(self, request: bytes, context: grpc.aio.ServicerContext) -> bytes:
        self.calls += 1
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.abort_status is not None:
            await context.abort(self.abort_status, "node rejected the request")
        return self.response


async def _start_server(node: FakeNode) -> tuple[grpc.aio.Server, int]:
    server = grpc.aio.server()
    handler = grpc.method_handlers_generic_handler(
        "iotexapi.APIService",
        {"GetChainMeta": grpc.unary_unary_rpc_method_handler(node.get_chain_meta)},
    )
    server.add_generic_rpc_handlers((handler,))
    port = server.add_insecure_port("127.0.0.1:0")
    await server.start()
    return server, port


@pytest.fixture
def snapshot() -> ChainMetadataSnapshot:
    """The reference snapshot used across collector tests."""
    return ChainMetadataSnapshot(
        height=100,
        num_actions=5000,
        tps=50,
        tps_float=50.5,
        epoch=EpochData(num=2, height=80, gravity_chain_start_height=1000),
        chain_id=1,
    )


@pytest.fixture
async def fake_node() -> AsyncIterator[FakeNode]:
    """Run a fake node gRPC server on a random localhost port."""
    node = FakeNode()
    server, port = await _start_server(node)
    node.endpoint = f"127.0.0.1:{port}"
    yield node
    await server.stop(None)


@pytest.fixture
async def closed_endpoint() -> str:
    """Return a localhost address with nothing listening on it."""
    server, port = await _start_server(FakeNode())
    await server.stop(None)
    return f"127.0.0.1:{port}"


@pytest.fixture(name="make_response")
def _make_response_fixture():
    """Expose :func:`make_response` to tests as a factory fixture."""
    return make_response
