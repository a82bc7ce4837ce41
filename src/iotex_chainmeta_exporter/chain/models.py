"""Chain metadata models — EpochData, ChainMetadataSnapshot.

Immutable data classes describing one ``GetChainMeta`` answer.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from iotex_chainmeta_exporter.errors.fetch_errors import MalformedResponseError


@dataclass(frozen=True)
class EpochData:
    """Epoch progression as reported by the node.

    Attributes:
        num: Epoch index.
        height: Chain height at which the epoch started.
        gravity_chain_start_height: Anchor height on the gravity (Ethereum) chain.
    """

    num: int
    height: int
    gravity_chain_start_height: int


@dataclass(frozen=True)
class ChainMetadataSnapshot:
    """One chain-metadata fetch result.

    Created per scrape, turned into samples, then dropped.
    """

    height: int
    num_actions: int
    tps: int
    tps_float: float
    epoch: EpochData
    chain_id: int = 0

    @classmethod
    def from_proto(cls, response: Any) -> ChainMetadataSnapshot:
        """Build a snapshot from a ``GetChainMetaResponse`` message.

        Raises:
            MalformedResponseError: If the response carries no chain meta.
        """
        if not response.HasField("chainMeta"):
            msg = "GetChainMeta response is missing chainMeta"
            raise MalformedResponseError(msg)
        meta = response.chainMeta
        return cls(
            height=meta.height,
            num_actions=meta.numActions,
            tps=meta.tps,
            tps_float=meta.tpsFloat,
            epoch=EpochData(
                num=meta.epoch.num,
                height=meta.epoch.height,
                gravity_chain_start_height=meta.epoch.gravityChainStartHeight,
            ),
            chain_id=meta.chainID,
        )
