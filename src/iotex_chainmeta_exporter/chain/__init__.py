"""Chain — IoTeX node RPC client and snapshot models."""

from __future__ import annotations

from iotex_chainmeta_exporter.chain.client import ChainMetaClient, fetch_chain_meta
from iotex_chainmeta_exporter.chain.models import ChainMetadataSnapshot, EpochData

__all__ = ["ChainMetaClient", "ChainMetadataSnapshot", "EpochData", "fetch_chain_meta"]
