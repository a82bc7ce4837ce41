"""Tests for chain metadata models and the wire schema."""

from __future__ import annotations

import dataclasses

import pytest

from iotex_chainmeta_exporter.chain import proto
from iotex_chainmeta_exporter.chain.models import ChainMetadataSnapshot, EpochData
from iotex_chainmeta_exporter.errors.fetch_errors import MalformedResponseError



class TestFromProto:
    def test_full_response(self, make_response) -> None:
        response = proto.GetChainMetaResponse.FromString(make_response())
        snap = ChainMetadataSnapshot.from_proto(response)
        assert snap == ChainMetadataSnapshot(
            height=100,
            num_actions=5000,
            tps=50,
            tps_float=50.5,
            epoch=EpochData(num=2, height=80, gravity_chain_start_height=1000),
            chain_id=1,
        )

    def test_missing_chain_meta(self) -> None:
        with pytest.raises(MalformedResponseError):
            ChainMetadataSnapshot.from_proto(proto.GetChainMetaResponse())

    def test_zero_values_are_kept(self) -> None:
        response = proto.GetChainMetaResponse(chainMeta=proto.ChainMeta())
        snap = ChainMetadataSnapshot.from_proto(response)
        assert snap.height == 0
        assert snap.epoch == EpochData(num=0, height=0, gravity_chain_start_height=0)


class TestImmutability:
    def test_snapshot_is_frozen(self, snapshot) -> None:
        with pytest.raises(dataclasses.FrozenInstanceError):
            snapshot.height = 1  # type: ignore[misc]

    def test_epoch_is_frozen(self, snapshot) -> None:
        with pytest.raises(dataclasses.FrozenInstanceError):
            snapshot.epoch.num = 9  # type: ignore[misc]


class TestWireSchema:
    def test_method_path(self) -> None:
        assert proto.GET_CHAIN_META_METHOD == "/iotexapi.APIService/GetChainMeta"

    def test_request_is_empty(self) -> None:
        assert proto.GetChainMetaRequest().SerializeToString() == b""

    def test_field_numbers(self) -> None:
        fields = {f.name: f.number for f in proto.ChainMeta.DESCRIPTOR.fields}
        assert fields == {
            "height": 1,
            "numActions": 2,
            "tps": 3,
            "epoch": 4,
            "tpsFloat": 5,
            "chainID": 6,
        }
