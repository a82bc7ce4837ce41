"""IoTeX chain-meta wire schema, built at import time.

Only the slice of ``iotexapi/api.proto`` and ``iotextypes/blockchain.proto``
needed for ``APIService.GetChainMeta`` is described here::

    message EpochData {
      uint64 num = 1;
      uint64 height = 2;
      uint64 gravityChainStartHeight = 3;
    }
    message ChainMeta {
      uint64 height = 1;
      int64 numActions = 2;
      int64 tps = 3;
      EpochData epoch = 4;
      float tpsFloat = 5;
      uint32 chainID = 6;
    }
    message GetChainMetaRequest {}
    message GetChainMetaResponse { ChainMeta chainMeta = 1; }

The descriptors live in a private pool so they never clash with generated
``iotex-proto`` modules loaded in the same process.
"""

from __future__ import annotations

from google.protobuf import descriptor_pb2, descriptor_pool, message_factory

GET_CHAIN_META_METHOD = "/iotexapi.APIService/GetChainMeta"

_Field = descriptor_pb2.FieldDescriptorProto


def _field(name: str, number: int, kind: int, type_name: str = "") -> _Field:
    field = _Field(name=name, number=number, type=kind, label=_Field.LABEL_OPTIONAL)
    if type_name:
        field.type_name = type_name
    return field


def _types_file() -> descriptor_pb2.FileDescriptorProto:
    proto = descriptor_pb2.FileDescriptorProto(
        name="iotextypes/blockchain.proto",
        package="iotextypes",
        syntax="proto3",
    )
    proto.message_type.add(
        name="EpochData",
        field=[
            _field("num", 1, _Field.TYPE_UINT64),
            _field("height", 2, _Field.TYPE_UINT64),
            _field("gravityChainStartHeight", 3, _Field.TYPE_UINT64),
        ],
    )
    proto.message_type.add(
        name="ChainMeta",
        field=[
            _field("height", 1, _Field.TYPE_UINT64),
            _field("numActions", 2, _Field.TYPE_INT64),
            _field("tps", 3, _Field.TYPE_INT64),
            _field("epoch", 4, _Field.TYPE_MESSAGE, ".iotextypes.EpochData"),
            _field("tpsFloat", 5, _Field.TYPE_FLOAT),
            _field("chainID", 6, _Field.TYPE_UINT32),
        ],
    )
    return proto


def _api_file() -> descriptor_pb2.FileDescriptorProto:
    proto = descriptor_pb2.FileDescriptorProto(
        name="iotexapi/api.proto",
        package="iotexapi",
        syntax="proto3",
        dependency=["iotextypes/blockchain.proto"],
    )
    proto.message_type.add(name="GetChainMetaRequest")
    proto.message_type.add(
        name="GetChainMetaResponse",
        field=[_field("chainMeta", 1, _Field.TYPE_MESSAGE, ".iotextypes.ChainMeta")],
    )
    return proto


_pool = descriptor_pool.DescriptorPool()
_pool.AddSerializedFile(_types_file().SerializeToString())
_pool.AddSerializedFile(_api_file().SerializeToString())

EpochData = message_factory.GetMessageClass(_pool.FindMessageTypeByName("iotextypes.EpochData"))
ChainMeta = message_factory.GetMessageClass(_pool.FindMessageTypeByName("iotextypes.ChainMeta"))
GetChainMetaRequest = message_factory.GetMessageClass(
    _pool.FindMessageTypeByName("iotexapi.GetChainMetaRequest")
)
GetChainMetaResponse = message_factory.GetMessageClass(
    _pool.FindMessageTypeByName("iotexapi.GetChainMetaResponse")
)
