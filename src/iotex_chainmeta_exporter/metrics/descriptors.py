"""Descriptor registry for the seven chain-meta gauges.

Built once at startup and shared read-only by every scrape.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterator

NAMESPACE = "iotex_chainmeta"
LABEL_ENDPOINT = "endpoint"

HEIGHT = "height"
NUM_ACTIONS = "num_actions"
TPS = "tps"
EPOCH_NUM = "epoch_num"
EPOCH_HEIGHT = "epoch_height"
EPOCH_GRAVITY_CHAIN_START_HEIGHT = "epoch_gravity_chain_start_height"
TPS_FLOAT = "tps_float"

# (metric name, field name used in the help text)
_METRICS: tuple[tuple[str, str], ...] = (
    (HEIGHT, "Height"),
    (NUM_ACTIONS, "NumActions"),
    (TPS, "Tps"),
    (EPOCH_NUM, "EpochNum"),
    (EPOCH_HEIGHT, "EpochHeight"),
    (EPOCH_GRAVITY_CHAIN_START_HEIGHT, "EpochGravityChainStartHeight"),
    (TPS_FLOAT, "TpsFloat"),
)


@dataclass(frozen=True)
class MetricDescriptor:
    """Static metadata for one gauge."""

    name: str
    namespace: str
    help: str
    label_names: tuple[str, ...] = (LABEL_ENDPOINT,)

    @property
    def fqname(self) -> str:
        """Fully-qualified metric name, ``<namespace>_<name>``."""
        return f"{self.namespace}_{self.name}" if self.namespace else self.name


class DescriptorRegistry:
    """Ordered, immutable set of chain-meta metric descriptors."""

    def __init__(self, namespace: str = NAMESPACE) -> None:
        self._namespace = namespace
        self._descriptors = tuple(
            MetricDescriptor(
                name=name,
                namespace=namespace,
                help=f"Gauge for Iotex Chain metadata {field}",
            )
            for name, field in _METRICS
        )
        self._by_name = {d.name: d for d in self._descriptors}

    @property
    def namespace(self) -> str:
        return self._namespace

    def descriptors(self) -> tuple[MetricDescriptor, ...]:
        """Return the descriptors in their fixed order."""
        return self._descriptors

    def get(self, name: str) -> MetricDescriptor:
        """Return the descriptor for the short metric *name*.

        Raises:
            KeyError: If *name* is not one of the seven chain-meta metrics.
        """
        return self._by_name[name]

    def __len__(self) -> int:
        return len(self._descriptors)

    def __iter__(self) -> Iterator[MetricDescriptor]:
        return iter(self._descriptors)
