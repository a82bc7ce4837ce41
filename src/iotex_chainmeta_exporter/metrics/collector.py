"""Chain-meta collector: one fetch per scrape, seven gauges per snapshot.

The mapping from snapshot to samples is a pure function; every scrape builds
its own samples and its own prometheus_client registry for rendering.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from operator import attrgetter
from typing import TYPE_CHECKING

from prometheus_client import CollectorRegistry, generate_latest
from prometheus_client.core import GaugeMetricFamily
from prometheus_client.registry import Collector

from iotex_chainmeta_exporter.errors.exporter_errors import ScrapeError
from iotex_chainmeta_exporter.errors.fetch_errors import FetchError
from iotex_chainmeta_exporter.metrics.descriptors import (
    EPOCH_GRAVITY_CHAIN_START_HEIGHT,
    EPOCH_HEIGHT,
    EPOCH_NUM,
    HEIGHT,
    LABEL_ENDPOINT,
    NUM_ACTIONS,
    TPS,
    TPS_FLOAT,
    DescriptorRegistry,
)

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Iterator, Sequence

    from iotex_chainmeta_exporter.chain.client import ChainMetaClient
    from iotex_chainmeta_exporter.chain.models import ChainMetadataSnapshot
    from iotex_chainmeta_exporter.metrics.descriptors import MetricDescriptor
    from iotex_chainmeta_exporter.metrics.exporter import ExporterMetrics

logger = logging.getLogger(__name__)

# Metric name -> snapshot field
_FIELD_MAP: tuple[tuple[str, Callable[[ChainMetadataSnapshot], int | float]], ...] = (
    (HEIGHT, attrgetter("height")),
    (NUM_ACTIONS, attrgetter("num_actions")),
    (TPS, attrgetter("tps")),
    (EPOCH_NUM, attrgetter("epoch.num")),
    (EPOCH_HEIGHT, attrgetter("epoch.height")),
    (EPOCH_GRAVITY_CHAIN_START_HEIGHT, attrgetter("epoch.gravity_chain_start_height")),
    (TPS_FLOAT, attrgetter("tps_float")),
)


@dataclass(frozen=True)
class MetricSample:
    """One gauge value with its labels."""

    name: str
    value: float
    labels: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class ScrapeResult:
    """Outcome of one scrape: either seven samples or a ScrapeError."""

    samples: tuple[MetricSample, ...] = ()
    error: ScrapeError | None = None

    @property
    def ok(self) -> bool:
        """True when the fetch succeeded and samples were produced."""
        return self.error is None

    @classmethod
    def success(cls, samples: Iterable[MetricSample]) -> ScrapeResult:
        """Wrap the samples mapped from one snapshot."""
        return cls(samples=tuple(samples))

    @classmethod
    def failure(cls, error: ScrapeError) -> ScrapeResult:
        """Wrap a failed scrape; it carries no samples."""
        return cls(error=error)


def snapshot_to_samples(
    snapshot: ChainMetadataSnapshot,
    endpoint: str,
    registry: DescriptorRegistry,
) -> tuple[MetricSample, ...]:
    """Map one snapshot onto the registry's seven gauges.

    Integer fields are widened with ``float()``; ``tps_float`` passes through.
    """
    return tuple(
        MetricSample(
            name=registry.get(name).name,
            value=float(getter(snapshot)),
            labels={LABEL_ENDPOINT: endpoint},
        )
        for name, getter in _FIELD_MAP
    )


class SampleCollector(Collector):
    """prometheus_client adapter exposing one scrape's samples."""

    def __init__(self, registry: DescriptorRegistry, samples: Sequence[MetricSample]) -> None:
        self._registry = registry
        self._samples = samples

    def _family(self, descriptor: MetricDescriptor) -> GaugeMetricFamily:
        return GaugeMetricFamily(
            descriptor.fqname,
            descriptor.help,
            labels=list(descriptor.label_names),
        )

    def describe(self) -> Iterator[GaugeMetricFamily]:
        for descriptor in self._registry.descriptors():
            yield self._family(descriptor)

    def collect(self) -> Iterator[GaugeMetricFamily]:
        for descriptor in self._registry.descriptors():
            family = self._family(descriptor)
            for sample in self._samples:
                if sample.name == descriptor.name:
                    family.add_metric(
                        [sample.labels[label] for label in descriptor.label_names],
                        sample.value,
                    )
            yield family


def render_samples(registry: DescriptorRegistry, samples: Sequence[MetricSample]) -> bytes:
    """Render samples in the Prometheus text exposition format."""
    scrape_registry = CollectorRegistry(auto_describe=False)
    scrape_registry.register(SampleCollector(registry, samples))
    return generate_latest(scrape_registry)


class ChainMetaCollector:
    """Turns scrapes into chain-meta samples for one node endpoint.

    Usage::

        collector = ChainMetaCollector(ChainMetaClient("node:80"))
        result = await collector.collect()
        if result.ok:
            body = collector.render(result.samples)
    """

    def __init__(
        self,
        client: ChainMetaClient,
        *,
        registry: DescriptorRegistry | None = None,
        metrics: ExporterMetrics | None = None,
    ) -> None:
        self._client = client
        self._registry = registry or DescriptorRegistry()
        self._metrics = metrics

    @property
    def endpoint(self) -> str:
        return self._client.endpoint

    @property
    def registry(self) -> DescriptorRegistry:
        return self._registry

    def describe(self) -> tuple[MetricDescriptor, ...]:
        """Return the static descriptors. Never touches the network."""
        return self._registry.descriptors()

    async def collect(self) -> ScrapeResult:
        """Fetch one snapshot and map it to samples.

        A failed fetch yields a failed result with no samples; it is logged
        and counted, never raised.
        """
        if self._metrics is None:
            return await self._collect_once()
        with self._metrics.track_scrape():
            result = await self._collect_once()
        if result.error is not None:
            self._metrics.record_scrape_error(result.error.cause)
        return result

    def render(self, samples: Sequence[MetricSample]) -> bytes:
        """Render one scrape's samples as exposition text."""
        return render_samples(self._registry, samples)

    async def _collect_once(self) -> ScrapeResult:
        try:
            snapshot = await self._client.fetch()
        except FetchError as exc:
            logger.warning(
                "Chain meta scrape of %s failed (%s): %s",
                self.endpoint,
                exc.cause,
                exc.message,
            )
            return ScrapeResult.failure(ScrapeError(exc, endpoint=self.endpoint))
        return ScrapeResult.success(snapshot_to_samples(snapshot, self.endpoint, self._registry))
