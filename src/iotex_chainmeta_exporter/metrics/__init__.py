"""Metrics — chain-meta descriptors, collector and exporter self-metrics."""

from __future__ import annotations

from iotex_chainmeta_exporter.metrics.collector import (
    ChainMetaCollector,
    MetricSample,
    ScrapeResult,
    snapshot_to_samples,
)
from iotex_chainmeta_exporter.metrics.descriptors import DescriptorRegistry, MetricDescriptor
from iotex_chainmeta_exporter.metrics.exporter import ExporterMetrics

__all__ = [
    "ChainMetaCollector",
    "DescriptorRegistry",
    "ExporterMetrics",
    "MetricDescriptor",
    "MetricSample",
    "ScrapeResult",
    "snapshot_to_samples",
]
