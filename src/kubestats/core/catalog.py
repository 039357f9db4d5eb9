# src/kubestats/core/catalog.py
"""
The static metric catalog.

Each entry pairs an applicability predicate with an extraction function.
Standard metrics yield one value per container; labeled metric families yield
zero or more values, one per sub-resource (filesystem device).
"""

from typing import Callable, List, NamedTuple

from ..models.cadvisor import ContainerSpec, ContainerStats
from ..models.metrics import LABEL_RESOURCE_ID, LabeledMetric, MetricType, MetricValue


class StandardMetric(NamedTuple):
    name: str
    metric_type: MetricType
    units: str
    has_value: Callable[[ContainerSpec], bool]
    get_value: Callable[[ContainerSpec, ContainerStats], MetricValue]


class LabeledMetricFamily(NamedTuple):
    name: str
    metric_type: MetricType
    units: str
    has_labeled_metric: Callable[[ContainerSpec, ContainerStats], bool]
    get_labeled_metric: Callable[[ContainerSpec, ContainerStats], List[LabeledMetric]]


def _has_cpu(spec: ContainerSpec) -> bool:
    return spec.has_cpu


def _has_memory(spec: ContainerSpec) -> bool:
    return spec.has_memory


def _has_network(spec: ContainerSpec) -> bool:
    return spec.has_network


def _has_creation_time(spec: ContainerSpec) -> bool:
    return spec.creation_time is not None


def _uptime_ms(spec: ContainerSpec, stat: ContainerStats) -> int:
    return max(int((stat.timestamp - spec.creation_time).total_seconds() * 1000), 0)


def _cpu(field: str, metric_type: MetricType):
    def getter(spec: ContainerSpec, stat: ContainerStats) -> MetricValue:
        if stat.cpu is None:
            return MetricValue.int64(metric_type, 0)
        if field == "load_average":
            return MetricValue.int64(metric_type, stat.cpu.load_average)
        return MetricValue.int64(metric_type, getattr(stat.cpu.usage, field))

    return getter


def _memory(field: str, metric_type: MetricType):
    def getter(spec: ContainerSpec, stat: ContainerStats) -> MetricValue:
        if stat.memory is None:
            return MetricValue.int64(metric_type, 0)
        if field in ("pgfault", "pgmajfault"):
            return MetricValue.int64(metric_type, getattr(stat.memory.container_data, field))
        return MetricValue.int64(metric_type, getattr(stat.memory, field))

    return getter


def _network(field: str):
    def getter(spec: ContainerSpec, stat: ContainerStats) -> MetricValue:
        value = getattr(stat.network, field) if stat.network is not None else 0
        return MetricValue.int64(MetricType.CUMULATIVE, value)

    return getter


STANDARD_METRICS: List[StandardMetric] = [
    StandardMetric(
        "uptime",
        MetricType.CUMULATIVE,
        "ms",
        _has_creation_time,
        lambda spec, stat: MetricValue.int64(MetricType.CUMULATIVE, _uptime_ms(spec, stat)),
    ),
    StandardMetric("cpu/usage", MetricType.CUMULATIVE, "ns", _has_cpu, _cpu("total", MetricType.CUMULATIVE)),
    StandardMetric("cpu/load", MetricType.GAUGE, "count", _has_cpu, _cpu("load_average", MetricType.GAUGE)),
    StandardMetric("memory/usage", MetricType.GAUGE, "bytes", _has_memory, _memory("usage", MetricType.GAUGE)),
    StandardMetric(
        "memory/working_set", MetricType.GAUGE, "bytes", _has_memory, _memory("working_set", MetricType.GAUGE)
    ),
    StandardMetric("memory/rss", MetricType.GAUGE, "bytes", _has_memory, _memory("rss", MetricType.GAUGE)),
    StandardMetric("memory/cache", MetricType.GAUGE, "bytes", _has_memory, _memory("cache", MetricType.GAUGE)),
    StandardMetric(
        "memory/page_faults",
        MetricType.CUMULATIVE,
        "count",
        _has_memory,
        _memory("pgfault", MetricType.CUMULATIVE),
    ),
    StandardMetric(
        "memory/major_page_faults",
        MetricType.CUMULATIVE,
        "count",
        _has_memory,
        _memory("pgmajfault", MetricType.CUMULATIVE),
    ),
    StandardMetric("network/rx", MetricType.CUMULATIVE, "bytes", _has_network, _network("rx_bytes")),
    StandardMetric("network/rx_errors", MetricType.CUMULATIVE, "count", _has_network, _network("rx_errors")),
    StandardMetric("network/tx", MetricType.CUMULATIVE, "bytes", _has_network, _network("tx_bytes")),
    StandardMetric("network/tx_errors", MetricType.CUMULATIVE, "count", _has_network, _network("tx_errors")),
]


def _has_filesystems(spec: ContainerSpec, stat: ContainerStats) -> bool:
    return spec.has_filesystem and bool(stat.filesystem)


def _filesystem(name: str, field: str):
    def getter(spec: ContainerSpec, stat: ContainerStats) -> List[LabeledMetric]:
        return [
            LabeledMetric(
                name=name,
                labels={LABEL_RESOURCE_ID: fs.device},
                value=MetricValue.int64(MetricType.GAUGE, getattr(fs, field)),
            )
            for fs in stat.filesystem
        ]

    return getter


LABELED_METRICS: List[LabeledMetricFamily] = [
    LabeledMetricFamily(
        "filesystem/usage",
        MetricType.GAUGE,
        "bytes",
        _has_filesystems,
        _filesystem("filesystem/usage", "usage"),
    ),
    LabeledMetricFamily(
        "filesystem/limit",
        MetricType.GAUGE,
        "bytes",
        _has_filesystems,
        _filesystem("filesystem/limit", "limit"),
    ),
    LabeledMetricFamily(
        "filesystem/available",
        MetricType.GAUGE,
        "bytes",
        _has_filesystems,
        _filesystem("filesystem/available", "available"),
    ),
    LabeledMetricFamily(
        "filesystem/inodes_free",
        MetricType.GAUGE,
        "count",
        _has_filesystems,
        _filesystem("filesystem/inodes_free", "inodes_free"),
    ),
]
