# tests/core/test_catalog.py

from datetime import datetime, timedelta, timezone

from kubestats.core.catalog import LABELED_METRICS, STANDARD_METRICS
from kubestats.models.cadvisor import ContainerSpec, ContainerStats

NOW = datetime(2024, 3, 1, 12, 0, 0, tzinfo=timezone.utc)


def _by_name(name):
    return next(metric for metric in STANDARD_METRICS if metric.name == name)


def test_metric_names_are_unique():
    names = [metric.name for metric in STANDARD_METRICS] + [family.name for family in LABELED_METRICS]

    assert len(names) == len(set(names))


def test_uptime_requires_creation_time():
    uptime = _by_name("uptime")

    assert not uptime.has_value(ContainerSpec())
    spec = ContainerSpec(creation_time=NOW - timedelta(seconds=90))
    assert uptime.get_value(spec, ContainerStats(timestamp=NOW)).int_value == 90_000


def test_uptime_never_negative():
    spec = ContainerSpec(creation_time=NOW + timedelta(seconds=1))

    assert _by_name("uptime").get_value(spec, ContainerStats(timestamp=NOW)).int_value == 0


def test_cpu_metrics_tolerate_missing_section():
    spec = ContainerSpec(has_cpu=True)
    stat = ContainerStats(timestamp=NOW)

    assert _by_name("cpu/usage").has_value(spec)
    assert _by_name("cpu/usage").get_value(spec, stat).int_value == 0


def test_filesystem_family_needs_filesystems():
    family = LABELED_METRICS[0]
    spec = ContainerSpec(has_filesystem=True)

    assert not family.has_labeled_metric(spec, ContainerStats(timestamp=NOW))
    stat = ContainerStats.model_validate(
        {"timestamp": NOW, "filesystem": [{"device": "/dev/sda1", "usage": 12, "capacity": 100}]}
    )
    assert family.has_labeled_metric(spec, stat)
    [metric] = family.get_labeled_metric(spec, stat)
    assert metric.name == "filesystem/usage"
    assert metric.labels == {"resource_id": "/dev/sda1"}
    assert metric.value.int_value == 12
