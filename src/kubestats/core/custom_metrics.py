# src/kubestats/core/custom_metrics.py
"""
Decoding of custom metrics: metrics whose name, kind and encoding are
declared per container by the application running in it, instead of being
part of the static catalog.
"""

import logging
from typing import Optional, Sequence

from ..models.cadvisor import MetricSpec, MetricVal
from ..models.metrics import CUSTOM_METRIC_PREFIX, MetricType, MetricValue

logger = logging.getLogger(__name__)

# cAdvisor kind and format tags.
_METRIC_TYPES = {
    "gauge": MetricType.GAUGE,
    "cumulative": MetricType.CUMULATIVE,
}
FORMAT_INT = "int"
FORMAT_FLOAT = "float"


def custom_metric_name(name: str) -> str:
    return CUSTOM_METRIC_PREFIX + name


def newest_value(values: Sequence[MetricVal]) -> Optional[MetricVal]:
    """Returns the sample with the latest timestamp; the first one wins ties."""
    newest = None
    for value in values:
        if newest is None or newest.timestamp < value.timestamp:
            newest = value
    return newest


def decode_custom_metric(spec: MetricSpec, values: Sequence[MetricVal]) -> Optional[MetricValue]:
    """
    Decodes the most recent sample of a custom metric.

    Returns None when there are no samples or when the declared kind or
    format is not recognized; such metrics are skipped, never fatal.
    """
    newest = newest_value(values)
    if newest is None:
        return None

    metric_type = _METRIC_TYPES.get(spec.type)
    if metric_type is None:
        logger.debug("Skipping %s: unknown custom metric type: %r", spec.name, spec.type)
        return None

    if spec.format == FORMAT_INT:
        return MetricValue.int64(metric_type, newest.value)
    if spec.format == FORMAT_FLOAT:
        return MetricValue.float32(metric_type, newest.float_value)

    logger.debug("Skipping %s: unknown custom metric format: %r", spec.name, spec.format)
    return None
