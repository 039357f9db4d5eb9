# src/kubestats/models/metrics.py
"""
This module defines the Pydantic data models for the normalized metric sets
produced by the scrape pipeline. A `MetricSet` is the normalized form of one
container snapshot; a `DataBatch` groups every metric set scraped from one
node during one cycle.

The label vocabulary and the entity key builders live here as well, so that
every producer and consumer agrees on the exact strings.
"""

import struct
from datetime import datetime
from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

# Reserved prefix for dynamically declared (custom) metrics.
CUSTOM_METRIC_PREFIX = "custom/"

# --- Label vocabulary ---
LABEL_METRIC_SET_TYPE = "type"
LABEL_NODENAME = "nodename"
LABEL_HOSTNAME = "hostname"
LABEL_HOST_ID = "host_id"
LABEL_NODE_SCHEDULABLE = "schedulable"
LABEL_NAMESPACE_NAME = "namespace_name"
LABEL_POD_NAME = "pod_name"
LABEL_POD_ID = "pod_id"
LABEL_CONTAINER_NAME = "container_name"
LABEL_CONTAINER_BASE_IMAGE = "container_base_image"
LABEL_RESOURCE_ID = "resource_id"


class MetricType(str, Enum):
    """Kind of a metric value."""

    GAUGE = "gauge"
    CUMULATIVE = "cumulative"


class ValueType(str, Enum):
    """Encoding of a metric value."""

    INT64 = "int64"
    FLOAT = "float"


class MetricSetType(str, Enum):
    """The entity a metric set describes."""

    NODE = "node"
    POD = "pod"
    POD_CONTAINER = "pod_container"
    SYSTEM_CONTAINER = "sys_container"


# Labels every metric set of a given type must carry.
REQUIRED_LABELS = {
    MetricSetType.NODE: (LABEL_NODE_SCHEDULABLE,),
    MetricSetType.POD: (LABEL_POD_ID, LABEL_POD_NAME, LABEL_NAMESPACE_NAME),
    MetricSetType.POD_CONTAINER: (
        LABEL_POD_ID,
        LABEL_POD_NAME,
        LABEL_NAMESPACE_NAME,
        LABEL_CONTAINER_NAME,
        LABEL_CONTAINER_BASE_IMAGE,
    ),
    MetricSetType.SYSTEM_CONTAINER: (LABEL_CONTAINER_NAME,),
}


def node_key(node_name: str) -> str:
    return f"node:{node_name}"


def node_container_key(node_name: str, container_name: str) -> str:
    return f"node:{node_name}/container:{container_name}"


def pod_key(namespace: str, pod_name: str) -> str:
    return f"namespace:{namespace}/pod:{pod_name}"


def pod_container_key(namespace: str, pod_name: str, container_name: str) -> str:
    return f"namespace:{namespace}/pod:{pod_name}/container:{container_name}"


def to_float32(value: float) -> float:
    """Narrows a Python float to single precision."""
    return struct.unpack("f", struct.pack("f", value))[0]


class MetricValue(BaseModel):
    """
    A typed metric value: either a 64-bit integer or a single precision float,
    tagged with its metric kind.
    """

    model_config = ConfigDict(frozen=True)

    metric_type: MetricType
    value_type: ValueType
    int_value: int = 0
    float_value: float = 0.0

    @classmethod
    def int64(cls, metric_type: MetricType, value: int) -> "MetricValue":
        return cls(metric_type=metric_type, value_type=ValueType.INT64, int_value=value)

    @classmethod
    def float32(cls, metric_type: MetricType, value: float) -> "MetricValue":
        return cls(metric_type=metric_type, value_type=ValueType.FLOAT, float_value=to_float32(value))

    @property
    def value(self):
        if self.value_type == ValueType.INT64:
            return self.int_value
        return self.float_value


class LabeledMetric(BaseModel):
    """A metric value fanned out per sub-resource (e.g. per filesystem)."""

    model_config = ConfigDict(frozen=True)

    name: str
    labels: Dict[str, str] = Field(default_factory=dict)
    value: MetricValue


class MetricSet(BaseModel):
    """
    Normalized metrics of one node, pod, pod container or system container.

    Construction fails when the labels do not match the declared entity type.
    """

    key: str = Field(..., description="Entity key, unique within a batch.")
    labels: Dict[str, str] = Field(default_factory=dict)
    metric_values: Dict[str, MetricValue] = Field(default_factory=dict)
    labeled_metrics: List[LabeledMetric] = Field(default_factory=list)
    collection_start_time: Optional[datetime] = Field(None, description="Creation time of the container.")
    scrape_time: datetime = Field(..., description="Timestamp of the stat sample the values come from.")

    @model_validator(mode="after")
    def _check_labels(self):
        raw_type = self.labels.get(LABEL_METRIC_SET_TYPE)
        if not raw_type:
            raise ValueError(f"metric set '{self.key}' has no '{LABEL_METRIC_SET_TYPE}' label")
        try:
            set_type = MetricSetType(raw_type)
        except ValueError:
            raise ValueError(f"metric set '{self.key}' has unknown type '{raw_type}'") from None

        missing = [label for label in REQUIRED_LABELS[set_type] if label not in self.labels]
        if missing:
            raise ValueError(f"{set_type.value} metric set '{self.key}' is missing labels: {', '.join(missing)}")
        return self

    @property
    def metric_set_type(self) -> MetricSetType:
        return MetricSetType(self.labels[LABEL_METRIC_SET_TYPE])


class DataBatch(BaseModel):
    """All metric sets scraped from one node during one cycle."""

    timestamp: datetime = Field(..., description="End of the scrape window.")
    metric_sets: Dict[str, MetricSet] = Field(default_factory=dict)
