# src/kubestats/models/cadvisor.py
"""
Pydantic models for the raw container information returned by the kubelet
stats endpoint. Field names follow the cAdvisor v1 JSON encoding so that a
response body can be validated directly with `ContainerInfo.model_validate`.

Instances are frozen: the normalization engine only ever reads them.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, field_validator
from typing_extensions import Annotated

from ..utils.date_utils import parse_iso_date

ROOT_CONTAINER_NAME = "/"


def _coerce_timestamp(value: Any) -> Any:
    # Sub-microsecond fractions are truncated; anything else is left to pydantic.
    if isinstance(value, str):
        parsed = parse_iso_date(value)
        if parsed is not None:
            return parsed
    return value


Timestamp = Annotated[datetime, BeforeValidator(_coerce_timestamp)]


class _CadvisorModel(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)


class MetricSpec(_CadvisorModel):
    """Declaration of one custom metric exported by a container."""

    name: str
    type: str = Field("", description="Metric kind: 'gauge' or 'cumulative'.")
    format: str = Field("", description="Value encoding: 'int' or 'float'.")
    units: str = ""


class MetricVal(_CadvisorModel):
    """A single timestamped sample of a custom metric."""

    label: str = ""
    timestamp: Timestamp
    value: int = Field(0, description="Integer sample value.")
    float_value: float = Field(0.0, description="Floating point sample value.")


class CpuSpec(_CadvisorModel):
    limit: int = 0
    max_limit: int = 0
    mask: str = ""
    quota: int = 0
    period: int = 0


class MemorySpec(_CadvisorModel):
    limit: int = 0
    reservation: int = 0
    swap_limit: int = 0


class ContainerSpec(_CadvisorModel):
    """Static description of a container as reported by cAdvisor."""

    creation_time: Optional[Timestamp] = None
    labels: Dict[str, str] = Field(default_factory=dict)
    image: str = ""

    has_cpu: bool = False
    cpu: Optional[CpuSpec] = None
    has_memory: bool = False
    memory: Optional[MemorySpec] = None
    has_network: bool = False
    has_filesystem: bool = False
    has_diskio: bool = False

    has_custom_metrics: bool = False
    custom_metrics: List[MetricSpec] = Field(default_factory=list)

    @field_validator("labels", mode="before")
    @classmethod
    def _null_labels(cls, value):
        return value or {}

    @field_validator("custom_metrics", mode="before")
    @classmethod
    def _null_custom_metrics(cls, value):
        return value or []


class CpuUsage(_CadvisorModel):
    total: int = 0
    per_cpu_usage: List[int] = Field(default_factory=list)
    user: int = 0
    system: int = 0


class CpuStats(_CadvisorModel):
    usage: CpuUsage = Field(default_factory=CpuUsage)
    load_average: int = 0


class MemoryData(_CadvisorModel):
    pgfault: int = 0
    pgmajfault: int = 0


class MemoryStats(_CadvisorModel):
    usage: int = 0
    max_usage: int = 0
    cache: int = 0
    rss: int = 0
    swap: int = 0
    working_set: int = 0
    failcnt: int = 0
    container_data: MemoryData = Field(default_factory=MemoryData)


class InterfaceStats(_CadvisorModel):
    name: str = ""
    rx_bytes: int = 0
    rx_packets: int = 0
    rx_errors: int = 0
    rx_dropped: int = 0
    tx_bytes: int = 0
    tx_packets: int = 0
    tx_errors: int = 0
    tx_dropped: int = 0


class NetworkStats(InterfaceStats):
    interfaces: List[InterfaceStats] = Field(default_factory=list)


class FsStats(_CadvisorModel):
    device: str = ""
    type: str = ""
    limit: int = Field(0, alias="capacity")
    usage: int = 0
    base_usage: int = 0
    available: int = 0
    inodes_free: int = 0


class ContainerStats(_CadvisorModel):
    """One stat sample of a container."""

    timestamp: Timestamp
    cpu: Optional[CpuStats] = None
    memory: Optional[MemoryStats] = None
    network: Optional[NetworkStats] = None
    filesystem: List[FsStats] = Field(default_factory=list)
    custom_metrics: Dict[str, List[MetricVal]] = Field(default_factory=dict)

    @field_validator("filesystem", "custom_metrics", mode="before")
    @classmethod
    def _null_collections(cls, value, info):
        if value is None:
            return [] if info.field_name == "filesystem" else {}
        return value


class ContainerInfo(_CadvisorModel):
    """
    The raw snapshot of one container (or of the node's root cgroup) at
    scrape time.
    """

    name: str
    aliases: List[str] = Field(default_factory=list)
    namespace: str = ""
    spec: ContainerSpec = Field(default_factory=ContainerSpec)
    stats: List[ContainerStats] = Field(default_factory=list)

    @field_validator("aliases", "stats", mode="before")
    @classmethod
    def _null_lists(cls, value):
        return value or []

    @property
    def is_node(self) -> bool:
        """The root cgroup stands for the node itself."""
        return self.name == ROOT_CONTAINER_NAME
