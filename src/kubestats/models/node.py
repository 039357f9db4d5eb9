# src/kubestats/models/node.py

from pydantic import BaseModel, ConfigDict, Field


class NodeDescriptor(BaseModel):
    """
    Pydantic model describing one node as a scrape target.

    Attributes:
        name: Node name
        hostname: Hostname resolved from the node's addresses
        ip: IP address the kubelet is reached at
        external_id: External identifier of the node (reported as host_id)
        schedulable: False when the node is cordoned
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = Field(..., description="Node name")
    hostname: str = Field(..., description="Resolved hostname")
    ip: str = Field(..., description="Resolved IP address")
    external_id: str = Field("", description="External identifier of the node")
    schedulable: bool = Field(True, description="Whether new pods can be scheduled on the node")

    @property
    def schedulable_label(self) -> str:
        return "true" if self.schedulable else "false"
