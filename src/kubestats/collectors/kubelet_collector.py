# src/kubestats/collectors/kubelet_collector.py
"""
Scrapes one node's kubelet and normalizes the result into a DataBatch.
"""

import logging
from contextlib import nullcontext
from datetime import datetime
from typing import Optional

from ..core.normalizer import translate
from ..core.telemetry import ScrapeTelemetry
from ..models.metrics import DataBatch
from ..models.node import NodeDescriptor
from .base_collector import BaseCollector
from .kubelet_client import KubeletClient

logger = logging.getLogger(__name__)


class KubeletCollector(BaseCollector):
    """
    Metrics source for the pods and system containers of a single node.
    """

    def __init__(self, node: NodeDescriptor, client: KubeletClient, telemetry: Optional[ScrapeTelemetry] = None):
        self.node = node
        self.client = client
        self.telemetry = telemetry

    @property
    def name(self) -> str:
        return f"kubelet:{self.node.ip}:{self.client.get_port()}"

    def __repr__(self) -> str:
        return self.name

    async def collect(self, start: datetime, end: datetime) -> DataBatch:
        """
        Fetches the node's container stats for [start, end] and translates them.

        Fetch errors propagate to the caller, which scopes them to this node.
        """
        measure = self.telemetry.measure_request(self.node.hostname) if self.telemetry else nullcontext()
        with measure:
            containers = await self.client.get_all_raw_containers(self.node.ip, start, end)

        logger.debug("Successfully obtained stats from %s for %d containers", self.name, len(containers))
        return translate(containers, self.node, end)
