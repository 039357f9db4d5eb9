# src/kubestats/core/processor.py
import asyncio
import logging
from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from ..collectors.kubelet_client import KubeletClient
from ..collectors.kubelet_collector import KubeletCollector
from ..collectors.node_collector import NodeCollector
from ..models.metrics import DataBatch
from .exceptions import ScrapeError
from .telemetry import ScrapeTelemetry

logger = logging.getLogger(__name__)


class ScrapeResult(BaseModel):
    """Outcome of one scrape cycle across all nodes."""

    start: datetime
    end: datetime
    batches: Dict[str, DataBatch] = Field(default_factory=dict)
    failures: Dict[str, str] = Field(default_factory=dict)

    @property
    def metric_set_count(self) -> int:
        return sum(len(batch.metric_sets) for batch in self.batches.values())


class ScrapeProcessor:
    """Orchestrates node discovery, kubelet scrapes and normalization."""

    def __init__(
        self,
        node_collector: NodeCollector,
        kubelet_client: KubeletClient,
        telemetry: Optional[ScrapeTelemetry] = None,
    ):
        self.node_collector = node_collector
        self.kubelet_client = kubelet_client
        self.telemetry = telemetry

    async def get_sources(self) -> List[KubeletCollector]:
        """Builds one kubelet source per node currently usable as a scrape target."""
        nodes = await self.node_collector.collect()
        return [KubeletCollector(node, self.kubelet_client, self.telemetry) for node in nodes]

    async def run(self, start: datetime, end: datetime) -> ScrapeResult:
        """
        Runs one scrape cycle over [start, end].

        Each node is scraped concurrently and produces its own batch. A failing
        node is recorded in `failures` and does not affect the others.
        """
        result = ScrapeResult(start=start, end=end)
        sources = await self.get_sources()
        if not sources:
            logger.warning("No scrape targets discovered; skipping this cycle.")
            return result

        outcomes = await asyncio.gather(
            *(source.collect(start, end) for source in sources),
            return_exceptions=True,
        )

        for source, outcome in zip(sources, outcomes):
            node_name = source.node.name
            if isinstance(outcome, ScrapeError):
                logger.error("Failed to scrape %s (node '%s'): %s", source.name, node_name, outcome)
                result.failures[node_name] = str(outcome)
            elif isinstance(outcome, Exception):
                logger.error(
                    "Unexpected error while scraping %s (node '%s'): %s",
                    source.name,
                    node_name,
                    outcome,
                    exc_info=outcome,
                )
                result.failures[node_name] = str(outcome)
            elif isinstance(outcome, BaseException):
                raise outcome
            else:
                result.batches[node_name] = outcome

        logger.info(
            "Scrape cycle finished: %d node(s) scraped, %d failed, %d metric sets.",
            len(result.batches),
            len(result.failures),
            result.metric_set_count,
        )
        return result
