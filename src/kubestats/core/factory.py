# src/kubestats/core/factory.py
"""
Factory functions to instantiate the scrape pipeline from configuration.
"""

import logging
from typing import Optional

from ..collectors.kubelet_client import KubeletClient
from ..collectors.node_collector import NodeCollector
from .config import config
from .processor import ScrapeProcessor
from .telemetry import ScrapeTelemetry, create_meter_provider

logger = logging.getLogger(__name__)


def get_telemetry() -> ScrapeTelemetry:
    """
    Builds the scrape telemetry. The caller owns it and must call shutdown().
    """
    endpoint = config.OTEL_EXPORTER_OTLP_ENDPOINT or None
    return ScrapeTelemetry(create_meter_provider(endpoint))


def get_kubelet_client() -> KubeletClient:
    return KubeletClient(
        port=config.KUBELET_PORT,
        scheme=config.KUBELET_SCHEME,
        verify=config.KUBELET_VERIFY_CERTS,
        bearer_token=config.KUBELET_BEARER_TOKEN,
    )


def get_processor(telemetry: Optional[ScrapeTelemetry] = None) -> ScrapeProcessor:
    """
    Factory function to create a ScrapeProcessor wired with configured collectors.
    """
    logger.debug(
        "Creating scrape processor (kubelet %s port %d, verify=%s).",
        config.KUBELET_SCHEME,
        config.KUBELET_PORT,
        config.KUBELET_VERIFY_CERTS,
    )
    return ScrapeProcessor(
        node_collector=NodeCollector(),
        kubelet_client=get_kubelet_client(),
        telemetry=telemetry,
    )
