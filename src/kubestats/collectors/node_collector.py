# src/kubestats/collectors/node_collector.py

import logging
from typing import List

from kubernetes_asyncio.client.rest import ApiException

from ..core.address import get_node_hostname_and_ip, get_node_schedulable_status
from ..core.exceptions import NodeAddressError
from ..core.k8s_client import get_core_v1_api
from ..models.node import NodeDescriptor
from .base_collector import BaseCollector

logger = logging.getLogger(__name__)


class NodeCollector(BaseCollector):
    """Lists the cluster's nodes and turns them into scrape targets."""

    def __init__(self):
        self._api = None

    async def _ensure_client(self):
        """
        Lazily initialize the Kubernetes Async client using the centralized loader.
        """
        if self._api:
            return self._api

        self._api = await get_core_v1_api()
        return self._api

    async def collect(self) -> List[NodeDescriptor]:
        """
        Lists the nodes currently known to the API server.

        Returns:
            list: One NodeDescriptor per node with a usable address. Nodes that
                  are not ready or lack a valid IP are logged and left out.
                  An empty list is returned when the listing itself fails.
        """
        targets: List[NodeDescriptor] = []
        api = await self._ensure_client()
        if not api:
            logger.error("Kubernetes client not configured; no nodes to scrape.")
            return targets

        try:
            nodes = await api.list_node(watch=False)
        except ApiException as e:
            logger.error("Kubernetes API error while listing nodes: %s", e)
            return targets
        except Exception as e:
            logger.error("An unexpected error occurred while listing nodes: %s", e)
            return targets

        if not nodes.items:
            logger.error("No nodes received from the API server.")
            return targets

        for node in nodes.items:
            try:
                hostname, ip = get_node_hostname_and_ip(node)
            except NodeAddressError as e:
                logger.error("%s", e)
                continue

            targets.append(
                NodeDescriptor(
                    name=node.metadata.name,
                    hostname=hostname,
                    ip=ip,
                    external_id=self._extract_external_id(node),
                    schedulable=get_node_schedulable_status(node) == "true",
                )
            )
            logger.debug(" -> Node '%s': hostname=%s, ip=%s", node.metadata.name, hostname, ip)

        return targets

    @staticmethod
    def _extract_external_id(node) -> str:
        """
        Extract the node's external identifier.

        spec.externalID is deprecated and no longer served by recent API
        servers; the provider ID, then the node name, stand in for it.
        """
        spec = node.spec
        if spec is not None:
            external_id = getattr(spec, "external_id", None) or getattr(spec, "provider_id", None)
            if external_id:
                return external_id
        return node.metadata.name

    async def close(self):
        """Close the Kubernetes API client if it exists."""
        if self._api:
            await self._api.api_client.close()
            logger.debug("NodeCollector Kubernetes client closed.")
            self._api = None
