# src/kubestats/collectors/kubelet_client.py
"""
HTTP client for the kubelet's cAdvisor stats endpoint.
"""

import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

import httpx
from pydantic import ValidationError

from ..core.config import config
from ..core.exceptions import KubeletScrapeError
from ..models.cadvisor import ContainerInfo
from ..utils.date_utils import to_iso_z
from ..utils.http_client import get_async_http_client

logger = logging.getLogger(__name__)

STATS_PATH = "/stats/container/"


class KubeletClient:
    """
    Fetches raw container stats from a node's kubelet.

    A new HTTP client is opened per request so that concurrent scrapes of
    different nodes never share connection state.
    """

    def __init__(
        self,
        port: Optional[int] = None,
        scheme: Optional[str] = None,
        verify: Optional[bool] = None,
        bearer_token: Optional[str] = None,
    ):
        self.port = port if port is not None else config.KUBELET_PORT
        self.scheme = scheme or config.KUBELET_SCHEME
        self.verify = verify if verify is not None else config.KUBELET_VERIFY_CERTS
        self.bearer_token = bearer_token if bearer_token is not None else config.KUBELET_BEARER_TOKEN

    def get_port(self) -> int:
        return self.port

    def get_url(self, host_ip: str, path: str) -> str:
        host = f"[{host_ip}]" if ":" in host_ip else host_ip
        return f"{self.scheme}://{host}:{self.port}{path}"

    async def get_all_raw_containers(self, host_ip: str, start: datetime, end: datetime) -> List[ContainerInfo]:
        """
        Requests stats of the root container and all of its subcontainers
        for the [start, end] window.

        Raises:
            KubeletScrapeError: The request failed or the body is not a JSON object.
        """
        url = self.get_url(host_ip, STATS_PATH)
        body = {
            "containerName": "/",
            "subcontainers": True,
            "start": to_iso_z(start),
            "end": to_iso_z(end),
        }

        async with get_async_http_client(verify=self.verify, bearer_token=self.bearer_token) as client:
            try:
                resp = await client.post(url, json=body)
                resp.raise_for_status()
            except httpx.HTTPError as exc:
                raise KubeletScrapeError(f"request to {url} failed: {exc}") from exc

            try:
                payload = resp.json()
            except ValueError as exc:
                logger.debug("Raw response content from %s: %s", url, resp.text[:500])
                raise KubeletScrapeError(f"failed to decode JSON from {url}") from exc

        if not isinstance(payload, dict):
            raise KubeletScrapeError(f"unexpected response from {url}: expected an object, got {type(payload).__name__}")

        return self._parse_containers(payload, url)

    def _parse_containers(self, payload: Dict[str, Any], url: str) -> List[ContainerInfo]:
        containers = []
        malformed = 0
        for name, raw in payload.items():
            try:
                info = ContainerInfo.model_validate(raw)
            except ValidationError as e:
                malformed += 1
                logger.debug("Malformed container info %r from %s: %s", name, url, e)
                continue
            containers.append(self._latest_stat_only(info))

        if malformed:
            logger.warning("Skipped %d malformed container info item(s) from %s.", malformed, url)
        return containers

    @staticmethod
    def _latest_stat_only(info: ContainerInfo) -> ContainerInfo:
        """
        Keeps only the newest stat sample, and names the container after its
        first alias (the runtime's container name) when one is reported.
        """
        update = {}
        if info.stats:
            latest = info.stats[0]
            for stat in info.stats[1:]:
                if stat.timestamp > latest.timestamp:
                    latest = stat
            update["stats"] = [latest]
        if info.aliases:
            update["name"] = info.aliases[0]
        return info.model_copy(update=update) if update else info
