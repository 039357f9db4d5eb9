# src/kubestats/core/k8s_client.py
"""
Loads the cluster configuration used to discover nodes.

Only node listing goes through the API server; kubelets are reached directly
by `collectors/kubelet_client.py`. The configuration is loaded once per
process, from the pod's service account first and then from a kubeconfig file.
"""

import asyncio
import logging
from typing import Optional

from kubernetes_asyncio import client
from kubernetes_asyncio import config as k8s_config

from .config import config

logger = logging.getLogger(__name__)

_LOAD_LOCK = asyncio.Lock()
# Name of the source the configuration was loaded from, None until loaded.
_loaded_from: Optional[str] = None


async def _load_in_cluster() -> None:
    k8s_config.load_incluster_config()


async def _load_kubeconfig() -> None:
    await k8s_config.load_kube_config(config_file=config.KUBECONFIG or None)


_LOADERS = (
    ("in-cluster service account", _load_in_cluster),
    ("kubeconfig", _load_kubeconfig),
)


async def ensure_k8s_config() -> bool:
    """
    Loads the cluster configuration on first use; later calls return at once.

    Returns:
        bool: True when a configuration is available.
    """
    global _loaded_from

    if _loaded_from:
        return True

    async with _LOAD_LOCK:
        if _loaded_from:
            return True

        for source, loader in _LOADERS:
            try:
                await loader()
            except k8s_config.ConfigException as e:
                logger.debug("No Kubernetes configuration from %s: %s", source, e)
                continue
            except OSError as e:
                logger.warning("Could not read Kubernetes configuration from %s: %s", source, e)
                continue
            _loaded_from = source
            logger.info("Loaded Kubernetes configuration from %s.", source)
            return True

    logger.warning("Failed to load any Kubernetes configuration; node discovery is disabled.")
    return False


async def get_core_v1_api() -> Optional[client.CoreV1Api]:
    """Returns a CoreV1Api for listing nodes, or None without a cluster configuration."""
    if await ensure_k8s_config():
        return client.CoreV1Api()
    return None
