# src/kubestats/core/address.py
"""
Resolves the hostname and IP address a node's kubelet is scraped at.

Nodes report several address records which may disagree. The IP is chosen by
a fixed priority: InternalIP, then LegacyHostIP, then ExternalIP.
"""

import ipaddress
import logging
from typing import Tuple

from .exceptions import NodeAddressError, NodeNotReadyError

logger = logging.getLogger(__name__)

NODE_READY = "Ready"
CONDITION_TRUE = "True"

ADDRESS_HOSTNAME = "Hostname"
ADDRESS_INTERNAL_IP = "InternalIP"
ADDRESS_LEGACY_HOST_IP = "LegacyHostIP"
ADDRESS_EXTERNAL_IP = "ExternalIP"

IP_PRIORITY = (ADDRESS_INTERNAL_IP, ADDRESS_LEGACY_HOST_IP, ADDRESS_EXTERNAL_IP)


def is_valid_ip(address: str) -> bool:
    try:
        ipaddress.ip_address(address)
    except ValueError:
        return False
    return True


def get_node_hostname_and_ip(node) -> Tuple[str, str]:
    """
    Picks the hostname and IP of a node.

    Args:
        node: A V1Node (or any object exposing metadata.name,
              status.conditions and status.addresses).

    Raises:
        NodeNotReadyError: A Ready condition is present and not True.
        NodeAddressError: No valid IP address was reported.
    """
    name = node.metadata.name
    status = node.status
    conditions = (status.conditions if status else None) or []
    addresses = (status.addresses if status else None) or []

    for condition in conditions:
        if condition.type == NODE_READY and condition.status != CONDITION_TRUE:
            raise NodeNotReadyError(f"node {name} is not ready")

    hostname = name
    candidates = {}
    for addr in addresses:
        if not addr.address:
            continue
        if addr.type == ADDRESS_HOSTNAME:
            hostname = addr.address
        elif addr.type in IP_PRIORITY and addr.type not in candidates:
            if is_valid_ip(addr.address):
                candidates[addr.type] = addr.address
            else:
                logger.debug("Ignoring invalid %s address %r of node %s", addr.type, addr.address, name)

    ip = next((candidates[kind] for kind in IP_PRIORITY if kind in candidates), "")
    if not is_valid_ip(ip):
        raise NodeAddressError(f"node {name} has no valid hostname and/or IP address: {hostname} {ip}")
    return hostname, ip


def get_node_schedulable_status(node) -> str:
    if node.spec is not None and node.spec.unschedulable:
        return "false"
    return "true"
