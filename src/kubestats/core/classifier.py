# src/kubestats/core/classifier.py
"""
Classifies a raw container snapshot as a node, pod, pod container or system
container and builds its entity key and identity labels.

Older kubelets (Kubernetes 1.0.x) did not attach namespace and container name
labels. Two fallbacks recover that identity:

* the pod name label carried "<namespace>/<pod>";
* the container name is embedded in the Docker container name, e.g.
  ``k8s_kube-ui.7f9b83f6_kube-ui-v1-bxj1w_kube-system_9abfb0bd-..._e6841e8d``.

Both are pure functions so the format assumptions can be tested in isolation.
"""

import logging
from typing import Dict, Tuple

from pydantic import BaseModel, ConfigDict, Field

from ..models.cadvisor import ContainerInfo
from ..models.metrics import (
    LABEL_CONTAINER_BASE_IMAGE,
    LABEL_CONTAINER_NAME,
    LABEL_METRIC_SET_TYPE,
    LABEL_NAMESPACE_NAME,
    LABEL_NODE_SCHEDULABLE,
    LABEL_POD_ID,
    LABEL_POD_NAME,
    MetricSetType,
    node_container_key,
    node_key,
    pod_container_key,
    pod_key,
)
from ..models.node import NodeDescriptor

logger = logging.getLogger(__name__)

INFRA_CONTAINER_NAME = "POD"

KUBERNETES_POD_NAME_LABEL = "io.kubernetes.pod.name"
KUBERNETES_POD_NAMESPACE_LABEL = "io.kubernetes.pod.namespace"
KUBERNETES_POD_UID_LABEL = "io.kubernetes.pod.uid"
KUBERNETES_CONTAINER_LABEL = "io.kubernetes.container.name"

LEGACY_NAME_PREFIX = "k8s_"
LEGACY_NAME_DELIMITER = "."


class Classification(BaseModel):
    """Entity key, type and identity labels of one snapshot."""

    model_config = ConfigDict(frozen=True)

    key: str
    metric_set_type: MetricSetType
    labels: Dict[str, str] = Field(default_factory=dict)


def container_name_from_legacy_name(name: str) -> str:
    """
    Extracts the container name from a legacy Docker container name.

    Takes everything between the fixed 4-character prefix and the first '.'.
    Returns an empty string when the name has no '.'.
    """
    pos = name.find(LEGACY_NAME_DELIMITER)
    if pos < 0:
        return ""
    return name[len(LEGACY_NAME_PREFIX) : pos]


def split_legacy_pod_name(namespace: str, pod_name: str) -> Tuple[str, str]:
    """Splits a "<namespace>/<pod>" pod name when no namespace label is set."""
    if not namespace and "/" in pod_name:
        namespace, pod_name = pod_name.split("/", 1)
    return namespace, pod_name


def _classify_system_container(container: ContainerInfo, node: NodeDescriptor) -> Classification:
    logger.debug("Found system container %s with labels: %s", container.name, container.spec.labels)
    name = container.name
    if name.startswith("/"):
        name = name[1:]
    return Classification(
        key=node_container_key(node.name, name),
        metric_set_type=MetricSetType.SYSTEM_CONTAINER,
        labels={
            LABEL_METRIC_SET_TYPE: MetricSetType.SYSTEM_CONTAINER.value,
            LABEL_CONTAINER_NAME: name,
        },
    )


def _classify_kubernetes_container(
    container_name: str, namespace: str, pod_name: str, container: ContainerInfo
) -> Classification:
    labels = {
        LABEL_POD_ID: container.spec.labels.get(KUBERNETES_POD_UID_LABEL, ""),
        LABEL_POD_NAME: pod_name,
        LABEL_NAMESPACE_NAME: namespace,
    }
    if container_name == INFRA_CONTAINER_NAME:
        set_type = MetricSetType.POD
        key = pod_key(namespace, pod_name)
    else:
        set_type = MetricSetType.POD_CONTAINER
        key = pod_container_key(namespace, pod_name, container_name)
        labels[LABEL_CONTAINER_NAME] = container_name
        labels[LABEL_CONTAINER_BASE_IMAGE] = container.spec.image
    labels[LABEL_METRIC_SET_TYPE] = set_type.value
    return Classification(key=key, metric_set_type=set_type, labels=labels)


def classify(container: ContainerInfo, node: NodeDescriptor) -> Classification:
    """
    Decides which entity a snapshot describes.

    The fallback order matters: legacy snapshots without explicit namespace
    or container labels must still be attributed to their pod rather than
    end up as system containers.
    """
    if container.is_node:
        return Classification(
            key=node_key(node.name),
            metric_set_type=MetricSetType.NODE,
            labels={
                LABEL_METRIC_SET_TYPE: MetricSetType.NODE.value,
                LABEL_NODE_SCHEDULABLE: node.schedulable_label,
            },
        )

    labels = container.spec.labels
    container_name = labels.get(KUBERNETES_CONTAINER_LABEL, "")
    namespace = labels.get(KUBERNETES_POD_NAMESPACE_LABEL, "")
    pod_name = labels.get(KUBERNETES_POD_NAME_LABEL, "")

    namespace, pod_name = split_legacy_pod_name(namespace, pod_name)
    if not container_name:
        container_name = container_name_from_legacy_name(container.name)

    if not container_name or not namespace or not pod_name:
        return _classify_system_container(container, node)
    return _classify_kubernetes_container(container_name, namespace, pod_name, container)
