# tests/conftest.py

from datetime import datetime, timedelta, timezone

import pytest

from kubestats.models.cadvisor import ContainerInfo
from kubestats.models.node import NodeDescriptor

BASE_TIME = datetime(2024, 3, 1, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture(autouse=True)
def mock_settings_env_vars(monkeypatch):
    """
    Pytest fixture to mock environment variables for the config module.

    This fixture runs automatically for every test (`autouse=True`) so the
    configuration never depends on the developer's environment.
    """
    monkeypatch.setenv("KUBELET_PORT", "10250")
    monkeypatch.setenv("KUBELET_SCHEME", "https")
    monkeypatch.setenv("KUBELET_BEARER_TOKEN", "test-token")
    monkeypatch.delenv("OTEL_EXPORTER_OTLP_ENDPOINT", raising=False)


@pytest.fixture
def node():
    """The node owning the snapshots under test."""
    return NodeDescriptor(
        name="n1",
        hostname="n1.cluster.local",
        ip="10.0.0.5",
        external_id="ext-n1",
        schedulable=True,
    )


@pytest.fixture
def make_container():
    """
    Factory building a ContainerInfo from the cAdvisor JSON shape.

    Only the name is required; stats default to a single sample at BASE_TIME.
    """

    def _make(name, labels=None, image="", stats=None, custom_specs=None, **spec_fields):
        if stats is None:
            stats = [{"timestamp": BASE_TIME.isoformat()}]
        spec = {
            "creation_time": (BASE_TIME - timedelta(minutes=5)).isoformat(),
            "labels": labels or {},
            "image": image,
            **spec_fields,
        }
        if custom_specs is not None:
            spec["has_custom_metrics"] = True
            spec["custom_metrics"] = custom_specs
        return ContainerInfo.model_validate({"name": name, "spec": spec, "stats": stats})

    return _make


@pytest.fixture
def pod_labels():
    def _labels(namespace="ns1", pod="pod1", container="c1", uid="uid-1"):
        labels = {"io.kubernetes.pod.uid": uid}
        if namespace is not None:
            labels["io.kubernetes.pod.namespace"] = namespace
        if pod is not None:
            labels["io.kubernetes.pod.name"] = pod
        if container is not None:
            labels["io.kubernetes.container.name"] = container
        return labels

    return _labels
