# tests/core/test_factory.py

from kubestats.collectors.kubelet_client import KubeletClient
from kubestats.collectors.node_collector import NodeCollector
from kubestats.core.config import config
from kubestats.core.factory import get_kubelet_client, get_processor, get_telemetry


def test_get_kubelet_client_uses_config():
    client = get_kubelet_client()

    assert isinstance(client, KubeletClient)
    assert client.port == config.KUBELET_PORT
    assert client.scheme == config.KUBELET_SCHEME
    assert client.verify == config.KUBELET_VERIFY_CERTS


def test_get_processor_wires_collectors(mocker):
    telemetry = mocker.MagicMock()

    processor = get_processor(telemetry)

    assert isinstance(processor.node_collector, NodeCollector)
    assert isinstance(processor.kubelet_client, KubeletClient)
    assert processor.telemetry is telemetry


def test_get_telemetry_without_endpoint(mocker):
    mocker.patch.object(config, "OTEL_EXPORTER_OTLP_ENDPOINT", "")
    exporter = mocker.patch("kubestats.core.telemetry.OTLPMetricExporter")

    telemetry = get_telemetry()
    telemetry.shutdown()

    exporter.assert_not_called()
