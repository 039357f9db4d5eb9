# src/kubestats/core/telemetry.py
"""
OpenTelemetry instrumentation of the scrape pipeline.

Unlike a process-wide meter, `ScrapeTelemetry` is created by whoever runs the
scrape loop and handed to the collectors that need it; it owns its
MeterProvider and must be shut down by its creator.
"""

import logging
import time
from contextlib import contextmanager
from typing import Iterator, Optional

from opentelemetry.exporter.otlp.proto.http.metric_exporter import OTLPMetricExporter
from opentelemetry.sdk.metrics import MeterProvider
from opentelemetry.sdk.metrics.export import PeriodicExportingMetricReader
from opentelemetry.sdk.resources import SERVICE_NAME, Resource

logger = logging.getLogger(__name__)

REQUEST_DURATION_METRIC = "kubestats.kubelet.request.duration"


def create_meter_provider(endpoint: Optional[str] = None) -> MeterProvider:
    """
    Builds a MeterProvider, exporting via OTLP/HTTP when an endpoint is given.
    """
    resource = Resource(attributes={SERVICE_NAME: "kubestats"})
    readers = []
    if endpoint:
        exporter = OTLPMetricExporter(endpoint=f"{endpoint.rstrip('/')}/v1/metrics")
        readers.append(PeriodicExportingMetricReader(exporter))
        logger.info("OpenTelemetry metrics exporting to: %s", endpoint)
    return MeterProvider(resource=resource, metric_readers=readers)


class ScrapeTelemetry:
    """Records kubelet request latencies, per node."""

    def __init__(self, meter_provider: Optional[MeterProvider] = None):
        self._provider = meter_provider or create_meter_provider()
        meter = self._provider.get_meter("kubestats.kubelet")
        self._request_duration = meter.create_histogram(
            REQUEST_DURATION_METRIC,
            unit="us",
            description="The Kubelet request latencies in microseconds.",
        )
        self._closed = False

    def record_request(self, node: str, duration_us: float) -> None:
        if self._closed:
            logger.debug("Telemetry already shut down; dropping latency sample for %s", node)
            return
        self._request_duration.record(duration_us, attributes={"node": node})

    @contextmanager
    def measure_request(self, node: str) -> Iterator[None]:
        """Times the enclosed block, whether it succeeds or raises."""
        start = time.perf_counter()
        try:
            yield
        finally:
            self.record_request(node, (time.perf_counter() - start) * 1e6)

    def shutdown(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._provider.shutdown()
        logger.debug("Scrape telemetry shut down.")
