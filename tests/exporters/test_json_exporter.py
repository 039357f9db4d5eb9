# tests/exporters/test_json_exporter.py
import json
from datetime import datetime, timezone

import pytest

from kubestats.exporters.json_exporter import JSONExporter, batch_to_dict
from kubestats.models.metrics import DataBatch, LabeledMetric, MetricSet, MetricType, MetricValue

END = datetime(2024, 3, 1, 12, 0, 0, tzinfo=timezone.utc)


def _batch():
    metric_set = MetricSet(
        key="node:n1",
        labels={"type": "node", "schedulable": "true", "nodename": "n1"},
        metric_values={
            "uptime": MetricValue.int64(MetricType.CUMULATIVE, 60000),
            "cpu/load": MetricValue.float32(MetricType.GAUGE, 0.5),
        },
        labeled_metrics=[
            LabeledMetric(
                name="filesystem/usage",
                labels={"resource_id": "/dev/sda1"},
                value=MetricValue.int64(MetricType.GAUGE, 42),
            )
        ],
        collection_start_time=datetime(2024, 3, 1, 11, 59, 0, tzinfo=timezone.utc),
        scrape_time=END,
    )
    return DataBatch(timestamp=END, metric_sets={metric_set.key: metric_set})


@pytest.mark.asyncio
async def test_json_exporter_empty_data(tmp_path):
    exporter = JSONExporter()
    out = tmp_path / "kubestats-batches.json"
    await exporter.export([], str(out))
    assert out.exists()
    content = json.loads(out.read_text(encoding="utf-8"))
    assert content == []


@pytest.mark.asyncio
async def test_json_exporter_writes_batches(tmp_path):
    exporter = JSONExporter()
    out = tmp_path / "nested" / "batches.json"
    written = await exporter.export([_batch()], str(out))
    assert written == str(out)
    content = json.loads(out.read_text(encoding="utf-8"))
    assert content[0]["timestamp"] == "2024-03-01T12:00:00Z"
    node_set = content[0]["metric_sets"]["node:n1"]
    assert node_set["labels"]["type"] == "node"
    assert node_set["collection_start_time"] == "2024-03-01T11:59:00Z"
    assert node_set["metrics"]["uptime"] == {"type": "cumulative", "value_type": "int64", "value": 60000}
    assert node_set["metrics"]["cpu/load"]["value"] == 0.5
    assert node_set["labeled_metrics"] == [
        {
            "name": "filesystem/usage",
            "labels": {"resource_id": "/dev/sda1"},
            "type": "gauge",
            "value_type": "int64",
            "value": 42,
        }
    ]


def test_batch_to_dict_without_collection_start_time():
    batch = _batch()
    metric_set = batch.metric_sets["node:n1"].model_copy(update={"collection_start_time": None})

    data = batch_to_dict(DataBatch(timestamp=END, metric_sets={"node:n1": metric_set}))

    assert data["metric_sets"]["node:n1"]["collection_start_time"] is None
