from __future__ import annotations

import json
import os
from typing import Any, Dict, Iterable, List

import aiofiles

from ..models.metrics import DataBatch, MetricSet, MetricValue
from ..utils.date_utils import to_iso_z
from .base_exporter import BaseExporter


def _value_to_dict(value: MetricValue) -> Dict[str, Any]:
    return {
        "type": value.metric_type.value,
        "value_type": value.value_type.value,
        "value": value.value,
    }


def _metric_set_to_dict(metric_set: MetricSet) -> Dict[str, Any]:
    return {
        "labels": dict(metric_set.labels),
        "collection_start_time": (
            to_iso_z(metric_set.collection_start_time) if metric_set.collection_start_time else None
        ),
        "scrape_time": to_iso_z(metric_set.scrape_time),
        "metrics": {name: _value_to_dict(value) for name, value in sorted(metric_set.metric_values.items())},
        "labeled_metrics": [
            {"name": lm.name, "labels": dict(lm.labels), **_value_to_dict(lm.value)}
            for lm in metric_set.labeled_metrics
        ],
    }


def batch_to_dict(batch: DataBatch) -> Dict[str, Any]:
    return {
        "timestamp": to_iso_z(batch.timestamp),
        "metric_sets": {key: _metric_set_to_dict(ms) for key, ms in sorted(batch.metric_sets.items())},
    }


class JSONExporter(BaseExporter):
    DEFAULT_FILENAME = "kubestats-batches.json"

    async def export(self, batches: Iterable[DataBatch], path: str | None = None) -> str:
        out_path = path or self.DEFAULT_FILENAME
        rows: List[Dict[str, Any]] = [batch_to_dict(batch) for batch in batches or []]
        # Ensure parent directory exists
        os.makedirs(os.path.dirname(out_path) or ".", exist_ok=True)

        async with aiofiles.open(out_path, "w", encoding="utf-8") as fh:
            content = json.dumps(rows, ensure_ascii=False, indent=2)
            await fh.write(content)
        return out_path
