# src/kubestats/core/normalizer.py
"""
Turns raw container snapshots into normalized metric sets.

`normalize` handles a single snapshot; `translate` runs it over everything a
node returned in one scrape cycle. Both are stateless: the same input always
produces the same output, so node batches can be translated concurrently.
"""

import logging
from datetime import datetime
from typing import Iterable, List, Optional, Sequence

from ..models.cadvisor import ContainerInfo
from ..models.metrics import (
    LABEL_HOST_ID,
    LABEL_HOSTNAME,
    LABEL_NODENAME,
    DataBatch,
    MetricSet,
)
from ..models.node import NodeDescriptor
from .catalog import LABELED_METRICS, STANDARD_METRICS, LabeledMetricFamily, StandardMetric
from .classifier import classify
from .custom_metrics import custom_metric_name, decode_custom_metric

logger = logging.getLogger(__name__)


def normalize(
    container: ContainerInfo,
    node: NodeDescriptor,
    standard_metrics: Sequence[StandardMetric] = STANDARD_METRICS,
    labeled_metrics: Sequence[LabeledMetricFamily] = LABELED_METRICS,
) -> Optional[MetricSet]:
    """
    Normalizes one container snapshot scraped from `node`.

    Returns None when the snapshot carries no stat sample.
    """
    if not container.stats:
        return None

    spec = container.spec
    stat = container.stats[0]
    classification = classify(container, node)

    labels = {
        LABEL_NODENAME: node.name,
        LABEL_HOSTNAME: node.hostname,
        LABEL_HOST_ID: node.external_id,
    }
    labels.update(classification.labels)

    metric_values = {}
    for metric in standard_metrics:
        if metric.has_value is not None and metric.has_value(spec):
            metric_values[metric.name] = metric.get_value(spec, stat)

    labeled = []
    for family in labeled_metrics:
        if family.has_labeled_metric is not None and family.has_labeled_metric(spec, stat):
            labeled.extend(family.get_labeled_metric(spec, stat))

    if spec.has_custom_metrics:
        for metric_spec in spec.custom_metrics:
            values = stat.custom_metrics.get(metric_spec.name)
            if not values:
                continue
            value = decode_custom_metric(metric_spec, values)
            if value is not None:
                metric_values[custom_metric_name(metric_spec.name)] = value

    return MetricSet(
        key=classification.key,
        labels=labels,
        metric_values=metric_values,
        labeled_metrics=labeled,
        collection_start_time=spec.creation_time,
        scrape_time=stat.timestamp,
    )


def translate(containers: Iterable[ContainerInfo], node: NodeDescriptor, end: datetime) -> DataBatch:
    """
    Builds the batch for one node and one scrape cycle.

    Snapshots that cannot be normalized are dropped; they never fail the
    batch. The batch is stamped with `end`, whatever the sample timestamps.
    """
    batch = DataBatch(timestamp=end)
    skipped: List[str] = []

    for container in containers:
        try:
            metric_set = normalize(container, node)
        except (ValueError, TypeError, AttributeError) as e:
            logger.warning("Could not normalize container '%s' on node '%s': %s", container.name, node.name, e)
            skipped.append(container.name)
            continue

        if metric_set is None:
            logger.debug("Skipping container '%s' on node '%s': no stats", container.name, node.name)
            skipped.append(container.name)
            continue

        if metric_set.key in batch.metric_sets:
            logger.warning(
                "Duplicate metric set key '%s' on node '%s'; keeping the last one (container '%s').",
                metric_set.key,
                node.name,
                container.name,
            )
        batch.metric_sets[metric_set.key] = metric_set

    logger.debug(
        "Translated %d metric sets for node '%s' (%d skipped).", len(batch.metric_sets), node.name, len(skipped)
    )
    return batch
