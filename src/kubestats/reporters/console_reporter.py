# src/kubestats/reporters/console_reporter.py
"""
A reporter that displays a scrape cycle's metric sets in a formatted table in the console.
"""

import logging

from rich.console import Console
from rich.table import Table

from ..core.processor import ScrapeResult
from ..models.metrics import (
    LABEL_CONTAINER_NAME,
    LABEL_NAMESPACE_NAME,
    LABEL_POD_NAME,
    MetricSet,
)
from .base_reporter import BaseReporter

logger = logging.getLogger(__name__)


def _int_metric(metric_set: MetricSet, name: str) -> str:
    value = metric_set.metric_values.get(name)
    return f"{value.value}" if value is not None else "-"


def _mib_metric(metric_set: MetricSet, name: str) -> str:
    value = metric_set.metric_values.get(name)
    return f"{value.value / (1024 * 1024):.1f}" if value is not None else "-"


class ConsoleReporter(BaseReporter):
    """
    Renders scrape results to the console using the 'rich' library.
    """

    def __init__(self, console: Console = None):
        self.console = console or Console()

    def report(self, result: ScrapeResult):
        """
        Displays one row per metric set, then any node-level failure.
        """
        if not result.batches and not result.failures:
            self.console.print("No data to report.", style="yellow")
            return

        if result.batches:
            table = Table(
                title=f"kubestats scrape ending {result.end.isoformat()}",
                header_style="bold magenta",
                show_lines=False,
            )
            table.add_column("Node", style="cyan")
            table.add_column("Type", style="magenta")
            table.add_column("Namespace", style="cyan")
            table.add_column("Pod", style="cyan")
            table.add_column("Container", style="cyan")
            table.add_column("CPU (ns)", style="green", justify="right")
            table.add_column("Mem WS (Mi)", style="blue", justify="right")
            table.add_column("Metrics", style="dim", justify="right")

            for node_name in sorted(result.batches):
                batch = result.batches[node_name]
                for key in sorted(batch.metric_sets):
                    metric_set = batch.metric_sets[key]
                    labels = metric_set.labels
                    table.add_row(
                        node_name,
                        metric_set.metric_set_type.value,
                        labels.get(LABEL_NAMESPACE_NAME, ""),
                        labels.get(LABEL_POD_NAME, ""),
                        labels.get(LABEL_CONTAINER_NAME, ""),
                        _int_metric(metric_set, "cpu/usage"),
                        _mib_metric(metric_set, "memory/working_set"),
                        str(len(metric_set.metric_values) + len(metric_set.labeled_metrics)),
                    )

            self.console.print(table)

        for node_name, error in sorted(result.failures.items()):
            self.console.print(f"Node '{node_name}' failed: {error}", style="bold red")
