# src/kubestats/cli/utils.py
import logging
from datetime import datetime, timezone
from typing import Optional, Tuple

import typer

from ..core.processor import ScrapeProcessor, ScrapeResult
from ..exporters.json_exporter import JSONExporter
from ..reporters.console_reporter import ConsoleReporter
from ..utils.date_utils import parse_duration

logger = logging.getLogger(__name__)


def get_scrape_window(window: str, now: Optional[datetime] = None) -> Tuple[datetime, datetime]:
    """Returns the (start, end) of a window of the given duration ending now."""
    try:
        width = parse_duration(window)
    except ValueError as e:
        raise typer.BadParameter(str(e)) from None
    end = now or datetime.now(timezone.utc)
    return end - width, end


async def run_scrape_cycle(
    processor: ScrapeProcessor,
    window: str,
    output_path: Optional[str] = None,
    reporter: Optional[ConsoleReporter] = None,
) -> ScrapeResult:
    """
    Runs one scrape cycle, exports the batches when an output path is given
    and renders the result when a reporter is given.
    """
    start, end = get_scrape_window(window)
    result = await processor.run(start, end)

    if output_path:
        written = await JSONExporter().export(result.batches.values(), output_path)
        logger.info("Exported %d batch(es) to %s", len(result.batches), written)

    if reporter is not None:
        reporter.report(result)
    return result
