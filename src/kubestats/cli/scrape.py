# src/kubestats/cli/scrape.py
"""
Implements the one-shot `scrape` command: a single scrape cycle over all nodes.
"""

import asyncio
import logging
from typing import Optional

import typer
from typing_extensions import Annotated

from ..core.config import config
from ..core.factory import get_processor, get_telemetry
from ..reporters.console_reporter import ConsoleReporter
from .utils import run_scrape_cycle

logger = logging.getLogger(__name__)

app = typer.Typer(help="Run a single scrape cycle over every node.", add_completion=False)


async def _scrape(window: str, output: Optional[str], quiet: bool) -> int:
    telemetry = get_telemetry()
    processor = get_processor(telemetry)
    try:
        result = await run_scrape_cycle(
            processor,
            window,
            output_path=output,
            reporter=None if quiet else ConsoleReporter(),
        )
    finally:
        await processor.node_collector.close()
        telemetry.shutdown()

    if not result.batches:
        return 1
    return 0


@app.callback(invoke_without_command=True)
def scrape(
    ctx: typer.Context,
    window: Annotated[
        str,
        typer.Option("--window", "-w", help="Width of the scrape window ending now (e.g. '30s', '1m')."),
    ] = config.SCRAPE_INTERVAL,
    output: Annotated[
        Optional[str],
        typer.Option("--output", "-o", help="Write the normalized batches as JSON to this path."),
    ] = None,
    quiet: Annotated[bool, typer.Option("--quiet", "-q", help="Do not print the result table.")] = False,
) -> None:
    """
    Scrape every node's kubelet once and print (or export) the normalized metric sets.
    """
    if ctx.invoked_subcommand is not None:
        return

    exit_code = asyncio.run(_scrape(window, output, quiet))
    if exit_code:
        typer.echo("No node could be scraped.", err=True)
        raise typer.Exit(code=exit_code)
