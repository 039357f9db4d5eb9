# src/kubestats/cli/start.py
"""
Start command for the kubestats CLI.

Runs a scrape cycle every SCRAPE_INTERVAL and writes the latest batches to
OUTPUT_PATH until interrupted.
"""

import asyncio
import logging
import signal
from typing import Optional

import typer
from typing_extensions import Annotated

from ..core.config import config
from ..core.factory import get_processor, get_telemetry
from ..core.scheduler import Scheduler
from .utils import run_scrape_cycle

logger = logging.getLogger(__name__)

app = typer.Typer(name="start", help="Start the periodic kubelet scrape service.")


async def _serve(interval: str, output: str) -> None:
    telemetry = get_telemetry()
    processor = get_processor(telemetry)
    scheduler = Scheduler()
    stop_event = asyncio.Event()

    def request_shutdown(sig_name: str) -> None:
        logger.info("Received %s, initiating graceful shutdown...", sig_name)
        stop_event.set()

    loop = asyncio.get_running_loop()
    for sig in (signal.SIGTERM, signal.SIGINT):
        try:
            loop.add_signal_handler(sig, request_shutdown, sig.name)
        except NotImplementedError:
            # Not supported on every platform; CTRL+C still raises KeyboardInterrupt.
            pass

    async def scrape_cycle():
        await run_scrape_cycle(processor, interval, output_path=output)

    try:
        scheduler.add_job_from_string(scrape_cycle, interval)
        logger.info("kubestats is running (every %s). Press CTRL+C to exit.", interval)
        await stop_event.wait()
    finally:
        await scheduler.stop()
        await processor.node_collector.close()
        telemetry.shutdown()
        logger.info("Shutting down kubestats service gracefully.")


@app.callback(invoke_without_command=True)
def start(
    ctx: typer.Context,
    interval: Annotated[
        Optional[str],
        typer.Option("--interval", "-i", help="Scrape interval (e.g. '30s', '1m'). Defaults to SCRAPE_INTERVAL."),
    ] = None,
    output: Annotated[
        Optional[str],
        typer.Option("--output", "-o", help="Path the latest batches are written to. Defaults to OUTPUT_PATH."),
    ] = None,
) -> None:
    """
    Start the scheduler loop.
    """
    if ctx.invoked_subcommand is not None:
        return

    interval = interval or config.SCRAPE_INTERVAL
    output = output or config.OUTPUT_PATH
    logger.info("Initializing kubestats...")

    try:
        asyncio.run(_serve(interval, output))
    except ValueError as e:
        logger.error("Startup failed: %s", e)
        raise typer.Exit(code=1)
    except KeyboardInterrupt:
        logger.info("Shutting down kubestats service.")
        raise typer.Exit()
