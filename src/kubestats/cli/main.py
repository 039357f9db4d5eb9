# src/kubestats/cli/main.py
"""
This module is the main entry point for the kubestats CLI.

It aggregates all commands from the submodules (scrape, start).
"""

import logging

import typer

from ..core.config import config
from . import scrape, start

# --- Setup Logger ---
logging.basicConfig(
    level=config.LOG_LEVEL.upper(),
    format="%(asctime)s - %(levelname)s - %(name)s - %(message)s",
)
logger = logging.getLogger(__name__)


app = typer.Typer(
    name="kubestats",
    help="Scrape kubelet container stats and normalize them into metric sets.",
    add_completion=False,
)


def version_callback(value: bool):
    """
    Prints the version of kubestats.
    """
    if value:
        from .. import __version__

        typer.echo(f"kubestats version: {__version__}")
        raise typer.Exit()


@app.command()
def version():
    """
    Show the version of kubestats.
    """
    from .. import __version__

    typer.echo(f"kubestats version: {__version__}")


@app.callback()
def main(
    version: bool = typer.Option(
        None,
        "--version",
        callback=version_callback,
        is_eager=True,
        help="Show the version and exit.",
    ),
):
    """
    kubestats CLI main entry point.
    """
    pass


# Register command sub-apps
app.add_typer(scrape.app, name="scrape")
app.add_typer(start.app, name="start")


if __name__ == "__main__":
    app()
