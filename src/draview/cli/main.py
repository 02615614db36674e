# src/draview/cli/main.py
"""
This module is the main entry point for the draview CLI.

It aggregates all commands from the submodules.
"""

import logging

import typer

from ..core.config import config
from . import nodes

# --- Setup Logger ---
logging.basicConfig(
    level=config.LOG_LEVEL.upper(),
    format="%(asctime)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


app = typer.Typer(
    name="draview",
    help="Snapshot of node capacity and Dynamic Resource Allocation devices in a Kubernetes cluster.",
    add_completion=False,
)


def version_callback(value: bool):
    """
    Prints the version of draview.
    """
    if value:
        from .. import __version__

        typer.echo(f"draview version: {__version__}")
        raise typer.Exit()


@app.command()
def version():
    """
    Show the version of draview.
    """
    from .. import __version__

    typer.echo(f"draview version: {__version__}")


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
    draview CLI main entry point.
    """
    pass


# Register command sub-apps
app.add_typer(nodes.app, name="nodes")


if __name__ == "__main__":
    app()
