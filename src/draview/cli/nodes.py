# src/draview/cli/nodes.py
"""
Implements the `nodes` command: fetch, reconcile and display (or export)
node capacity and device availability.
"""

import asyncio
import logging
import os
import sys
from pathlib import Path
from typing import List, Optional

import typer
from typing_extensions import Annotated

from ..core.exceptions import DraViewError
from ..core.k8s_client import reset_k8s_config
from ..core.reconciler import ClusterReconciler
from ..exporters.csv_exporter import CSVExporter
from ..exporters.json_exporter import JSONExporter
from ..models.cli import ConnectionOptions, OutputOptions
from ..models.node import NodeRecord
from ..reporters.console_reporter import ConsoleReporter

logger = logging.getLogger(__name__)

app = typer.Typer(help="Show node capacity and DRA device availability.", add_completion=False)


def apply_connection_options(options: ConnectionOptions):
    """Expose CLI connection flags through the environment read by Config."""
    changed = False
    if options.kubeconfig:
        os.environ["KUBECONFIG"] = str(options.kubeconfig)
        changed = True
    if options.context:
        os.environ["KUBE_CONTEXT"] = options.context
        changed = True
    if changed:
        reset_k8s_config()


async def handle_export(data: List[NodeRecord], output_options: OutputOptions) -> str:
    """Writes the node records to a JSON or CSV file and returns the path."""
    if output_options.format == "json":
        exporter = JSONExporter()
        rows = [record.to_document() for record in data]
    else:
        exporter = CSVExporter()
        rows = [record.to_row() for record in data]

    output_path = Path(output_options.output_path or Path.cwd() / exporter.DEFAULT_FILENAME)
    written_path = await exporter.export(rows, str(output_path))
    logger.info("Exported %d node records to %s", len(rows), written_path)
    print(f"Report exported to: {written_path}", file=sys.stderr)
    return written_path


async def run_nodes(connection: ConnectionOptions, output: OutputOptions):
    reconciler = ClusterReconciler()
    if connection.timeout is not None:
        reconciler.collector.timeout = connection.timeout
    try:
        records = await reconciler.reconcile()
    finally:
        await reconciler.close()

    if output.is_enabled:
        await handle_export(records, output)
    else:
        ConsoleReporter().report(records)


@app.callback(invoke_without_command=True)
def nodes(
    ctx: typer.Context,
    kubeconfig: Annotated[
        Optional[Path],
        typer.Option(
            "--kubeconfig",
            help="Path to the kubeconfig file. Defaults to $KUBECONFIG, then in-cluster, then ~/.kube/config.",
            dir_okay=False,
        ),
    ] = None,
    context: Annotated[Optional[str], typer.Option("--context", help="Kubeconfig context to use.")] = None,
    timeout: Annotated[
        Optional[float],
        typer.Option("--timeout", help="Seconds to wait for the cluster listings (0 disables the deadline)."),
    ] = None,
    output_format: Annotated[
        Optional[str],
        typer.Option(
            "--output",
            help="Output format (csv/json). If set, writes to a file instead of the console.",
            case_sensitive=False,
        ),
    ] = None,
    output_path: Annotated[
        Optional[Path],
        typer.Option(
            "--output-path",
            help="Specify output file path. Default: './draview-nodes.<format>'",
            exists=False,
            dir_okay=False,
            writable=True,
        ),
    ] = None,
):
    """
    Show every node's CPU, memory and storage (total/available) together with
    its DRA devices and how many of them are still free.
    """
    if ctx.invoked_subcommand is not None:
        return

    connection = ConnectionOptions(kubeconfig=kubeconfig, context=context, timeout=timeout)
    output = OutputOptions(output_format=output_format, output_path=output_path)
    apply_connection_options(connection)

    try:
        asyncio.run(run_nodes(connection, output))
    except DraViewError as e:
        logger.error("Could not build the node report: %s", e)
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)
    except OSError as e:
        logger.error("Failed to write the report: %s", e)
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)
