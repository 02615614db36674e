# src/draview/models/cli.py
"""
Data models for draview CLI command options using Typer.
"""

from pathlib import Path
from typing import Optional

import typer
from typing_extensions import Annotated


class ConnectionOptions:
    """Dependency-injectable model for cluster connection options."""

    def __init__(
        self,
        kubeconfig: Annotated[
            Optional[Path],
            typer.Option(
                "--kubeconfig",
                help="Path to the kubeconfig file. Defaults to $KUBECONFIG, then in-cluster, then ~/.kube/config.",
                dir_okay=False,
            ),
        ] = None,
        context: Annotated[
            Optional[str],
            typer.Option("--context", help="Kubeconfig context to use."),
        ] = None,
        timeout: Annotated[
            Optional[float],
            typer.Option("--timeout", help="Seconds to wait for the cluster listings (0 disables the deadline)."),
        ] = None,
    ):
        self.kubeconfig = kubeconfig
        self.context = context
        self.timeout = timeout
        self._validate()

    def _validate(self):
        if self.timeout is not None and self.timeout < 0:
            raise typer.BadParameter("--timeout must be zero or positive.")


class OutputOptions:
    """Dependency-injectable model for output/export options."""

    FORMATS = ("csv", "json")

    def __init__(
        self,
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
        self.output_format = output_format
        self.output_path = output_path
        self._validate()

    def _validate(self):
        """Validates the output format."""
        if self.output_format and self.output_format.lower() not in self.FORMATS:
            raise typer.BadParameter(f"Invalid output format '{self.output_format}'. Must be 'csv' or 'json'.")

    @property
    def is_enabled(self) -> bool:
        """Checks if file output is enabled."""
        return self.output_format is not None

    @property
    def format(self) -> str:
        """Returns the validated, lower-cased format."""
        return self.output_format.lower() if self.output_format else "csv"
