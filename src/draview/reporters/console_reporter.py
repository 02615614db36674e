# src/draview/reporters/console_reporter.py
"""
A reporter that displays the reconciled node records in a formatted table in the console.
"""

import logging
from typing import List

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ..models.node import NodeRecord
from .base_reporter import BaseReporter

logger = logging.getLogger(__name__)


class ConsoleReporter(BaseReporter):
    """
    Renders node capacity and device availability using the 'rich' library.
    """

    def __init__(self):
        self.console = Console()

    def report(self, data: List[NodeRecord]):
        """
        Displays one row per node. Devices are listed as "; "-separated
        "<name>[+<memory>]: <total> total, <available> available".
        """
        if not data:
            self.console.print("No nodes to report.", style="yellow")
            return

        table = Table(
            title="Node Resources and DRA Devices",
            header_style="bold magenta",
            show_lines=True,
        )
        table.add_column("Node", style="cyan")
        table.add_column("Role", style="cyan")
        table.add_column("CPU (total/avail)", style="blue", justify="right")
        table.add_column("Memory (total/avail GiB)", style="blue", justify="right")
        table.add_column("Storage (total/avail)", style="blue", justify="right")
        table.add_column("Devices", style="green")

        for node in data:
            table.add_row(
                escape(node.name),
                escape(node.role),
                node.capacity.cpu_display(),
                node.capacity.memory_display(),
                node.capacity.storage_display(),
                self._devices_cell(node),
            )

        self.console.print(table)

    @staticmethod
    def _devices_cell(node: NodeRecord) -> str:
        if not node.devices:
            return "[dim]None[/]"
        lines = []
        for device in node.devices:
            style = "red" if device.available_count == 0 else "green"
            lines.append(
                f"{escape(device.label)}: {device.total_count} total, [{style}]{device.available_count} available[/]"
            )
        return "; ".join(lines)
