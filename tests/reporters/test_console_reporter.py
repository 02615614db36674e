# tests/reporters/test_console_reporter.py
"""
Unit tests for the ConsoleReporter class.
"""
import io
from decimal import Decimal
from unittest.mock import MagicMock, call

from rich.console import Console

from draview.models.node import DeviceSummary, NodeCapacity, NodeRecord
from draview.reporters.console_reporter import ConsoleReporter

GI = 1024**3


def make_records():
    return [
        NodeRecord(
            name="gpu-node",
            role="worker",
            capacity=NodeCapacity(
                total_cpu=Decimal(4),
                available_cpu=Decimal("2.5"),
                total_memory=Decimal(16 * GI),
                available_memory=Decimal(12 * GI),
                total_storage=Decimal(100 * GI),
                available_storage=Decimal(90 * GI),
            ),
            devices=[
                DeviceSummary(display_name="Vendor X", memory=Decimal(8 * GI), total_count=2, available_count=1),
                DeviceSummary(display_name="fpga.example.com", total_count=1, available_count=0),
            ],
        ),
        NodeRecord(name="plain-node"),
    ]


def test_console_reporter_with_data(mocker):
    mock_console_class = mocker.patch("draview.reporters.console_reporter.Console")
    mock_table_class = mocker.patch("draview.reporters.console_reporter.Table")
    mock_console_instance = MagicMock()
    mock_table_instance = MagicMock()
    mock_console_class.return_value = mock_console_instance
    mock_table_class.return_value = mock_table_instance

    reporter = ConsoleReporter()
    reporter.report(make_records())

    assert mock_table_class.call_count == 1
    call_kwargs = mock_table_class.call_args.kwargs
    assert call_kwargs.get("title") == "Node Resources and DRA Devices"
    assert call_kwargs.get("header_style") == "bold magenta"

    expected_column_calls = [
        call("Node", style="cyan"),
        call("Role", style="cyan"),
        call("CPU (total/avail)", style="blue", justify="right"),
        call("Memory (total/avail GiB)", style="blue", justify="right"),
        call("Storage (total/avail)", style="blue", justify="right"),
        call("Devices", style="green"),
    ]
    mock_table_instance.add_column.assert_has_calls(expected_column_calls, any_order=False)

    assert mock_table_instance.add_row.call_count == 2
    first_row = mock_table_instance.add_row.call_args_list[0].args
    assert first_row[:5] == ("gpu-node", "worker", "4/2500m", "16.00Gi/12.00Gi", "100Gi/90Gi")
    assert first_row[5] == (
        "Vendor X+8Gi: 2 total, [green]1 available[/]; "
        "fpga.example.com: 1 total, [red]0 available[/]"
    )

    second_row = mock_table_instance.add_row.call_args_list[1].args
    assert second_row == ("plain-node", "<none>", "0/0", "0.00Gi/0.00Gi", "0/0", "[dim]None[/]")

    mock_console_instance.print.assert_called_once_with(mock_table_instance)


def test_console_reporter_no_data(mocker):
    mock_console_class = mocker.patch("draview.reporters.console_reporter.Console")
    mock_table_class = mocker.patch("draview.reporters.console_reporter.Table")
    mock_console_instance = MagicMock()
    mock_console_class.return_value = mock_console_instance

    ConsoleReporter().report([])

    mock_table_class.assert_not_called()
    mock_console_instance.print.assert_called_once_with("No nodes to report.", style="yellow")


def render(records):
    reporter = ConsoleReporter()
    reporter.console = Console(file=io.StringIO(), width=300, color_system=None)
    reporter.report(records)
    return reporter.console.file.getvalue()


def test_device_names_with_brackets_are_printed_verbatim():
    output = render(
        [
            NodeRecord(
                name="node-1",
                devices=[
                    DeviceSummary(display_name="Accel[/x]", total_count=2, available_count=1),
                    DeviceSummary(display_name="Board [bold]v2", total_count=1, available_count=0),
                ],
            )
        ]
    )

    assert "Accel[/x]: 2 total, 1 available" in output
    assert "Board [bold]v2: 1 total, 0 available" in output


def test_node_name_and_role_with_brackets_are_printed_verbatim():
    output = render([NodeRecord(name="node[/a]", role="gpu[red]")])

    assert "node[/a]" in output
    assert "gpu[red]" in output
    assert "None" in output
