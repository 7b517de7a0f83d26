"""
Rich formatting utilities for CLI output.
"""

from typing import Iterable, List

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from remoteserver.core.detector import MissingTool, SystemInfo
from remoteserver.probes.base import Outcome
from remoteserver.report.reporters import Reporter


def _status_icon_and_color(passed: bool) -> tuple[str, str]:
    """Map a pass/fail flag to icon and color."""
    if passed:
        return "✓", "green"
    return "✗", "red"


class RichReporter(Reporter):
    """Print each outcome as one colored line."""

    def __init__(self, console: Console):
        self.console = console

    def report(self, outcome: Outcome) -> None:
        icon, color = _status_icon_and_color(outcome.passed)
        line = f"[{color}]{icon}[/{color}] [bold]{outcome.check}[/bold] {escape(outcome.target)}"
        if outcome.description:
            line += f" [dim]- {escape(outcome.description)}[/dim]"
        self.console.print(line, highlight=False)
        if outcome.diagnostic:
            self.console.print(f"    [yellow]{escape(outcome.diagnostic)}[/yellow]", highlight=False)


def format_summary(results: Iterable[Outcome], console: Console) -> None:
    """Print a table of outcomes followed by a pass/fail count."""
    outcomes: List[Outcome] = list(results)

    table = Table(title="Check Results")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Check", style="cyan")
    table.add_column("Target")
    table.add_column("Result")
    table.add_column("Duration", justify="right")
    table.add_column("Details")

    for idx, outcome in enumerate(outcomes, start=1):
        icon, color = _status_icon_and_color(outcome.passed)
        table.add_row(
            str(idx),
            outcome.check,
            escape(outcome.target),
            f"[{color}]{icon} {'PASS' if outcome.passed else 'FAIL'}[/{color}]",
            f"{outcome.duration:.2f}s",
            escape(outcome.diagnostic or outcome.description),
        )

    console.print()
    console.print(table)

    failed = sum(1 for o in outcomes if not o.passed)
    if failed:
        console.print(f"[bold red]{failed} of {len(outcomes)} check(s) failed[/bold red]")
    else:
        console.print(f"[bold green]All {len(outcomes)} check(s) passed[/bold green]")


def print_tools(system_info: SystemInfo, paths: dict, missing: List[MissingTool], console: Console) -> None:
    """Print detected system information and probe tool availability."""
    table = Table(title="Probe Tools", show_header=True)
    table.add_column("Tool", style="cyan")
    table.add_column("Path")
    table.add_column("Note", style="dim")

    notes = {tool.name: tool.suggestion for tool in missing}
    for tool, path in paths.items():
        table.add_row(
            tool,
            path or "[red]not found[/red]",
            escape(notes.get(tool, "")),
        )

    console.print(f"[bold]{system_info.os_type}[/bold] {system_info.platform} "
                  f"(Python {system_info.python_version}) on {system_info.hostname}")
    console.print(table)
