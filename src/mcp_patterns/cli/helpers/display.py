"""
Display helper functions for CLI commands.
"""

from typing import List

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from mcp_patterns.core.exceptions import (
    MCPPatternsError,
    MissingPrerequisiteError,
    UnknownPatternError,
)
from mcp_patterns.core.models import (
    Pattern,
    PatternSummary,
    PrerequisiteReport,
    ProgressEvent,
    ServerOutcome,
    ServerSummary,
    ToolState,
)

console = Console()
err_console = Console(stderr=True)

USAGE_LINES = [
    "Usage: mcp-patterns PATTERN [PATTERN...]",
    "       mcp-patterns --remove PATTERN [PATTERN...]",
    "       mcp-patterns list [PATTERN]",
]


def _plural(count: int, word: str) -> str:
    return f"{count} {word}" if count == 1 else f"{count} {word}s"


def print_header(title: str, patterns: List[str], label: str, count: int) -> None:
    """Banner shown before an add or remove."""
    console.print(f"\n[bold blue]{escape(title)}[/bold blue]")
    console.print("=" * len(title))
    console.print("")
    console.print(f"Patterns: {escape(' '.join(patterns))}")
    console.print(f"{label}: {_plural(count, 'server')}")


def print_prerequisites(report: PrerequisiteReport) -> None:
    """One line per checked tool."""
    console.print("\n[bold]Checking prerequisites...[/bold]")
    for status in report.statuses:
        tool = escape(status.tool)
        if status.state == ToolState.PRESENT:
            console.print(f"  [green]✓ {tool} {escape(status.detail)}[/green]")
        elif status.state == ToolState.DEGRADED:
            console.print(
                f"  [yellow]⚠ {tool} {escape(status.detail)} - skipping {tool}-based servers[/yellow]"
            )
        else:
            hint = f" (install: {escape(status.guidance)})" if status.guidance else ""
            console.print(f"  [red]✗ {tool} {escape(status.detail)}{hint}[/red]")


class ProgressPrinter:
    """Prints reconcile progress events as they arrive."""

    def __init__(self, heading: str = "Installing servers..."):
        self.heading = heading
        self._started = False

    def __call__(self, event: ProgressEvent) -> None:
        name = escape(event.server)

        if event.outcome == ServerOutcome.ALREADY_INSTALLED:
            console.print(f"  [blue]- {name} (already installed, skipping)[/blue]")
            return

        if not self._started:
            console.print(f"\n[bold]{escape(self.heading)}[/bold]")
            self._started = True

        prefix = f"  \\[{event.position}/{event.total}] {name} ... "
        if event.outcome == ServerOutcome.INSTALLED:
            console.print(f"{prefix}[green]✓[/green]")
        elif event.outcome == ServerOutcome.REMOVED:
            console.print(f"{prefix}[green]✓ removed[/green]")
        elif event.outcome == ServerOutcome.NOT_INSTALLED:
            console.print(f"{prefix}[yellow]⚠ not installed[/yellow]")
        else:
            console.print(f"{prefix}[red]✗ failed[/red]")


def print_summary(text: str) -> None:
    console.print(f"\n[bold]Summary:[/bold] {escape(text)}")


def print_pattern_list(rows: List[PatternSummary]) -> None:
    """Table of every pattern."""
    table = Table(
        title="Available Patterns",
        show_header=True,
        header_style="bold cyan",
        title_style="bold blue",
        title_justify="left",
    )
    table.add_column("Pattern", style="green", no_wrap=True)
    table.add_column("Servers", style="blue", justify="right", no_wrap=True)
    table.add_column("Description", style="white")

    for row in rows:
        table.add_row(row.pattern, str(row.server_count), row.description)

    console.print(table)
    console.print("")
    for line in USAGE_LINES:
        console.print(line, highlight=False)


def print_pattern_detail(pattern: Pattern, rows: List[ServerSummary]) -> None:
    """Servers in a single pattern."""
    console.print(
        f"[bold blue]Pattern: {escape(pattern.name)}[/bold blue] "
        f"({_plural(pattern.server_count, 'server')})"
    )
    console.print(f"  {escape(pattern.description)}\n")

    table = Table(show_header=True, header_style="bold cyan", box=None, padding=(0, 2))
    table.add_column("Server", style="green", no_wrap=True)
    table.add_column("Description", style="white")
    table.add_column("Requires", style="dim", no_wrap=True)

    for row in rows:
        table.add_row(row.server, row.description, row.prerequisite.value)

    console.print(table)
    console.print("")


def print_error(error: MCPPatternsError) -> None:
    """Render a fatal error with the help the user needs to fix it."""
    if isinstance(error, UnknownPatternError):
        for name in error.names:
            err_console.print(f"[red]Unknown pattern: {escape(name)}[/red]")
        if error.valid:
            err_console.print(f"[red]Valid patterns: {escape(' '.join(error.valid))}[/red]")
    elif isinstance(error, MissingPrerequisiteError):
        err_console.print(f"\n[red]Missing required tools: {escape(' '.join(error.tools))}[/red]")
        err_console.print("[red]Install missing tools and try again.[/red]")
    else:
        err_console.print(f"[red]Error: {escape(error.message)}[/red]")
