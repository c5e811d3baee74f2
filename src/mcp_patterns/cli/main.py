"""
Main CLI interface for MCP Patterns.

Install or remove MCP servers for Claude Code in pattern-based groups.
All installations are project-scoped.
"""

import sys
from typing import Optional, Tuple

import click
from rich.console import Console

from mcp_patterns import __version__
from mcp_patterns.cli.helpers import (
    ProgressPrinter,
    handle_errors,
    print_header,
    print_pattern_detail,
    print_pattern_list,
    print_prerequisites,
    print_summary,
)
from mcp_patterns.core.exceptions import MCPPatternsError
from mcp_patterns.core.manager import PatternManager
from mcp_patterns.core.reporter import summarize_add, summarize_remove
from mcp_patterns.utils.config import Config, reload_config
from mcp_patterns.utils.logging import get_logger, setup_logging

console = Console()
logger = get_logger(__name__)

LIST_ACTION = "list"

EPILOG = """\b
Examples:
  mcp-patterns AWS CDK              Install AWS + CDK servers
  mcp-patterns aws terraform        Install AWS + Terraform servers
  mcp-patterns --remove PRICING     Remove pricing servers
  mcp-patterns list                 Show all patterns
  mcp-patterns list AWS             Show servers in the AWS pattern

Pattern names are case-insensitive (AWS = aws = Aws).
"""


class CLIContext:
    """CLI context for passing state between commands."""

    def __init__(self):
        self.manager: Optional[PatternManager] = None

    def get_manager(self, config: Optional[Config] = None) -> PatternManager:
        """Get pattern manager instance."""
        if self.manager is None:
            self.manager = PatternManager(config)
        return self.manager


# Global CLI context
cli_context = CLIContext()


def _configure(debug: bool, verbose: bool, config_file: Optional[str]) -> Config:
    config = reload_config([config_file] if config_file else None)

    if debug or config.debug:
        console_level = "DEBUG"
    elif verbose or config.verbose:
        console_level = "INFO"
    else:
        console_level = config.logging.console_level

    setup_logging(
        enabled=config.logging.enabled,
        level=config.logging.level,
        console_level=console_level,
        log_file=config.get_log_file(),
        format_type=config.logging.format_type,
        enable_rich=config.logging.enable_rich,
        max_bytes=config.logging.max_bytes,
        backup_count=config.logging.backup_count,
        force=True,
    )
    return config


@click.command(
    epilog=EPILOG,
    context_settings={"help_option_names": ["-h", "--help"]},
)
@click.argument("patterns", nargs=-1, metavar="[list] PATTERN...")
@click.option(
    "--remove",
    is_flag=True,
    help="Remove servers for the given patterns"
)
@click.option(
    "--debug", "-d",
    is_flag=True,
    help="Enable debug logging"
)
@click.option(
    "--verbose", "-v",
    is_flag=True,
    help="Enable verbose output"
)
@click.option(
    "--config", "config_file",
    type=click.Path(exists=True, dir_okay=False),
    help="Configuration file to load instead of the defaults"
)
@click.version_option(version=__version__, prog_name="MCP Patterns")
@click.pass_context
@handle_errors
def cli(
    ctx: click.Context,
    patterns: Tuple[str, ...],
    remove: bool,
    debug: bool,
    verbose: bool,
    config_file: Optional[str],
):
    """
    Install or remove MCP servers for Claude Code in pattern-based groups.

    PATTERN names a curated group of servers. Several patterns may be given;
    servers shared between them are handled once. Only servers that are not
    already installed are added.

    Use "list" as the first argument to show the available patterns, or
    "list PATTERN" to show the servers in a pattern.
    """
    if not patterns:
        if remove:
            raise MCPPatternsError("No patterns specified.", error_code="NO_PATTERNS")
        click.echo(ctx.get_help())
        return

    config = _configure(debug, verbose, config_file)
    manager = cli_context.get_manager(config)

    if patterns[0].lower() == LIST_ACTION:
        list_patterns(manager, patterns[1:])
    elif remove:
        sys.exit(remove_patterns(manager, patterns))
    else:
        sys.exit(add_patterns(manager, patterns))


def list_patterns(manager: PatternManager, names: Tuple[str, ...]) -> None:
    """Show all patterns, or the servers in the named ones."""
    if not names:
        print_pattern_list(manager.list_all())
        return

    canonical = manager.normalize(names)
    for name in canonical:
        print_pattern_detail(manager.registry.get_pattern(name), manager.list_pattern(name))


def add_patterns(manager: PatternManager, names: Tuple[str, ...]) -> int:
    """
    Install servers for the given patterns.

    Returns:
        Exit status: 1 if any server failed to install
    """
    plan = manager.plan_add(names)

    print_header("MCP Server Installer", plan.patterns, "Resolved", len(plan.servers))
    print_prerequisites(plan.prerequisites)

    if plan.prerequisites.ok:
        console.print("\n[bold]Checking installed servers...[/bold]")

    outcome = manager.apply_add(plan, progress=ProgressPrinter("Installing servers..."))

    if outcome.nothing_to_do:
        if outcome.skipped_unavailable:
            console.print("\n[green]No installable servers left. Nothing to do.[/green]")
        else:
            console.print("\n[green]All servers already installed. Nothing to do.[/green]")

    print_summary(summarize_add(outcome))
    return outcome.exit_code


def remove_patterns(manager: PatternManager, names: Tuple[str, ...]) -> int:
    """
    Remove servers for the given patterns.

    Returns:
        Exit status, always 0 once patterns are valid
    """
    canonical = manager.normalize(names)
    servers = manager.resolve(canonical)

    print_header("MCP Server Remover", canonical, "Removing", len(servers))

    outcome = manager.remove(canonical, progress=ProgressPrinter("Removing servers..."))

    print_summary(summarize_remove(outcome))
    return outcome.exit_code


def main():
    """Main CLI entry point."""
    cli()


if __name__ == "__main__":
    main()
