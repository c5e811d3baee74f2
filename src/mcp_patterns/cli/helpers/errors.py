"""
Error handling utilities for CLI commands.
"""

import functools
import sys

from rich.console import Console
from rich.markup import escape

from mcp_patterns.cli.helpers.display import print_error
from mcp_patterns.core.exceptions import MCPPatternsError
from mcp_patterns.utils.logging import get_logger

console = Console(stderr=True)
logger = get_logger(__name__)


def handle_errors(func):
    """Decorator to turn errors into a message and exit status 1."""

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except KeyboardInterrupt:
            console.print("\n[yellow]Operation cancelled by user[/yellow]")
            sys.exit(1)
        except MCPPatternsError as e:
            logger.debug(f"Aborting: {e}", extra={"details": e.details})
            print_error(e)
            sys.exit(1)
        except Exception as e:
            logger.debug("Unexpected error", exc_info=True)
            console.print(f"[red]Error: {escape(str(e))}[/red]")
            console.print("[dim]Use --debug for more details[/dim]")
            sys.exit(1)

    return wrapper
