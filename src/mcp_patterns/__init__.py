"""
MCP Patterns - pattern-based MCP server installer for Claude Code.

Installs and removes MCP servers in composable groups ("patterns"),
installing only what is missing and skipping servers whose tooling is
unavailable.
"""

__version__ = "1.0.0"
__description__ = "Pattern-based MCP server installer for Claude Code"

# Public API
from mcp_patterns.core.exceptions import MCPPatternsError
from mcp_patterns.core.models import Pattern, Prerequisite, Server, ServerScope

__all__ = [
    "__version__",
    "__description__",
    "MCPPatternsError",
    "Pattern",
    "Prerequisite",
    "Server",
    "ServerScope",
]
