"""
Claude interface module for MCP Patterns.

Wraps the `claude mcp` command line used to list, add and remove servers.
"""

from .claude_client import ClaudeClient

__all__ = ["ClaudeClient"]
