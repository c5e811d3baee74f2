"""Core MCP Patterns functionality."""

from mcp_patterns.core.exceptions import (
    ClaudeError,
    ConfigError,
    MCPPatternsError,
    MissingPrerequisiteError,
    NotFoundError,
    UnknownPatternError,
    UnknownServerError,
)
from mcp_patterns.core.models import Pattern, Prerequisite, Server, ServerScope
from mcp_patterns.core.registry import Registry, get_registry

__all__ = [
    "ClaudeError",
    "ConfigError",
    "MCPPatternsError",
    "MissingPrerequisiteError",
    "NotFoundError",
    "UnknownPatternError",
    "UnknownServerError",
    "Pattern",
    "Prerequisite",
    "Server",
    "ServerScope",
    "Registry",
    "get_registry",
]
