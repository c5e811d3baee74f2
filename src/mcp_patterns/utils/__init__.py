"""Utility modules for MCP Patterns."""

from mcp_patterns.utils.logging import get_logger, setup_logging
from mcp_patterns.utils.config import Config, get_config, load_config

__all__ = [
    "get_logger",
    "setup_logging",
    "Config",
    "get_config",
    "load_config",
]
