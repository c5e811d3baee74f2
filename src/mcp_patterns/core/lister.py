"""Read-only views of the pattern registry."""

from typing import List, Optional

from mcp_patterns.core.models import PatternSummary, ServerSummary
from mcp_patterns.core.registry import Registry, get_registry
from mcp_patterns.core.resolver import normalize_pattern_name


def list_all(registry: Optional[Registry] = None) -> List[PatternSummary]:
    """Every pattern with its server count, in registry order."""
    registry = registry or get_registry()
    return [
        PatternSummary(pattern=p.name, server_count=p.server_count, description=p.description)
        for p in registry.patterns()
    ]


def list_pattern(name: str, registry: Optional[Registry] = None) -> List[ServerSummary]:
    """
    Servers in one pattern, in registry order.

    Args:
        name: Pattern name, any case

    Raises:
        UnknownPatternError: If the pattern does not exist
    """
    registry = registry or get_registry()
    rows = []
    for server_name in registry.pattern_servers(normalize_pattern_name(name)):
        server = registry.server_descriptor(server_name)
        rows.append(
            ServerSummary(
                server=server.name,
                description=server.description,
                prerequisite=server.prerequisite,
            )
        )
    return rows
