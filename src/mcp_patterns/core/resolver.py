"""
Pattern name normalization, validation and resolution.

Resolution expands requested patterns into a deduplicated server list. A
server keeps the position of the first pattern that introduced it, so the
output order always traces back to the request order.
"""

from typing import Iterable, List, Optional, Set

from mcp_patterns.core.exceptions import UnknownPatternError
from mcp_patterns.core.registry import Registry, get_registry
from mcp_patterns.utils.logging import get_logger

logger = get_logger(__name__)


def normalize_pattern_name(name: str) -> str:
    """Canonical form of a user-supplied pattern name."""
    return name.strip().upper()


def normalize_pattern_names(names: Iterable[str]) -> List[str]:
    return [normalize_pattern_name(name) for name in names]


def validate_patterns(names: Iterable[str], registry: Optional[Registry] = None) -> None:
    """
    Check that every pattern name exists.

    All unknown names are collected before raising, so one error reports
    every typo at once.

    Args:
        names: Normalized pattern names
        registry: Registry to check against (defaults to the built-in one)

    Raises:
        UnknownPatternError: If any name is unknown
    """
    registry = registry or get_registry()
    unknown: List[str] = []
    for name in names:
        if not registry.has_pattern(name) and name not in unknown:
            unknown.append(name)

    if unknown:
        logger.debug(f"Unknown patterns requested: {unknown}")
        raise UnknownPatternError(unknown, registry.all_pattern_names())


def resolve(names: Iterable[str], registry: Optional[Registry] = None) -> List[str]:
    """
    Expand patterns into a deduplicated, order-preserving server list.

    Args:
        names: Validated, normalized pattern names in request order
        registry: Registry to resolve against (defaults to the built-in one)

    Returns:
        Server names, each appearing once at its first occurrence
    """
    registry = registry or get_registry()
    names = list(names)
    resolved: List[str] = []
    seen: Set[str] = set()

    for pattern in names:
        for server in registry.pattern_servers(pattern):
            if server not in seen:
                seen.add(server)
                resolved.append(server)

    logger.debug(f"Resolved {list(names)} to {len(resolved)} servers")
    return resolved
