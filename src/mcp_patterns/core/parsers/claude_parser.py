"""
Parsers for `claude mcp list` output.

The detector only needs the set of registered names, so parsers are kept
behind a one-method protocol and a structured format can replace the line
parser without touching detection.
"""

from typing import FrozenSet, Protocol

from mcp_patterns.utils.logging import get_logger

logger = get_logger(__name__)


class ListingParser(Protocol):
    """Turns host tool listing output into registered server names."""

    def parse(self, output: str) -> FrozenSet[str]:
        ...


class TextListingParser:
    """
    Parser for the line format "name: command - status".

    The name is everything before the first colon, trimmed. Lines without a
    colon (headers, health-check banners, blank lines) are ignored, as are
    lines whose name part is empty.
    """

    def parse(self, output: str) -> FrozenSet[str]:
        names = set()
        skipped = 0

        for line in output.splitlines():
            if not line.strip():
                continue
            if ":" not in line:
                skipped += 1
                continue

            name = line.split(":", 1)[0].strip()
            if name:
                names.add(name)
            else:
                skipped += 1

        if skipped:
            logger.debug(f"Skipped {skipped} unparseable listing lines")

        return frozenset(names)
