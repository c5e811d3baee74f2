"""
Installed-state detection.

The installed set is re-read from the host tool on every run. A failed query
is treated as "nothing installed" so detection can never block an add; the
cost is a possibly redundant install attempt.
"""

from typing import FrozenSet, Optional

from mcp_patterns.claude.claude_client import ClaudeClient
from mcp_patterns.core.exceptions import ClaudeError
from mcp_patterns.core.parsers import ListingParser, TextListingParser
from mcp_patterns.utils.logging import get_logger

logger = get_logger(__name__)


class InstalledStateDetector:
    """Queries the host tool for currently registered servers."""

    def __init__(self, client: ClaudeClient, parser: Optional[ListingParser] = None):
        """
        Initialize the detector.

        Args:
            client: Claude CLI client used for `claude mcp list`
            parser: Listing parser (defaults to the line parser)
        """
        self.client = client
        self.parser = parser or TextListingParser()

    def currently_installed(self) -> FrozenSet[str]:
        """
        Get the names of servers registered with the host tool.

        Returns:
            Registered server names, empty if the query failed
        """
        try:
            output = self.client.list_output()
        except ClaudeError as e:
            logger.warning(f"Could not list installed servers, assuming none installed: {e}")
            return frozenset()

        installed = self.parser.parse(output)
        logger.debug(f"Detected {len(installed)} installed servers")
        return installed
