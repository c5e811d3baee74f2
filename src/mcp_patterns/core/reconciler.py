"""
Add/remove reconciliation against the host tool.

Servers are processed strictly one at a time in resolved order. A failing
server never stops the loop: its outcome is recorded and the next server is
attempted.
"""

from typing import Callable, Iterable, List, Optional

from mcp_patterns.claude.claude_client import ClaudeClient
from mcp_patterns.core.models import AddOutcome, ProgressEvent, RemoveOutcome, ServerOutcome
from mcp_patterns.core.registry import Registry, get_registry
from mcp_patterns.utils.logging import get_logger

logger = get_logger(__name__)

ProgressCallback = Callable[[ProgressEvent], None]


class Reconciler:
    """Applies the add or remove delta for a resolved server list."""

    def __init__(self, client: ClaudeClient, registry: Optional[Registry] = None):
        self.client = client
        self.registry = registry or get_registry()

    def add(
        self,
        working_set: List[str],
        installed: Iterable[str],
        progress: Optional[ProgressCallback] = None,
    ) -> AddOutcome:
        """
        Install every server in the working set that is not yet installed.

        Args:
            working_set: Servers to reconcile, in order
            installed: Names currently registered with the host tool
            progress: Called once per server as its outcome is known

        Returns:
            Per-category outcome lists
        """
        installed = frozenset(installed)
        outcome = AddOutcome()
        to_install: List[str] = []

        for name in working_set:
            if name in installed:
                outcome.skipped_already_installed.append(name)
                self._emit(progress, name, ServerOutcome.ALREADY_INSTALLED)
            else:
                to_install.append(name)

        total = len(to_install)
        for position, name in enumerate(to_install, start=1):
            server = self.registry.server_descriptor(name)
            if self.client.add_server(server):
                outcome.installed.append(name)
                result = ServerOutcome.INSTALLED
            else:
                logger.warning(f"Failed to install '{name}'")
                outcome.failed.append(name)
                result = ServerOutcome.FAILED
            self._emit(progress, name, result, position, total)

        return outcome

    def remove(self, resolved: List[str], progress: Optional[ProgressCallback] = None) -> RemoveOutcome:
        """
        Attempt removal of every resolved server.

        A failed removal is read as "was not installed" and never fails the
        operation.

        Args:
            resolved: Servers to remove, in order
            progress: Called once per server as its outcome is known

        Returns:
            Per-category outcome lists
        """
        outcome = RemoveOutcome()
        total = len(resolved)

        for position, name in enumerate(resolved, start=1):
            server = self.registry.server_descriptor(name)
            if self.client.remove_server(server):
                outcome.removed.append(name)
                result = ServerOutcome.REMOVED
            else:
                logger.info(f"'{name}' was not installed")
                outcome.not_installed.append(name)
                result = ServerOutcome.NOT_INSTALLED
            self._emit(progress, name, result, position, total)

        return outcome

    @staticmethod
    def _emit(
        progress: Optional[ProgressCallback],
        name: str,
        outcome: ServerOutcome,
        position: Optional[int] = None,
        total: Optional[int] = None,
    ) -> None:
        if progress is not None:
            progress(ProgressEvent(server=name, outcome=outcome, position=position, total=total))
