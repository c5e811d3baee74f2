"""
Core MCP Patterns implementation.

Provides the PatternManager class that runs the add, remove and list
operations end to end: validate and resolve patterns, gate on prerequisites,
detect installed state and reconcile.
"""

from typing import Iterable, List, Optional

from mcp_patterns.claude.claude_client import ClaudeClient
from mcp_patterns.core import lister
from mcp_patterns.core.detector import InstalledStateDetector
from mcp_patterns.core.exceptions import MissingPrerequisiteError
from mcp_patterns.core.models import (
    AddOutcome,
    AddPlan,
    PatternSummary,
    RemoveOutcome,
    ServerSummary,
)
from mcp_patterns.core.prerequisites import PrerequisiteChecker, ToolProbe
from mcp_patterns.core.reconciler import ProgressCallback, Reconciler
from mcp_patterns.core.registry import Registry, get_registry
from mcp_patterns.core.resolver import normalize_pattern_names, resolve, validate_patterns
from mcp_patterns.utils.config import Config, get_config
from mcp_patterns.utils.logging import get_logger

logger = get_logger(__name__)


class PatternManager:
    """Main pattern operation class."""

    def __init__(
        self,
        config: Optional[Config] = None,
        registry: Optional[Registry] = None,
        client: Optional[ClaudeClient] = None,
        probe: Optional[ToolProbe] = None,
    ):
        """
        Initialize PatternManager.

        Args:
            config: Configuration instance (optional)
            registry: Pattern registry (defaults to the built-in one)
            client: Claude CLI client (built from config if omitted)
            probe: Tool probe for prerequisite checks (built from config if omitted)
        """
        self.config = config or get_config()
        self.registry = registry or get_registry()
        self.client = client or ClaudeClient(
            cli_path=self.config.claude.cli_path,
            timeout=self.config.claude.timeout,
        )
        self.checker = PrerequisiteChecker(
            probe or ToolProbe(timeout=self.config.prerequisites.probe_timeout),
            self.registry,
            host_cli=self.config.claude.cli_path,
        )
        self.detector = InstalledStateDetector(self.client)
        self.reconciler = Reconciler(self.client, self.registry)

    def normalize(self, pattern_names: Iterable[str]) -> List[str]:
        """
        Normalize and validate pattern names.

        Raises:
            UnknownPatternError: Listing every unknown name
        """
        patterns = normalize_pattern_names(pattern_names)
        validate_patterns(patterns, self.registry)
        return patterns

    def resolve(self, pattern_names: Iterable[str]) -> List[str]:
        """Validated, deduplicated server list for the requested patterns."""
        return resolve(self.normalize(pattern_names), self.registry)

    def plan_add(self, pattern_names: Iterable[str]) -> AddPlan:
        """
        Resolve patterns and check prerequisites without side effects.

        Args:
            pattern_names: Requested pattern names, any case

        Returns:
            The plan an add would execute

        Raises:
            UnknownPatternError: If any pattern name is unknown
        """
        patterns = self.normalize(pattern_names)
        servers = resolve(patterns, self.registry)
        logger.info(f"Add {' '.join(patterns)}: {len(servers)} servers resolved")

        return AddPlan(
            patterns=patterns,
            servers=servers,
            prerequisites=self.checker.check(servers),
        )

    def apply_add(self, plan: AddPlan, progress: Optional[ProgressCallback] = None) -> AddOutcome:
        """
        Install the plan's working set minus what is already installed.

        Args:
            plan: Plan from plan_add
            progress: Per-server progress callback

        Returns:
            Outcome including servers skipped for soft prerequisites

        Raises:
            MissingPrerequisiteError: If a hard prerequisite is missing
        """
        report = plan.prerequisites
        if not report.ok:
            raise MissingPrerequisiteError(report.hard_missing, report)

        installed = self.detector.currently_installed()
        outcome = self.reconciler.add(report.working_set, installed, progress)
        outcome.skipped_unavailable = list(report.skipped_servers)

        logger.info(
            f"Add finished: {len(outcome.installed)} installed, {len(outcome.failed)} failed",
            extra={"failed": outcome.failed},
        )
        return outcome

    def add(self, pattern_names: Iterable[str], progress: Optional[ProgressCallback] = None) -> AddOutcome:
        """Plan and apply an add in one call."""
        return self.apply_add(self.plan_add(pattern_names), progress)

    def remove(self, pattern_names: Iterable[str], progress: Optional[ProgressCallback] = None) -> RemoveOutcome:
        """
        Remove every server the patterns resolve to.

        No prerequisite or installed-state checks are made.

        Raises:
            UnknownPatternError: If any pattern name is unknown
        """
        servers = self.resolve(pattern_names)
        logger.info(f"Remove: {len(servers)} servers resolved")
        return self.reconciler.remove(servers, progress)

    def list_all(self) -> List[PatternSummary]:
        return lister.list_all(self.registry)

    def list_pattern(self, name: str) -> List[ServerSummary]:
        return lister.list_pattern(name, self.registry)
