"""
Prerequisite checking for server installation.

Every tool except Docker is a hard requirement: if one is missing the add
must abort before touching the host tool. Docker is soft: when it is missing
or its daemon is not running, servers that need it are dropped from the
working set and the rest still install.
"""

import os
import shutil
import subprocess
from typing import Dict, Iterable, List, Optional

from mcp_patterns.claude.claude_client import augmented_path
from mcp_patterns.core.models import (
    Prerequisite,
    PrerequisiteReport,
    ToolState,
    ToolStatus,
)
from mcp_patterns.core.registry import Registry, get_registry
from mcp_patterns.utils.logging import get_logger

logger = get_logger(__name__)

HOST_TOOL = "claude"

SOFT_PREREQUISITES = frozenset({Prerequisite.DOCKER})

INSTALL_GUIDANCE: Dict[str, str] = {
    HOST_TOOL: "npm install -g @anthropic-ai/claude-code",
    Prerequisite.UVX.value: "pip install uv",
    Prerequisite.NPX.value: "install Node.js",
    Prerequisite.TRIVY.value: "brew install trivy",
}


class ToolProbe:
    """Looks for tools in the current environment."""

    def __init__(self, timeout: int = 10):
        self.timeout = timeout

    def is_available(self, tool: str) -> bool:
        """Whether `tool` is an executable path or found on the augmented PATH."""
        return shutil.which(tool, path=augmented_path(os.environ.get("PATH", ""))) is not None

    def is_docker_running(self) -> bool:
        """Whether the Docker daemon answers `docker info`."""
        try:
            result = subprocess.run(
                ["docker", "info"],
                capture_output=True,
                timeout=self.timeout,
            )
        except subprocess.TimeoutExpired:
            logger.debug(f"docker info timed out after {self.timeout}s")
            return False
        except OSError as e:
            logger.debug(f"docker info failed: {e}")
            return False
        return result.returncode == 0


def required_prerequisites(servers: Iterable[str], registry: Optional[Registry] = None) -> List[Prerequisite]:
    """
    Distinct prerequisites needed by a server list.

    Args:
        servers: Resolved server names
        registry: Registry holding the descriptors

    Returns:
        Prerequisites other than NONE, in order of first appearance
    """
    registry = registry or get_registry()
    needed: List[Prerequisite] = []
    for name in servers:
        prereq = registry.server_descriptor(name).prerequisite
        if prereq != Prerequisite.NONE and prereq not in needed:
            needed.append(prereq)
    return needed


class PrerequisiteChecker:
    """Classifies required tools as present, missing (hard) or degraded (soft)."""

    def __init__(
        self,
        probe: Optional[ToolProbe] = None,
        registry: Optional[Registry] = None,
        host_cli: str = HOST_TOOL,
    ):
        """
        Initialize the checker.

        Args:
            probe: Environment probe
            registry: Registry holding the descriptors
            host_cli: Claude executable name or path, reported as "claude"
        """
        self.probe = probe or ToolProbe()
        self.registry = registry or get_registry()
        self.host_cli = host_cli

    def check(self, servers: List[str]) -> PrerequisiteReport:
        """
        Check every tool the resolved servers need.

        Args:
            servers: Resolved server names in order

        Returns:
            Report with per-tool statuses and the reduced working set
        """
        statuses = [self._check_hard(HOST_TOOL, self.host_cli)]
        unavailable = set()

        for prereq in required_prerequisites(servers, self.registry):
            if prereq in SOFT_PREREQUISITES:
                status = self._check_docker()
                if status.state == ToolState.DEGRADED:
                    unavailable.add(prereq)
            else:
                status = self._check_hard(prereq.value)
            statuses.append(status)

        working_set: List[str] = []
        skipped: List[str] = []
        for name in servers:
            if self.registry.server_descriptor(name).prerequisite in unavailable:
                skipped.append(name)
            else:
                working_set.append(name)

        report = PrerequisiteReport(statuses=statuses, working_set=working_set, skipped_servers=skipped)

        if report.hard_missing:
            logger.error(f"Missing required tools: {' '.join(report.hard_missing)}")
        if skipped:
            logger.warning(f"Skipping {len(skipped)} servers: {', '.join(report.soft_degraded)} unavailable")

        return report

    def _check_hard(self, tool: str, executable: Optional[str] = None) -> ToolStatus:
        if self.probe.is_available(executable or tool):
            return ToolStatus(tool=tool, state=ToolState.PRESENT, detail="found")
        return ToolStatus(
            tool=tool,
            state=ToolState.MISSING,
            detail="not found",
            guidance=INSTALL_GUIDANCE.get(tool),
        )

    def _check_docker(self) -> ToolStatus:
        tool = Prerequisite.DOCKER.value
        if not self.probe.is_available(tool):
            return ToolStatus(tool=tool, state=ToolState.DEGRADED, soft=True, detail="not found")
        if not self.probe.is_docker_running():
            return ToolStatus(tool=tool, state=ToolState.DEGRADED, soft=True, detail="not running")
        return ToolStatus(tool=tool, state=ToolState.PRESENT, soft=True, detail="found and running")
