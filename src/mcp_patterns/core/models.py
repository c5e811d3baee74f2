"""
Data models for MCP Patterns.

Defines Pydantic models for the static registry (servers, install templates,
patterns) and for the transient per-invocation values produced while
resolving, checking and reconciling a set of patterns.
"""

from enum import Enum
from typing import Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class ServerScope(str, Enum):
    """MCP server configuration scope."""

    LOCAL = "local"      # Private to user account
    PROJECT = "project"  # Shared with team via git
    USER = "user"        # Global user configuration


class Prerequisite(str, Enum):
    """External tool a server needs before it can be installed."""

    NONE = "none"
    UVX = "uvx"
    NPX = "npx"
    DOCKER = "docker"
    TRIVY = "trivy"


class InstallTemplate(BaseModel):
    """Arguments passed to `claude mcp add` for one server."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(description="Name the server is registered under")
    scope: ServerScope = Field(default=ServerScope.PROJECT, description="Installation scope")
    env: Dict[str, str] = Field(default_factory=dict, description="Environment assignments")
    transport: Optional[str] = Field(default=None, description="Transport override (e.g. http)")
    command: Tuple[str, ...] = Field(default=(), description="Launch command after --")
    url: Optional[str] = Field(default=None, description="Remote endpoint URL")

    @model_validator(mode="after")
    def check_target(self) -> "InstallTemplate":
        """Exactly one of command or url must be set."""
        if bool(self.command) == bool(self.url):
            raise ValueError(f"{self.name}: install template needs a command or a url, not both")
        return self

    def to_args(self) -> List[str]:
        """
        Render the argument vector for `claude mcp add`.

        Returns:
            Arguments in the order name, scope, env, transport, target
        """
        args = [self.name, "-s", self.scope.value]
        for key, value in self.env.items():
            args.extend(["-e", f"{key}={value}"])
        if self.transport:
            args.extend(["--transport", self.transport])
        if self.command:
            args.append("--")
            args.extend(self.command)
        else:
            args.append(self.url)
        return args


class Server(BaseModel):
    """A single installable MCP server."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(description="Server name")
    prerequisite: Prerequisite = Field(default=Prerequisite.NONE, description="Required tool")
    install: InstallTemplate = Field(description="Install invocation template")
    description: str = Field(default="", description="Human-readable description")

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Validate server name."""
        if not v.strip():
            raise ValueError("Server name cannot be empty")
        if ":" in v or any(c.isspace() for c in v):
            raise ValueError(f"Server name cannot contain ':' or whitespace: {v!r}")
        return v

    @model_validator(mode="after")
    def check_install_name(self) -> "Server":
        if self.install.name != self.name:
            raise ValueError(
                f"Install template registers '{self.install.name}' for server '{self.name}'"
            )
        return self

    @property
    def scope(self) -> ServerScope:
        return self.install.scope

    def add_args(self) -> List[str]:
        """Arguments for `claude mcp add`."""
        return self.install.to_args()

    def remove_args(self) -> List[str]:
        """Arguments for `claude mcp remove`."""
        return ["-s", self.scope.value, self.name]

    def __str__(self) -> str:
        return f"{self.name} ({self.prerequisite.value})"


class Pattern(BaseModel):
    """A named, curated group of servers for one use case."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(description="Canonical (upper case) pattern name")
    description: str = Field(default="", description="Human-readable description")
    servers: Tuple[str, ...] = Field(default=(), description="Server names in registry order")

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Pattern names are stored upper case."""
        if not v.strip():
            raise ValueError("Pattern name cannot be empty")
        return v.strip().upper()

    @property
    def server_count(self) -> int:
        return len(self.servers)


class ToolState(str, Enum):
    """Result of probing one prerequisite tool."""

    PRESENT = "present"
    MISSING = "missing"      # Hard prerequisite absent, operation must abort
    DEGRADED = "degraded"    # Soft prerequisite absent or not running


class ToolStatus(BaseModel):
    """Probe result for a single tool."""

    tool: str = Field(description="Tool executable name")
    state: ToolState = Field(description="Probe result")
    soft: bool = Field(default=False, description="Whether absence only degrades the operation")
    detail: str = Field(default="", description="Short explanation (e.g. 'not running')")
    guidance: Optional[str] = Field(default=None, description="How to install the tool")


class PrerequisiteReport(BaseModel):
    """Outcome of checking prerequisites for a resolved server list."""

    statuses: List[ToolStatus] = Field(default_factory=list, description="Per-tool results in check order")
    working_set: List[str] = Field(default_factory=list, description="Servers that may be installed")
    skipped_servers: List[str] = Field(
        default_factory=list, description="Servers dropped because a soft prerequisite is unavailable"
    )

    @property
    def hard_missing(self) -> List[str]:
        return [s.tool for s in self.statuses if s.state == ToolState.MISSING]

    @property
    def soft_degraded(self) -> List[str]:
        return [s.tool for s in self.statuses if s.state == ToolState.DEGRADED]

    @property
    def ok(self) -> bool:
        """True when no hard prerequisite is missing."""
        return not self.hard_missing


class ServerOutcome(str, Enum):
    """Per-server result of a reconcile step."""

    INSTALLED = "installed"
    ALREADY_INSTALLED = "already-installed"
    FAILED = "failed"
    REMOVED = "removed"
    NOT_INSTALLED = "not-installed"


class ProgressEvent(BaseModel):
    """Emitted once per server while reconciling."""

    server: str = Field(description="Server name")
    outcome: ServerOutcome = Field(description="What happened to the server")
    position: Optional[int] = Field(default=None, description="1-based index among invoked servers")
    total: Optional[int] = Field(default=None, description="Number of servers being invoked")


class AddPlan(BaseModel):
    """Everything decided before an add touches the host tool."""

    patterns: List[str] = Field(description="Normalized pattern names, in request order")
    servers: List[str] = Field(description="Resolved server names")
    prerequisites: PrerequisiteReport = Field(description="Prerequisite check result")


class AddOutcome(BaseModel):
    """Per-category results of an add operation."""

    installed: List[str] = Field(default_factory=list)
    skipped_already_installed: List[str] = Field(default_factory=list)
    skipped_unavailable: List[str] = Field(default_factory=list)
    failed: List[str] = Field(default_factory=list)

    @property
    def succeeded(self) -> bool:
        return not self.failed

    @property
    def exit_code(self) -> int:
        return 0 if self.succeeded else 1

    @property
    def nothing_to_do(self) -> bool:
        """True when no install was attempted."""
        return not self.installed and not self.failed


class RemoveOutcome(BaseModel):
    """Per-category results of a remove operation."""

    removed: List[str] = Field(default_factory=list)
    not_installed: List[str] = Field(default_factory=list)

    @property
    def exit_code(self) -> int:
        return 0


class PatternSummary(BaseModel):
    """One row of the pattern listing."""

    pattern: str
    server_count: int
    description: str


class ServerSummary(BaseModel):
    """One row of a single pattern's listing."""

    server: str
    description: str
    prerequisite: Prerequisite
