"""
Exception classes for MCP Patterns.

Defines the exception hierarchy for the fatal error classes that can abort
a pattern operation. Per-server failures are not exceptions: they are
recorded as outcome categories and only influence the final summary.
"""

from typing import Any, Dict, List, Optional


class MCPPatternsError(Exception):
    """Base exception for all MCP Patterns errors."""

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        """
        Initialize MCPPatternsError.

        Args:
            message: Error message
            error_code: Optional error code for categorization
            details: Optional additional error details
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}

    def __str__(self) -> str:
        """String representation of the error."""
        if self.error_code:
            return f"[{self.error_code}] {self.message}"
        return self.message

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary representation."""
        return {
            "error": self.__class__.__name__,
            "message": self.message,
            "error_code": self.error_code,
            "details": self.details,
        }


class ConfigError(MCPPatternsError):
    """Configuration or registry definition errors."""
    pass


class ClaudeError(MCPPatternsError):
    """Claude CLI interaction errors."""
    pass


class NotFoundError(MCPPatternsError):
    """Registry lookup miss."""
    pass


class UnknownPatternError(NotFoundError):
    """One or more requested pattern names are not in the registry."""

    def __init__(self, names: List[str], valid: Optional[List[str]] = None):
        """
        Initialize UnknownPatternError.

        Args:
            names: Every unrecognized pattern name, in request order
            valid: The valid pattern names, for the error message
        """
        self.names = list(names)
        self.valid = list(valid or [])
        noun = "pattern" if len(self.names) == 1 else "patterns"
        super().__init__(
            f"Unknown {noun}: {', '.join(self.names)}",
            error_code="UNKNOWN_PATTERN",
            details={"unknown": self.names, "valid": self.valid},
        )


class UnknownServerError(NotFoundError):
    """A server name is not in the registry."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(
            f"Unknown server: {name}",
            error_code="UNKNOWN_SERVER",
            details={"server": name},
        )


class MissingPrerequisiteError(MCPPatternsError):
    """Required tools are missing; no installation was attempted."""

    def __init__(self, tools: List[str], report: Optional[Any] = None):
        """
        Initialize MissingPrerequisiteError.

        Args:
            tools: Every missing hard prerequisite tool
            report: The PrerequisiteReport that produced this error
        """
        self.tools = list(tools)
        self.report = report
        super().__init__(
            f"Missing required tools: {' '.join(self.tools)}",
            error_code="MISSING_PREREQUISITE",
            details={"missing": self.tools},
        )
