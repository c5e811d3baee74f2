"""
Claude CLI integration client.

Thin wrapper around `claude mcp list|add|remove`. Every call is a blocking
subprocess; callers only see exit status (add/remove) or raw listing text.
"""

import os
import subprocess
from typing import Dict, List, Optional

from mcp_patterns.core.exceptions import ClaudeError
from mcp_patterns.core.models import Server
from mcp_patterns.utils.logging import get_logger

logger = get_logger(__name__)

HOMEBREW_PATHS = ["/opt/homebrew/bin", "/usr/local/bin"]


def augmented_path(current_path: str) -> str:
    """PATH with the Homebrew locations prepended when absent."""
    for path in HOMEBREW_PATHS:
        if path not in current_path.split(os.pathsep):
            current_path = f"{path}{os.pathsep}{current_path}" if current_path else path
    return current_path


class ClaudeClient:
    """Client for interacting with Claude CLI."""

    def __init__(self, cli_path: str = "claude", timeout: int = 120):
        """
        Initialize Claude CLI client.

        Args:
            cli_path: Claude executable name or path
            timeout: Per-command timeout in seconds
        """
        self.cli_path = cli_path
        self.timeout = timeout

        logger.debug("ClaudeClient initialized", extra={
            "cli_path": cli_path,
            "timeout": timeout,
        })

    def _get_env(self) -> Dict[str, str]:
        """Get environment with the Homebrew locations on PATH."""
        env = dict(os.environ)
        env["PATH"] = augmented_path(env.get("PATH", ""))
        return env

    def _run(self, args: List[str], timeout: Optional[int] = None) -> subprocess.CompletedProcess:
        return subprocess.run(
            [self.cli_path, "mcp", *args],
            capture_output=True,
            text=True,
            timeout=timeout or self.timeout,
            env=self._get_env(),
        )

    def list_output(self) -> str:
        """
        Raw output of `claude mcp list`.

        Returns:
            The command's stdout

        Raises:
            ClaudeError: If the CLI is missing, times out or exits non-zero
        """
        try:
            result = self._run(["list"])
        except FileNotFoundError as e:
            raise ClaudeError(f"Claude CLI not found: {e}", error_code="CLI_NOT_FOUND")
        except subprocess.TimeoutExpired:
            raise ClaudeError("claude mcp list timed out", error_code="CLI_TIMEOUT")
        except OSError as e:
            raise ClaudeError(f"Failed to run claude mcp list: {e}")

        if result.returncode != 0:
            raise ClaudeError(
                f"claude mcp list failed: {result.stderr.strip()}",
                error_code="CLI_FAILED",
                details={"returncode": result.returncode},
            )

        return result.stdout

    def add_server(self, server: Server) -> bool:
        """
        Register a server with `claude mcp add`.

        Args:
            server: Server whose install template is passed through unmodified

        Returns:
            True if the command exited 0
        """
        return self._invoke("add", server.add_args(), server.name)

    def remove_server(self, server: Server) -> bool:
        """
        Unregister a server with `claude mcp remove`.

        Args:
            server: Server to remove from its install scope

        Returns:
            True if the command exited 0
        """
        return self._invoke("remove", server.remove_args(), server.name)

    def _invoke(self, action: str, args: List[str], name: str) -> bool:
        try:
            result = self._run([action, *args])
        except subprocess.TimeoutExpired:
            logger.error(f"claude mcp {action} '{name}' timed out after {self.timeout}s")
            return False
        except OSError as e:
            logger.error(f"Failed to run claude mcp {action} '{name}': {e}")
            return False

        if result.returncode != 0:
            logger.debug(f"claude mcp {action} '{name}' exited {result.returncode}", extra={
                "server_name": name,
                "stderr": result.stderr.strip(),
            })
            return False

        logger.info(f"claude mcp {action} '{name}' succeeded", extra={"server_name": name})
        return True
