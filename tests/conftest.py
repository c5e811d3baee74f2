"""
Pytest configuration and fixtures for MCP Patterns testing.

Every test runs against a small in-memory registry and fake collaborators,
so nothing here shells out to the real `claude` or `docker` binaries.
"""

import logging
from typing import Iterable, List, Optional, Tuple

import pytest

from mcp_patterns.core.exceptions import ClaudeError
from mcp_patterns.core.manager import PatternManager
from mcp_patterns.core.models import InstallTemplate, Pattern, Prerequisite, Server
from mcp_patterns.core.registry import Registry
from mcp_patterns.utils.config import Config


def make_server(name: str, prerequisite: Prerequisite = Prerequisite.UVX) -> Server:
    """Build a server launched through its prerequisite tool, or by URL when it has none."""
    if prerequisite == Prerequisite.NONE:
        install = InstallTemplate(name=name, transport="http", url=f"https://{name}.example.com")
    else:
        install = InstallTemplate(name=name, command=(prerequisite.value, name))
    return Server(name=name, prerequisite=prerequisite, install=install, description=f"{name} server")


class FakeClient:
    """Stands in for ClaudeClient and records every call."""

    def __init__(
        self,
        listing: str = "",
        fail_add: Iterable[str] = (),
        fail_remove: Iterable[str] = (),
        list_error: Optional[ClaudeError] = None,
    ):
        self.listing = listing
        self.fail_add = set(fail_add)
        self.fail_remove = set(fail_remove)
        self.list_error = list_error
        self.calls: List[Tuple[str, ...]] = []

    def list_output(self) -> str:
        self.calls.append(("list",))
        if self.list_error is not None:
            raise self.list_error
        return self.listing

    def add_server(self, server: Server) -> bool:
        self.calls.append(("add", server.name))
        return server.name not in self.fail_add

    def remove_server(self, server: Server) -> bool:
        self.calls.append(("remove", server.name))
        return server.name not in self.fail_remove

    def names(self, action: str) -> List[str]:
        """Server names passed to `action`, in call order."""
        return [call[1] for call in self.calls if call[0] == action]


class FakeProbe:
    """Stands in for ToolProbe with a fixed set of tools."""

    def __init__(self, available: Iterable[str] = ("claude", "uvx", "npx", "docker", "trivy"),
                 docker_running: bool = True):
        self.available = set(available)
        self.docker_running = docker_running
        self.probed: List[str] = []

    def is_available(self, tool: str) -> bool:
        self.probed.append(tool)
        return tool in self.available

    def is_docker_running(self) -> bool:
        return self.docker_running


@pytest.fixture
def servers():
    """Four servers covering each kind of prerequisite."""
    return [
        make_server("s-alpha", Prerequisite.UVX),
        make_server("s-shared", Prerequisite.NONE),
        make_server("s-docker", Prerequisite.DOCKER),
        make_server("s-npx", Prerequisite.NPX),
    ]


@pytest.fixture
def registry(servers):
    """P1 and P2 overlap on s-shared."""
    return Registry(
        patterns=[
            Pattern(name="P1", description="First pattern", servers=("s-alpha", "s-shared")),
            Pattern(name="P2", description="Second pattern", servers=("s-shared", "s-docker", "s-npx")),
        ],
        servers=servers,
    )


@pytest.fixture
def client():
    return FakeClient()


@pytest.fixture
def probe():
    return FakeProbe()


@pytest.fixture
def manager(registry, client, probe):
    """PatternManager wired to the fakes."""
    return PatternManager(config=Config(), registry=registry, client=client, probe=probe)


@pytest.fixture
def restore_root_logger():
    """Put the root logger back the way the test found it."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield root
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)
