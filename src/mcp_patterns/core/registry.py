"""
Static pattern and server registry.

The registry is compiled in: patterns map to ordered server lists and servers
map to their install descriptors. Nothing here is created or destroyed at
runtime; lookups are pure.
"""

from typing import Dict, Iterable, List, Mapping, Optional

from mcp_patterns.core.exceptions import ConfigError, UnknownPatternError, UnknownServerError
from mcp_patterns.core.models import InstallTemplate, Pattern, Prerequisite, Server


def _uvx(name: str, package: str, description: str, env: Optional[Dict[str, str]] = None) -> Server:
    return Server(
        name=name,
        prerequisite=Prerequisite.UVX,
        install=InstallTemplate(
            name=name,
            env=env or {},
            command=("uvx", f"{package}@latest"),
        ),
        description=description,
    )


def _npx(name: str, package: str, description: str) -> Server:
    return Server(
        name=name,
        prerequisite=Prerequisite.NPX,
        install=InstallTemplate(name=name, command=("npx", "-y", f"{package}@latest")),
        description=description,
    )


SERVERS: List[Server] = [
    _uvx(
        "awslabs-core-mcp-server",
        "awslabs.core-mcp-server",
        "Core AWS API orchestration",
        env={"FASTMCP_LOG_LEVEL": "warning"},
    ),
    Server(
        name="aws-knowledge-mcp",
        prerequisite=Prerequisite.NONE,
        install=InstallTemplate(
            name="aws-knowledge-mcp",
            transport="http",
            url="https://knowledge-mcp.global.api.aws",
        ),
        description="AWS knowledge base",
    ),
    _uvx("awslabs-aws-documentation-mcp-server", "awslabs.aws-documentation-mcp-server",
         "AWS documentation search"),
    _uvx("awslabs-diagram-mcp-server", "awslabs.diagram-mcp-server", "Architecture diagrams"),
    _uvx("awslabs-iac-mcp-server", "awslabs.iac-mcp-server", "CDK and CloudFormation"),
    Server(
        name="terraform-mcp-server",
        prerequisite=Prerequisite.DOCKER,
        install=InstallTemplate(
            name="terraform-mcp-server",
            command=("docker", "run", "-i", "--rm", "hashicorp/terraform-mcp-server"),
        ),
        description="HashiCorp Terraform registry",
    ),
    _uvx("awslabs-terraform-mcp-server", "awslabs.terraform-mcp-server", "AWS Terraform with Checkov"),
    _uvx("awslabs-code-doc-gen-mcp-server", "awslabs.code-doc-gen-mcp-server",
         "Code documentation generation"),
    _npx("context7", "@upstash/context7-mcp", "Version-specific library docs"),
    _npx("mermaid-mcp", "mcp-mermaid", "Mermaid diagram generation"),
    Server(
        name="trivy-mcp",
        prerequisite=Prerequisite.TRIVY,
        install=InstallTemplate(name="trivy-mcp", command=("trivy", "mcp")),
        description="Vulnerability and IaC scanning",
    ),
    _uvx("awslabs-well-architected-security-mcp-server",
         "awslabs.well-architected-security-mcp-server", "AWS security assessment"),
    _npx("kubernetes-mcp-server", "kubernetes-mcp-server", "Kubernetes cluster management"),
    Server(
        name="controlplane-mcp-server",
        prerequisite=Prerequisite.DOCKER,
        install=InstallTemplate(
            name="controlplane-mcp-server",
            transport="http",
            command=(
                "docker", "run", "-i", "--rm",
                "xpkg.upbound.io/upbound/controlplane-mcp-server:v0.1.0",
            ),
        ),
        description="Crossplane control plane",
    ),
    _uvx("awslabs-aws-pricing-mcp-server", "awslabs.aws-pricing-mcp-server", "AWS pricing data"),
    _uvx("awslabs-cost-analysis-mcp-server", "awslabs.cost-analysis-mcp-server",
         "Pre-deployment cost estimation"),
    _npx("mcp-server-git", "@modelcontextprotocol/server-git", "Local Git repository operations"),
    _npx("github-mcp-server", "@github/mcp-server", "GitHub API access"),
    _uvx("awslabs-serverless-mcp-server", "awslabs.serverless-mcp-server",
         "Lambda, API Gateway, Step Functions"),
]


PATTERNS: List[Pattern] = [
    Pattern(
        name="AWS",
        description="Base AWS development",
        servers=(
            "awslabs-core-mcp-server",
            "aws-knowledge-mcp",
            "awslabs-aws-documentation-mcp-server",
            "awslabs-diagram-mcp-server",
        ),
    ),
    Pattern(name="CDK", description="AWS CDK projects", servers=("awslabs-iac-mcp-server",)),
    Pattern(
        name="TERRAFORM",
        description="Terraform IaC projects",
        servers=("terraform-mcp-server", "awslabs-terraform-mcp-server"),
    ),
    Pattern(
        name="DOCUMENTATION",
        description="Documentation lookup and generation",
        servers=(
            "awslabs-aws-documentation-mcp-server",
            "awslabs-code-doc-gen-mcp-server",
            "context7",
        ),
    ),
    Pattern(
        name="ARCHITECTURE",
        description="Architecture and design work",
        servers=("awslabs-diagram-mcp-server", "mermaid-mcp"),
    ),
    Pattern(
        name="SECURITY",
        description="Security scanning and compliance",
        servers=("trivy-mcp", "awslabs-well-architected-security-mcp-server"),
    ),
    Pattern(
        name="KUBERNETES",
        description="General Kubernetes management",
        servers=("kubernetes-mcp-server",),
    ),
    Pattern(name="CROSSPLANE", description="Crossplane and Upbound", servers=("controlplane-mcp-server",)),
    Pattern(
        name="PRICING",
        description="Cost modeling (temporary use)",
        servers=("awslabs-aws-pricing-mcp-server", "awslabs-cost-analysis-mcp-server"),
    ),
    Pattern(name="GIT", description="Local Git repository operations", servers=("mcp-server-git",)),
    Pattern(
        name="GITHUB",
        description="GitHub API + local Git operations",
        servers=("github-mcp-server", "mcp-server-git"),
    ),
    Pattern(
        name="SERVERLESS",
        description="Lambda, API Gateway, Step Functions",
        servers=("awslabs-serverless-mcp-server",),
    ),
]


class Registry:
    """Read-only lookup tables for patterns and servers."""

    def __init__(self, patterns: Iterable[Pattern], servers: Iterable[Server]):
        """
        Build the lookup tables.

        Args:
            patterns: Patterns in listing order
            servers: Every server any pattern may reference

        Raises:
            ConfigError: On duplicate names or a dangling server reference
        """
        self._servers: Dict[str, Server] = {}
        for server in servers:
            if server.name in self._servers:
                raise ConfigError(f"Duplicate server in registry: {server.name}")
            self._servers[server.name] = server

        self._patterns: Dict[str, Pattern] = {}
        for pattern in patterns:
            if pattern.name in self._patterns:
                raise ConfigError(f"Duplicate pattern in registry: {pattern.name}")
            dangling = [name for name in pattern.servers if name not in self._servers]
            if dangling:
                raise ConfigError(
                    f"Pattern {pattern.name} references unknown servers: {', '.join(dangling)}",
                    details={"pattern": pattern.name, "servers": dangling},
                )
            self._patterns[pattern.name] = pattern

    def has_pattern(self, name: str) -> bool:
        return name in self._patterns

    def get_pattern(self, name: str) -> Pattern:
        """
        Get a pattern by canonical name.

        Raises:
            UnknownPatternError: If the name is not registered
        """
        try:
            return self._patterns[name]
        except KeyError:
            raise UnknownPatternError([name], self.all_pattern_names()) from None

    def pattern_servers(self, name: str) -> List[str]:
        """Server names for a pattern, in registry order."""
        return list(self.get_pattern(name).servers)

    def server_descriptor(self, name: str) -> Server:
        """
        Get a server's install descriptor.

        Raises:
            UnknownServerError: If the name is not registered
        """
        try:
            return self._servers[name]
        except KeyError:
            raise UnknownServerError(name) from None

    def all_pattern_names(self) -> List[str]:
        """Pattern names in listing order."""
        return list(self._patterns)

    def patterns(self) -> List[Pattern]:
        return list(self._patterns.values())

    def servers(self) -> Mapping[str, Server]:
        return dict(self._servers)


# Global registry instance
_registry = Registry(PATTERNS, SERVERS)


def get_registry() -> Registry:
    """Get the compiled-in registry."""
    return _registry
