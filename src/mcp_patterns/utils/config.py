"""
Configuration management for MCP Patterns.

Provides hierarchical configuration loading with validation using Pydantic.
TOML files are merged in order and explicit keyword overrides are applied
on top. Environment variables prefixed with MCP_PATTERNS_ supply any value
the files and overrides leave unset.

Configuration tunes how the host tool and prerequisites are invoked; it
never changes the compiled-in pattern registry.
"""

import os
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import toml
from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from mcp_patterns.utils.logging import get_logger

logger = get_logger(__name__)

DEFAULT_CONFIG_FILES = [
    "/etc/mcp-patterns/config.toml",
    "~/.config/mcp-patterns/config.toml",
    "./.mcp-patterns.toml",
]


class LoggingConfig(BaseModel):
    """Logging configuration."""

    enabled: bool = Field(default=True, description="Enable logging completely")
    level: str = Field(default="INFO", description="File logging level")
    console_level: str = Field(default="WARNING", description="Console logging level")
    format_type: str = Field(default="text", description="Log format (text/json)")
    file: Optional[str] = Field(default=None, description="Log file path")
    enable_rich: bool = Field(default=True, description="Enable Rich console output")
    max_bytes: int = Field(default=10 * 1024 * 1024, description="Max log file size")
    backup_count: int = Field(default=5, description="Number of backup files")

    @field_validator("level", "console_level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Validate logging level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Invalid log level: {v}")
        return v.upper()

    @field_validator("format_type")
    @classmethod
    def validate_format_type(cls, v: str) -> str:
        """Validate format type."""
        if v not in ["text", "json"]:
            raise ValueError(f"Invalid format type: {v}")
        return v


class ClaudeConfig(BaseModel):
    """Claude CLI configuration."""

    cli_path: str = Field(default="claude", description="Path to Claude CLI")
    timeout: int = Field(default=120, description="Per-command timeout in seconds")

    @field_validator("timeout")
    @classmethod
    def validate_timeout(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("Timeout must be positive")
        return v


class PrerequisiteConfig(BaseModel):
    """Prerequisite probing configuration."""

    probe_timeout: int = Field(default=10, description="Timeout for `docker info` in seconds")

    @field_validator("probe_timeout")
    @classmethod
    def validate_probe_timeout(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("Probe timeout must be positive")
        return v


class Config(BaseSettings):
    """Main configuration class."""

    debug: bool = Field(default=False, description="Enable debug mode")
    verbose: bool = Field(default=False, description="Enable verbose output")
    config_dir: str = Field(
        default="~/.config/mcp-patterns",
        description="Configuration directory"
    )

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    claude: ClaudeConfig = Field(default_factory=ClaudeConfig)
    prerequisites: PrerequisiteConfig = Field(default_factory=PrerequisiteConfig)

    model_config = SettingsConfigDict(
        env_prefix="MCP_PATTERNS_",
        env_nested_delimiter="__",
        case_sensitive=False,
    )

    def get_config_dir(self) -> Path:
        """Get configuration directory path."""
        return Path(os.path.expanduser(self.config_dir))

    def get_log_file(self) -> Optional[Path]:
        """Get log file path, relative paths resolved under the config directory."""
        if self.logging.file:
            log_path = Path(os.path.expanduser(self.logging.file))
            if not log_path.is_absolute():
                log_path = self.get_config_dir() / log_path
            return log_path
        return None


class ConfigManager:
    """Configuration manager with hierarchical loading."""

    def __init__(self):
        self._config: Optional[Config] = None

    def load_config(
        self,
        config_files: Optional[List[Union[str, Path]]] = None,
        **overrides: Any,
    ) -> Config:
        """
        Load configuration from multiple sources.

        Args:
            config_files: List of configuration files to load
            **overrides: Configuration overrides

        Returns:
            Loaded configuration
        """
        if self._config is not None:
            return self._config

        if config_files is None:
            config_files = DEFAULT_CONFIG_FILES

        config_data: Dict[str, Any] = {}

        for config_file in config_files:
            file_path = Path(os.path.expanduser(str(config_file)))
            if file_path.exists():
                try:
                    file_data = toml.load(file_path)
                    _deep_update(config_data, file_data)
                    logger.debug(f"Loaded configuration from {file_path}")
                except (toml.TomlDecodeError, OSError) as e:
                    logger.warning(f"Failed to load config from {file_path}: {e}")

        _deep_update(config_data, overrides)

        self._config = Config(**config_data)
        return self._config

    def get_config(self) -> Config:
        """Get current configuration."""
        if self._config is None:
            return self.load_config()
        return self._config

    def reload_config(
        self,
        config_files: Optional[List[Union[str, Path]]] = None,
        **overrides: Any,
    ) -> Config:
        """Reload configuration."""
        self._config = None
        return self.load_config(config_files, **overrides)


def _deep_update(target: Dict[str, Any], source: Dict[str, Any]) -> None:
    """Merge nested tables so a later file can override a single key."""
    for key, value in source.items():
        if isinstance(value, dict) and isinstance(target.get(key), dict):
            _deep_update(target[key], value)
        else:
            target[key] = value


# Global configuration manager
_config_manager = ConfigManager()

# Convenience functions
load_config = _config_manager.load_config
get_config = _config_manager.get_config
reload_config = _config_manager.reload_config
