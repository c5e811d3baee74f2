"""
Test utility modules of MCP Patterns.

Test configuration loading and logging setup.
"""

import json
import logging
import logging.handlers
import os
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from mcp_patterns.core.exceptions import MissingPrerequisiteError, UnknownPatternError
from mcp_patterns.utils.config import Config, ConfigManager
from mcp_patterns.utils.logging import JSONFormatter, PatternsLogger, get_logger


class TestConfig:
    """Test Configuration management."""

    def test_config_defaults(self):
        config = Config()

        assert config.debug is False
        assert config.verbose is False
        assert config.logging.level == "INFO"
        assert config.logging.console_level == "WARNING"
        assert config.claude.cli_path == "claude"
        assert config.claude.timeout == 120
        assert config.prerequisites.probe_timeout == 10
        assert config.get_log_file() is None

    def test_config_environment_override(self):
        with patch.dict(os.environ, {"MCP_PATTERNS_DEBUG": "true"}):
            assert Config().debug is True

    def test_nested_environment_override(self):
        with patch.dict(os.environ, {"MCP_PATTERNS_CLAUDE__TIMEOUT": "30"}):
            assert Config().claude.timeout == 30

    def test_invalid_values_rejected(self):
        with pytest.raises(ValidationError):
            Config(logging={"level": "LOUD"})
        with pytest.raises(ValidationError):
            Config(claude={"timeout": 0})
        with pytest.raises(ValidationError):
            Config(prerequisites={"probe_timeout": -1})

    def test_level_is_upper_cased(self):
        assert Config(logging={"console_level": "debug"}).logging.console_level == "DEBUG"

    def test_relative_log_file_under_config_dir(self, tmp_path):
        config = Config(config_dir=str(tmp_path), logging={"file": "patterns.log"})

        assert config.get_config_dir() == tmp_path
        assert config.get_log_file() == tmp_path / "patterns.log"

    def test_absolute_log_file(self, tmp_path):
        log_file = tmp_path / "elsewhere.log"

        assert Config(logging={"file": str(log_file)}).get_log_file() == log_file


class TestConfigManager:
    """Test hierarchical file loading."""

    def test_missing_files_give_defaults(self, tmp_path):
        config = ConfigManager().load_config([tmp_path / "absent.toml"])

        assert config.claude.timeout == 120

    def test_later_file_overrides_single_key(self, tmp_path):
        first = tmp_path / "first.toml"
        second = tmp_path / "second.toml"
        first.write_text('[claude]\ncli_path = "/opt/claude"\ntimeout = 60\n')
        second.write_text("[claude]\ntimeout = 45\n")

        config = ConfigManager().load_config([first, second])

        assert config.claude.cli_path == "/opt/claude"
        assert config.claude.timeout == 45

    def test_overrides_win(self, tmp_path):
        config_file = tmp_path / "config.toml"
        config_file.write_text("debug = false\n")

        config = ConfigManager().load_config([config_file], debug=True)

        assert config.debug is True

    def test_malformed_file_ignored(self, tmp_path):
        config_file = tmp_path / "broken.toml"
        config_file.write_text("[claude\ntimeout = = 3\n")

        config = ConfigManager().load_config([config_file])

        assert config.claude.timeout == 120

    def test_config_cached_until_reload(self, tmp_path):
        manager = ConfigManager()
        first = manager.load_config([])

        assert manager.get_config() is first
        assert manager.reload_config([], verbose=True) is not first
        assert manager.get_config().verbose is True


class TestLogging:
    """Test logging setup."""

    def test_get_logger_caches(self):
        assert get_logger("mcp_patterns.test") is get_logger("mcp_patterns.test")

    def test_file_logging(self, tmp_path, restore_root_logger):
        log_file = tmp_path / "logs" / "patterns.log"
        PatternsLogger().setup_logging(level="DEBUG", log_file=log_file, enable_rich=False)

        logging.getLogger("mcp_patterns.test").debug("hello file")
        for handler in restore_root_logger.handlers:
            handler.flush()

        assert "hello file" in log_file.read_text()
        file_handlers = [
            h for h in restore_root_logger.handlers
            if isinstance(h, logging.handlers.RotatingFileHandler)
        ]
        assert len(file_handlers) == 1

    def test_setup_runs_once_unless_forced(self, restore_root_logger):
        manager = PatternsLogger()
        manager.setup_logging(console_level="ERROR", enable_rich=False)
        manager.setup_logging(console_level="DEBUG", enable_rich=False)

        assert restore_root_logger.level == logging.ERROR

        manager.setup_logging(console_level="DEBUG", enable_rich=False, force=True)

        assert restore_root_logger.level == logging.DEBUG

    def test_disabled(self, restore_root_logger):
        PatternsLogger().setup_logging(enabled=False)

        assert restore_root_logger.handlers == []
        assert restore_root_logger.level == logging.CRITICAL

    def test_json_formatter_includes_extra(self):
        record = logging.LogRecord("mcp_patterns.x", logging.INFO, __file__, 1, "added %s", ("ctx",), None)
        record.server_name = "context7"

        entry = json.loads(JSONFormatter().format(record))

        assert entry["message"] == "added ctx"
        assert entry["level"] == "INFO"
        assert entry["server_name"] == "context7"


class TestExceptions:
    """Test error payloads."""

    def test_unknown_pattern_to_dict(self):
        error = UnknownPatternError(["X"], ["AWS"])

        assert str(error) == "[UNKNOWN_PATTERN] Unknown pattern: X"
        assert error.to_dict() == {
            "error": "UnknownPatternError",
            "message": "Unknown pattern: X",
            "error_code": "UNKNOWN_PATTERN",
            "details": {"unknown": ["X"], "valid": ["AWS"]},
        }

    def test_missing_prerequisite_message(self):
        error = MissingPrerequisiteError(["uvx", "npx"])

        assert error.message == "Missing required tools: uvx npx"
        assert error.details == {"missing": ["uvx", "npx"]}
