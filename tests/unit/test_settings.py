"""
Unit tests for ValidatorSettings: environment and YAML loading,
case normalization of logging options, and the cached accessor.
"""

import os
from pathlib import Path
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from tag_validator.config.settings import (
    LoggingSettings,
    ValidatorSettings,
    get_settings,
    reload_settings,
)


@pytest.fixture(autouse=True)
def fresh_settings():
    """Each test sees settings built from its own environment."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


class TestValidatorSettingsFromEnv:
    def test_quiet_by_default(self) -> None:
        with patch.dict(os.environ, {}, clear=True):
            s = ValidatorSettings()
        assert s.log_initialization is False
        assert s.logging.level == "INFO"
        assert s.logging.format == "json"
        assert s.logging.file is None

    def test_log_initialization_from_env(self) -> None:
        with patch.dict(os.environ, {"TAG_VALIDATOR_LOG_INITIALIZATION": "true"}):
            assert ValidatorSettings().log_initialization is True

    def test_nested_logging_from_env(self) -> None:
        with patch.dict(os.environ, {"TAG_VALIDATOR_LOGGING__LEVEL": "debug"}, clear=True):
            assert ValidatorSettings().logging.level == "DEBUG"


class TestLoggingSettings:
    def test_prefixed_env_and_case_normalization(self) -> None:
        env = {"TAG_VALIDATOR_LOG_LEVEL": "warning", "TAG_VALIDATOR_LOG_FORMAT": "Console"}
        with patch.dict(os.environ, env):
            s = LoggingSettings()
        assert s.level == "WARNING"
        assert s.format == "console"

    @pytest.mark.parametrize("field, value", [("level", "verbose"), ("format", "xml")])
    def test_unknown_values_rejected(self, field: str, value: str) -> None:
        with pytest.raises(ValidationError):
            LoggingSettings(**{field: value})


class TestFromYaml:
    def test_loads_flags_and_logging(self, tmp_path: Path) -> None:
        config = tmp_path / "tag_validator.yaml"
        config.write_text(
            "log_initialization: true\nlogging:\n  level: error\n  file: /tmp/tv.log\n",
            encoding="utf-8",
        )
        s = ValidatorSettings.from_yaml(config)
        assert s.log_initialization is True
        assert s.logging.level == "ERROR"
        assert s.logging.file == "/tmp/tv.log"

    def test_empty_file_gives_defaults(self, tmp_path: Path) -> None:
        config = tmp_path / "empty.yaml"
        config.write_text("", encoding="utf-8")
        with patch.dict(os.environ, {}, clear=True):
            assert ValidatorSettings.from_yaml(config).log_initialization is False

    def test_non_mapping_rejected(self, tmp_path: Path) -> None:
        config = tmp_path / "list.yaml"
        config.write_text("- int\n- float\n", encoding="utf-8")
        with pytest.raises(ValueError, match="mapping"):
            ValidatorSettings.from_yaml(config)

    def test_missing_file_raises(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            ValidatorSettings.from_yaml(tmp_path / "missing.yaml")


class TestCachedAccessor:
    def test_environment_read_once_until_reload(self) -> None:
        with patch.dict(os.environ, {"TAG_VALIDATOR_LOG_INITIALIZATION": "false"}):
            first = get_settings()
        with patch.dict(os.environ, {"TAG_VALIDATOR_LOG_INITIALIZATION": "true"}):
            assert get_settings() is first
            assert get_settings().log_initialization is False
            reloaded = reload_settings()
        assert reloaded is not first
        assert reloaded.log_initialization is True
