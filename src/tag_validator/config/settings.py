"""
tag_validator settings.

Read from ``TAG_VALIDATOR_*`` environment variables and .env with Pydantic
settings, or from a YAML file via ``ValidatorSettings.from_yaml``.
"""

from functools import lru_cache
from pathlib import Path
from typing import Any, Literal, Optional

import yaml
from pydantic import Field, ValidationInfo, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class LoggingSettings(BaseSettings):
    """Output used by ``configure_logging``."""

    model_config = SettingsConfigDict(env_prefix="TAG_VALIDATOR_LOG_", extra="ignore")

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO", description="Lowest level that is emitted"
    )
    format: Literal["json", "console"] = Field(default="json", description="JSON lines or console renderer")
    file: Optional[str] = Field(default=None, description="Append to this file instead of stderr")

    @field_validator("level", "format", mode="before")
    @classmethod
    def normalize_case(cls, v: Any, info: ValidationInfo) -> Any:
        if not isinstance(v, str):
            return v
        return v.upper() if info.field_name == "level" else v.lower()


class ValidatorSettings(BaseSettings):
    """
    Settings for the shared validator.

    ``log_initialization`` emits a ``validator_initialized`` event listing the
    registered rules when the shared validator is first built. It is off by
    default so the library stays silent until the application opts in.
    """

    model_config = SettingsConfigDict(
        env_prefix="TAG_VALIDATOR_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
    )

    log_initialization: bool = Field(default=False, description="Log the rule table when the validator is built")
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    @classmethod
    def from_yaml(cls, path: str | Path) -> "ValidatorSettings":
        """
        Load settings from a YAML mapping, e.g.::

            log_initialization: true
            logging:
              level: debug

        :raises FileNotFoundError: If ``path`` does not exist.
        :raises ValueError: If the document is not a mapping.
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
        if not isinstance(data, dict):
            raise ValueError(f"Config file must contain a mapping: {path}")
        return cls(**data)


@lru_cache(maxsize=1)
def get_settings() -> ValidatorSettings:
    """Settings loaded from the environment on first use."""
    return ValidatorSettings()


def reload_settings() -> ValidatorSettings:
    """Drop the cached settings and read the environment again."""
    get_settings.cache_clear()
    return get_settings()
