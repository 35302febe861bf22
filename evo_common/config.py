"""Runtime settings for evo processes.

Settings come from environment variables with the ``EVO_`` prefix (and an
optional ``.env`` file), using pydantic-settings:

- ``EVO_LOG_DIR``: directory for log files (default ``./logs``)
- ``EVO_LOG_LEVEL``: minimum log level (default ``info``)
- ``EVO_OTEL_ENDPOINT``: OTLP/HTTP endpoint for span export (optional)

These are process settings, not the gateway/agent/skill documents, which are
TOML files modelled in ``evo_common.schemas``.
"""

import logging
from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_LOG_DIR = Path("./logs")
DEFAULT_LOG_LEVEL = "info"


class EvoSettings(BaseSettings):
    """Environment-driven settings shared by all evo components."""

    log_dir: Path = Field(DEFAULT_LOG_DIR, description="Directory for log files")
    log_level: str = Field(
        DEFAULT_LOG_LEVEL, description="Minimum log level (debug, info, warning, error)"
    )
    otel_endpoint: str | None = Field(
        None, description="OTLP/HTTP endpoint for trace export"
    )

    model_config = SettingsConfigDict(
        env_prefix="EVO_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Accept any stdlib level name, case-insensitively."""
        level = v.strip().upper()
        if level == "WARN":
            level = "WARNING"
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"Unknown log level: {v}")
        return level.lower()

    @property
    def log_level_number(self) -> int:
        """Numeric stdlib level for ``log_level``."""
        return logging.getLevelNamesMapping()[self.log_level.upper()]


@lru_cache(maxsize=1)
def get_settings() -> EvoSettings:
    """Get cached global settings instance.

    Returns:
        Global EvoSettings instance

    """
    return EvoSettings()


def log_dir() -> Path:
    """Resolve the log directory from the current environment.

    Unlike ``get_settings()`` this is not cached, so tests and late
    ``EVO_LOG_DIR`` overrides are honoured.
    """
    return EvoSettings().log_dir


__all__ = [
    "DEFAULT_LOG_DIR",
    "DEFAULT_LOG_LEVEL",
    "EvoSettings",
    "get_settings",
    "log_dir",
]
