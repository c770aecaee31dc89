"""Shared settings base class and logging settings."""

from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_PROJECT_ROOT = Path(__file__).resolve().parents[2]

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def get_project_root() -> Path:
    """Directory holding ``pyproject.toml`` and the default ``logs/``."""
    return _PROJECT_ROOT


class EnvSettings(BaseSettings):
    """Base for every settings section.

    Values come from environment variables, then from a ``.env`` file
    in the working directory. Unrelated variables are ignored.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


# =============================================================================
# LOGGING
# =============================================================================


class LoggingSettings(EnvSettings):
    """Logging configuration.

    Attributes:
        level: Log level name, normalized to upper case.
        log_dir: Log files directory. Empty disables file logging.
    """

    level: str = Field(default="INFO", alias="LOG_LEVEL")
    log_dir: str = Field(default="logs", alias="LOG_DIR")

    @field_validator("level")
    @classmethod
    def normalize_level(cls, v: str) -> str:
        level = v.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}")
        return level

    @property
    def log_path(self) -> Path | None:
        """Resolved log directory, or None when file logging is off."""
        if not self.log_dir:
            return None
        path = Path(self.log_dir)
        return path if path.is_absolute() else _PROJECT_ROOT / path
