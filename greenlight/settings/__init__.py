"""Centralized configuration for the Greenlight service.

Every value has a local default and can be overridden by an
environment variable or a ``.env`` file.

Usage:
    from greenlight.settings import settings

    settings.database.sync_url
    settings.api.max_body_bytes
"""

from typing import Any, Literal

from pydantic import Field, field_validator

from greenlight.settings.api import APISettings, CORSSettings
from greenlight.settings.base import EnvSettings, LoggingSettings, get_project_root
from greenlight.settings.database import DatabaseSettings

__all__ = [
    "Settings",
    "settings",
    "EnvSettings",
    "LoggingSettings",
    "DatabaseSettings",
    "APISettings",
    "CORSSettings",
    "get_masked_settings",
    "get_project_root",
]

Environment = Literal["development", "staging", "production", "test"]


class Settings(EnvSettings):
    """All configuration sections behind one object."""

    environment: Environment = Field(default="development", alias="ENVIRONMENT")
    debug: bool = Field(default=False, alias="DEBUG")

    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    api: APISettings = Field(default_factory=APISettings)
    cors: CORSSettings = Field(default_factory=CORSSettings)

    @field_validator("environment", mode="before")
    @classmethod
    def lower_environment(cls, v: Any) -> Any:
        return v.lower() if isinstance(v, str) else v


settings = Settings()


def get_masked_settings() -> dict[str, Any]:
    """Settings as plain data, secrets rendered as ``**********``.

    Returns:
        Configuration dictionary safe for logging.
    """
    return settings.model_dump(mode="json")
