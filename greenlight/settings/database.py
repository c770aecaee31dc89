"""PostgreSQL connection, pool and statement timeout settings."""

from typing import Any

from pydantic import Field, SecretStr
from sqlalchemy.engine import URL

from greenlight.settings.base import EnvSettings


class DatabaseSettings(EnvSettings):
    """PostgreSQL database configuration.

    Attributes:
        host: Database host.
        port: Database port.
        database: Database name.
        user: Database user.
        password: Database password.
        url: Full connection URL, overrides the individual fields.
        pool_size: Connections kept open in the pool.
        pool_overflow: Extra connections allowed above pool_size.
        pool_timeout: Seconds to wait for a free connection.
        max_idle_time: Seconds before a pooled connection is recycled.
        statement_timeout: Seconds a single store call may run.
    """

    host: str = Field(default="localhost", alias="POSTGRES_HOST")
    port: int = Field(default=5432, alias="POSTGRES_PORT")
    database: str = Field(default="greenlight", alias="POSTGRES_DB")
    user: str = Field(default="greenlight", alias="POSTGRES_USER")
    password: SecretStr = Field(default=SecretStr(""), alias="POSTGRES_PASSWORD")
    url: SecretStr | None = Field(default=None, alias="DATABASE_URL")

    pool_size: int = Field(default=25, ge=1, alias="DB_POOL_SIZE")
    pool_overflow: int = Field(default=0, ge=0, alias="DB_POOL_OVERFLOW")
    pool_timeout: float = Field(default=3.0, gt=0, alias="DB_POOL_TIMEOUT")
    max_idle_time: int = Field(default=900, ge=1, alias="DB_MAX_IDLE_TIME")

    statement_timeout: float = Field(default=3.0, gt=0, alias="DB_STATEMENT_TIMEOUT")

    @property
    def is_configured(self) -> bool:
        """Whether credentials or a full URL were supplied."""
        return bool(self.password.get_secret_value() or self.url)

    @property
    def sync_url(self) -> str:
        """Connection URL for the psycopg2 driver, password included."""
        if self.url:
            return self.url.get_secret_value()
        url = URL.create(
            "postgresql",
            username=self.user,
            password=self.password.get_secret_value() or None,
            host=self.host,
            port=self.port,
            database=self.database,
        )
        return url.render_as_string(hide_password=False)

    def engine_options(self) -> dict[str, Any]:
        """Keyword arguments for ``create_engine`` describing the pool."""
        return {
            "pool_size": self.pool_size,
            "max_overflow": self.pool_overflow,
            "pool_timeout": self.pool_timeout,
            "pool_recycle": self.max_idle_time,
            "pool_pre_ping": True,
        }
