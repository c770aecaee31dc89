"""HTTP server, request body and CORS settings."""

from pydantic import Field

from greenlight.settings.base import EnvSettings


class APISettings(EnvSettings):
    """FastAPI and uvicorn configuration.

    Attributes:
        host: Bind address.
        port: Listen port.
        reload: Restart on code changes (development only).
        title: OpenAPI title.
        version: Application version reported by the health check.
        max_body_bytes: Largest accepted JSON request body.
    """

    host: str = Field(default="0.0.0.0", alias="API_HOST")
    port: int = Field(default=4000, ge=1, le=65535, alias="API_PORT")
    reload: bool = Field(default=False, alias="API_RELOAD")
    title: str = Field(default="Greenlight API", alias="API_TITLE")
    version: str = Field(default="1.0.0", alias="API_VERSION")
    max_body_bytes: int = Field(default=1_048_576, gt=0, alias="MAX_BODY_BYTES")


class CORSSettings(EnvSettings):
    """Allowed browser origins, given as one comma-separated string."""

    origins_raw: str = Field(default="http://localhost:3000", alias="CORS_ORIGINS")

    @property
    def origins(self) -> list[str]:
        return [o.strip() for o in self.origins_raw.split(",") if o.strip()]
