"""Pydantic schemas for API responses.

Every success body is an envelope keyed by the resource name; every
error body is ``{"error": ...}``.
"""

from pydantic import BaseModel, ConfigDict, Field

# =============================================================================
# HEALTH
# =============================================================================


class SystemInfo(BaseModel):
    """Deployment information reported by the health check."""

    environment: str = Field(examples=["development"])
    version: str = Field(examples=["1.0.0"])


class DatabaseComponentHealth(BaseModel):
    """Database connection health status."""

    connected: bool = False


class HealthResponse(BaseModel):
    """Health check response schema."""

    status: str = Field(examples=["available"])
    system_info: SystemInfo
    database: DatabaseComponentHealth = Field(default_factory=DatabaseComponentHealth)


# =============================================================================
# MOVIES
# =============================================================================


class MovieResponse(BaseModel):
    """Public representation of a movie (created_at is not exposed)."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    year: int
    runtime: int
    genres: list[str]
    version: int


class MovieEnvelope(BaseModel):
    """Single movie response."""

    movie: MovieResponse


class MovieListEnvelope(BaseModel):
    """Movie list response."""

    movies: list[MovieResponse]


class MessageResponse(BaseModel):
    """Plain confirmation message."""

    message: str


# =============================================================================
# ERRORS
# =============================================================================


class ErrorResponse(BaseModel):
    """Error envelope: a message, or a field to message map for validation."""

    error: str | dict[str, str]
