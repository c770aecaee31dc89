"""FastAPI application entry point.

Creates and configures the Greenlight REST API. The connection pool
and movie store are built once per application and reached by route
handlers through dependencies.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from greenlight.api.errors import register_exception_handlers
from greenlight.api.routers import health, movies
from greenlight.database.connection import DatabaseConnection
from greenlight.database.repositories import MovieStore
from greenlight.monitoring.middleware import PrometheusMiddleware, mount_metrics
from greenlight.settings import settings
from greenlight.utils.logger import get_logger

API_PREFIX = "/v1"

logger = get_logger("greenlight.api.main")

# =============================================================================
# LIFESPAN
# =============================================================================


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager.

    Validates the database connection on startup and releases the
    pool on shutdown.

    Args:
        app: FastAPI application instance.

    Yields:
        None after startup tasks complete.
    """
    database: DatabaseConnection = app.state.database
    _verify_database_connection(database)
    logger.info("starting server env=%s version=%s", settings.environment, settings.api.version)
    yield
    database.dispose()
    logger.info("database connection pool closed")


def _verify_database_connection(database: DatabaseConnection) -> None:
    """Fail startup when the database is unreachable."""
    if not database.check_connection():
        logger.error("database connection failed")
        raise RuntimeError("database is not reachable")
    logger.info("established connection pool for database")


# =============================================================================
# APPLICATION FACTORY
# =============================================================================


def create_app(database: DatabaseConnection | None = None) -> FastAPI:
    """Create and configure FastAPI application.

    Args:
        database: Connection pool to use. Built from settings when omitted.

    Returns:
        Configured FastAPI instance.
    """
    if database is None:
        database = DatabaseConnection.from_settings(settings.database, echo=settings.debug)

    app = FastAPI(
        title=settings.api.title,
        version=settings.api.version,
        description="REST API for managing a movie catalogue",
        lifespan=lifespan,
        docs_url=f"{API_PREFIX}/docs",
        redoc_url=f"{API_PREFIX}/redoc",
        openapi_url=f"{API_PREFIX}/openapi.json",
    )
    app.state.database = database
    app.state.movie_store = MovieStore(database, timeout=settings.database.statement_timeout)

    _configure_cors(app)
    app.add_middleware(PrometheusMiddleware)
    mount_metrics(app)
    register_exception_handlers(app)
    _register_routers(app)
    return app


def _configure_cors(app: FastAPI) -> None:
    """Configure CORS middleware.

    Args:
        app: FastAPI application instance.
    """
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors.origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PATCH", "DELETE"],
        allow_headers=["Content-Type"],
    )


def _register_routers(app: FastAPI) -> None:
    """Register API routers.

    Args:
        app: FastAPI application instance.
    """
    app.include_router(health.router, prefix=API_PREFIX)
    app.include_router(movies.router, prefix=API_PREFIX)


# =============================================================================
# CLI ENTRY POINT
# =============================================================================


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "greenlight.api.main:create_app",
        factory=True,
        host=settings.api.host,
        port=settings.api.port,
        reload=settings.api.reload,
    )
