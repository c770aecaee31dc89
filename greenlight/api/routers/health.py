"""Health check endpoint."""

from fastapi import APIRouter

from greenlight.api.dependencies import DatabaseDep
from greenlight.api.schemas import DatabaseComponentHealth, HealthResponse, SystemInfo
from greenlight.settings import settings

router = APIRouter(tags=["Health"])


@router.get(
    "/healthcheck",
    response_model=HealthResponse,
    summary="Health check",
    description="Verify API is running and report deployment information.",
)
def healthcheck(database: DatabaseDep) -> HealthResponse:
    """Report service status, environment, version and database reachability."""
    return HealthResponse(
        status="available",
        system_info=SystemInfo(
            environment=settings.environment,
            version=settings.api.version,
        ),
        database=DatabaseComponentHealth(connected=database.check_connection()),
    )
