"""Health check endpoints router for monitoring service availability."""

from typing import Any

from fastapi import APIRouter, Depends
from starlette.responses import JSONResponse

from src.broker_api.api.http.deps import get_database
from src.broker_api.core.exceptions import DatabaseError
from src.broker_api.core.services import Database
from src.broker_api.runtime.context import get_config

router = APIRouter(prefix="/health", tags=["health"])


@router.get("")
async def health() -> dict[str, str]:
    """Basic health check endpoint - checks if app is running.

    This is a liveness probe that returns 200 OK as long as the application
    process is running. It does not check dependencies.
    """
    return {"status": "healthy", "service": "api"}


@router.get("/ready", response_model=None)
def readiness(
    database: Database = Depends(get_database),
) -> dict[str, Any] | JSONResponse:
    """Readiness probe: 200 when the database answers, 503 otherwise."""
    config = get_config()

    try:
        database.health_check()
        checks = {"database": {"status": "healthy"}}
        all_healthy = True
    except DatabaseError as e:
        checks = {"database": {"status": "unhealthy", "error": str(e)}}
        all_healthy = False

    response = {
        "status": "ready" if all_healthy else "not_ready",
        "environment": config.app.environment,
        "checks": checks,
    }

    if not all_healthy:
        return JSONResponse(status_code=503, content=response)

    return response


@router.get("/database", response_model=None)
def health_database(
    database: Database = Depends(get_database),
) -> dict[str, Any] | JSONResponse:
    """Database-specific health check with connection pool status."""
    try:
        database.health_check()
    except DatabaseError as e:
        return JSONResponse(
            status_code=503,
            content={
                "status": "unhealthy",
                "error": str(e),
                "error_type": type(e).__name__,
            },
        )

    return {"status": "healthy", "pool": database.get_pool_status()}
