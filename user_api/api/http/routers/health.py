"""Health check endpoints router for monitoring service availability."""

from fastapi import APIRouter, Request
from starlette.responses import JSONResponse

from user_api.api.http.app_data import ApplicationDependencies
from user_api.api.http.response import error_response, success_response

router = APIRouter(prefix="/health", tags=["health"])


@router.get("", response_model=None)
async def health() -> JSONResponse:
    """Basic health check endpoint - checks if app is running.

    This is a liveness probe; it does not check dependencies.
    """
    return success_response({"status": "healthy", "message": "API is running"})


@router.get("/ready", response_model=None)
def readiness(request: Request) -> JSONResponse:
    """Readiness check - validates the database connection.

    Returns 200 with the pool status when the database answers, 503 otherwise.
    """
    app_deps: ApplicationDependencies = request.app.state.app_dependencies
    database = app_deps.database_service

    if not database.health_check():
        return error_response(503, "Database unavailable")

    return success_response(
        {
            "status": "ready",
            "checks": {
                "database": {
                    "status": "healthy",
                    "type": database.driver,
                    "pool": database.get_pool_status(),
                }
            },
        }
    )
