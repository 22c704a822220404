"""Health check endpoints router for monitoring service availability."""

from typing import Any

from fastapi import APIRouter, Request
from starlette.responses import JSONResponse

from src.directory.api.http.app_data import ApplicationDependencies
from src.directory.runtime.context import get_config

router = APIRouter(prefix="/health", tags=["health"])


@router.get("")
async def health() -> dict[str, str]:
    """Liveness probe: 200 as long as the process is running."""
    return {"status": "healthy", "service": get_config().app.name}


@router.get("/ready", response_model=None)
async def readiness(request: Request) -> dict[str, Any] | JSONResponse:
    """Readiness probe: 200 when the database answers, 503 otherwise."""
    app_deps: ApplicationDependencies = request.app.state.app_dependencies
    config = get_config()

    try:
        db_healthy = app_deps.database_service.health_check()
        database = {
            "status": "healthy" if db_healthy else "unhealthy",
            "type": config.database.dialect,
        }
    except Exception as e:
        db_healthy = False
        database = {"status": "unhealthy", "error": str(e)}

    body = {
        "status": "ready" if db_healthy else "not_ready",
        "checks": {"database": database},
    }
    if not db_healthy:
        return JSONResponse(status_code=503, content=body)
    return body
