"""Health Probes — liveness and readiness of this SMP instance.

Invariants:
    - GET /health/ answers 200 while the process is up, without touching the DB
    - GET /health/ready answers 503 unless the database answers and the
      SMP managers are initialized; the body lists each check
"""

import logging

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse

from smp_directory.config import get_settings
from smp_directory.infrastructure import database

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/health", tags=["health"])

SERVICE_NAME = "smp-directory"
SERVICE_VERSION = "1.0.0"


@router.get("/", status_code=status.HTTP_200_OK)
async def liveness():
    return {
        "status": "alive",
        "service": SERVICE_NAME,
        "version": SERVICE_VERSION,
        "smp_id": get_settings().smp_id,
    }


@router.get("/ready")
async def readiness(request: Request):
    """Database connectivity and manager wiring."""
    checks = {
        "database": await _database_check(),
        "managers": _managers_check(request),
    }
    if any(state != "ok" for state in checks.values()):
        logger.warning(
            f"Readiness check failed: {checks}", extra={"path": request.url.path},
        )
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "not_ready", "checks": checks},
        )
    return {"status": "ready", "checks": checks}


async def _database_check() -> str:
    db_manager = database.db_manager
    if db_manager is None:
        return "not_initialized"
    return "ok" if await db_manager.health_check() else "unavailable"


def _managers_check(request: Request) -> str:
    managers = getattr(request.app.state, "smp_managers", None)
    return "ok" if managers is not None else "not_initialized"
