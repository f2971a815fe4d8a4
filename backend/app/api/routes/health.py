"""Health & Readiness Probes — liveness and readiness endpoints for container orchestration.

Invariants:
    - GET /api/v1/health/ always returns 200 if process is up (liveness)
    - GET /api/v1/health/ready returns 503 if database is unreachable (readiness)
    - An unconfigured SIRI proxy is reported but never makes the service unready
      (only /api/siri-proxy depends on it)
"""

import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

import app.infrastructure.database as database
from app.config import Settings, get_settings

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/health", tags=["health"])


@router.get("/", status_code=status.HTTP_200_OK)
async def health_check():
    """Basic liveness probe. Returns 200 if the process is up."""
    return {"status": "healthy", "service": "cashbus-api", "version": "1.0.0"}


@router.get("/ready")
async def readiness_check(settings: Settings = Depends(get_settings)):
    manager = database.db_manager
    db_ok = await manager.health_check() if manager else False
    checks = {
        "database": "healthy" if db_ok else "unavailable",
        "siri_proxy": "configured" if settings.siri_proxy_url else "not_configured",
    }
    if not db_ok:
        logger.error("Readiness check failed: database unavailable")
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "status": "not_ready",
                "reason": "database_unavailable",
                "checks": checks,
            },
        )
    return {"status": "ready", "checks": checks}
