"""
Liveness and readiness endpoints.

/health only says the process is up. /ready checks PostgreSQL and reports
whether the optional integrations (Stripe, voice agent) are configured; only
the database decides the status code, since bookings work without payments.
"""

from __future__ import annotations

import structlog
from fastapi import APIRouter
from fastapi.responses import JSONResponse

from hotelhub import config
from hotelhub.db.engine import check_engine_health

logger = structlog.get_logger(__name__)

router = APIRouter()


@router.get("/health")
def health_check() -> JSONResponse:
    """
    Liveness probe.

    Example:
        >>> GET /health
        {"status": "ok"}
    """
    return JSONResponse(content={"status": "ok"})


@router.get("/ready")
def readiness_check() -> JSONResponse:
    """
    Readiness probe.

    Returns 503 when the reservation database is unreachable.

    Example:
        >>> GET /ready
        {"status": "ready", "checks": {"database": "ok", "payments": "configured",
         "voice_agent": "not configured"}}
    """
    checks = {
        "database": "ok" if check_engine_health() else "failed",
        "payments": "configured" if config.STRIPE_SECRET_KEY else "not configured",
        "voice_agent": "configured" if config.VOICE_AGENT_ID else "not configured",
    }

    if checks["database"] == "ok":
        return JSONResponse(content={"status": "ready", "checks": checks})

    logger.error("readiness_check_failed", reason="database_not_accessible")
    return JSONResponse(status_code=503, content={"status": "not ready", "checks": checks})
