"""Welcome & Health Probes: root info text plus liveness and readiness endpoints.

Invariants:
    - GET / always returns 200 with a plain-text welcome
    - GET /health always returns 200 if the process is up (liveness)
    - GET /health/ready returns 503 if the database is unreachable (readiness)
"""

import logging
from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse, PlainTextResponse

from campspot.infrastructure.database import Database, get_db

logger = logging.getLogger(__name__)
router = APIRouter(tags=["health"])

WELCOME_TEXT = "Welcome to the Campspot camping-spot booking API"


@router.get("/", response_class=PlainTextResponse)
async def welcome():
    return WELCOME_TEXT


@router.get("/health", status_code=status.HTTP_200_OK)
async def health_check():
    """Basic liveness check. Returns 200 if the process is up."""
    return {
        "status": "healthy",
        "service": "campspot-api",
        "version": "1.0.0",
    }


@router.get("/health/ready")
async def readiness_check(db: Database = Depends(get_db)):
    """Readiness check: includes database connectivity."""
    if not await db.health_check():
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "status": "not_ready",
                "reason": "database_unavailable",
            },
        )
    return {"status": "ready", "checks": {"database": "healthy"}}
