"""Simple health and readiness endpoints."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, HTTPException, status
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from product_api.db.session import engine

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/health", tags=["health"])

SERVICE_NAME = "product-api"


@router.get("/live", summary="Liveness probe")
async def live() -> dict[str, str]:
    """Indicates API process is running."""
    return {"status": "ok", "service": SERVICE_NAME}


@router.get("/ready", summary="Readiness probe")
async def ready() -> dict[str, Any]:
    """Check that the database accepts connections.

    Used by load balancers to determine if traffic should be routed to this instance.
    """
    checks: dict[str, Any] = {
        "status": "ok",
        "service": SERVICE_NAME,
        "checks": {},
    }

    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1")).fetchone()
        checks["checks"]["database"] = {
            "status": "healthy",
            "message": "Database connection successful",
        }
    except SQLAlchemyError as e:
        logger.error(f"Database health check failed: {e}", exc_info=True)
        checks["status"] = "unhealthy"
        checks["checks"]["database"] = {
            "status": "unhealthy",
            "message": f"Database connection failed: {str(e)}",
        }
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=checks,
        ) from e

    return checks
