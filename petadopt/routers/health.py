"""
Health endpoints.

Liveness (/health) and database readiness (/ready).
"""

from __future__ import annotations

import logging
from datetime import UTC, datetime

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse

router = APIRouter()

logger = logging.getLogger(__name__)


def _timestamp() -> str:
    return datetime.now(UTC).isoformat()


@router.get("/health", summary="Liveness check")
async def health_check() -> dict[str, str]:
    return {"status": "ok", "timestamp": _timestamp()}


@router.get("/ready", summary="Readiness check (database reachable)")
async def readiness_check(request: Request) -> JSONResponse:
    try:
        await request.app.state.database.ping()
    except Exception:
        logger.exception("Database readiness check failed")
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "status": "error",
                "timestamp": _timestamp(),
                "database": "disconnected",
            },
        )
    return JSONResponse(
        content={"status": "ready", "timestamp": _timestamp(), "database": "connected"}
    )
