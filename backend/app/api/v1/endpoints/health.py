"""
Health Check Endpoints

- /health/live  - Basic liveness (app is running)
- /health/ready - Readiness check (database reachable, tables created)
"""

import time
from datetime import datetime

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from app.core.config import settings
from app.core.logging_config import logger
from app.modules.auth.dependencies import DbSession


router = APIRouter(prefix="/health", tags=["Health Checks"])


@router.get("/live")
async def liveness():
    return {
        "success": True,
        "status": "alive",
        "timestamp": datetime.utcnow().isoformat() + "Z",
    }


@router.get("/ready")
async def readiness(db: DbSession):
    """Verify the database answers and the users table exists"""
    start = time.perf_counter()
    try:
        await db.execute(text("SELECT 1"))
        await db.execute(text("SELECT COUNT(*) FROM users"))
    except SQLAlchemyError as e:
        logger.error(f"[HealthCheck] Database check failed: {e}")
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "success": False,
                "status": "unhealthy",
                "message": "Database not ready",
            },
        )

    return {
        "success": True,
        "status": "ready",
        "environment": settings.ENVIRONMENT,
        "database": {"latency_ms": round((time.perf_counter() - start) * 1000, 2)},
    }
