"""
Health checks - for load balancers, Kubernetes, and monitoring.
Fast liveness; readiness pings the database and Redis.
"""

import logging

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse
from sqlalchemy import text

from catalog.cache.redis_client import RedisClient
from catalog.config import get_settings
from catalog.db.session import DbSession

logger = logging.getLogger(__name__)

router = APIRouter()
settings = get_settings()


@router.get("")
async def health():
    """Liveness: is the process up?"""
    return {"status": "ok", "app": settings.app_name}


@router.get("/ready")
async def ready(session: DbSession, redis: RedisClient):
    """Readiness: can accept traffic? Both backing stores must answer."""
    checks = {}
    try:
        await session.execute(text("SELECT 1"))
        checks["database"] = "ok"
    except Exception as exc:
        logger.warning("Readiness check: database unavailable: %s", exc)
        checks["database"] = "unavailable"
    try:
        await redis.ping()
        checks["redis"] = "ok"
    except Exception as exc:
        logger.warning("Readiness check: redis unavailable: %s", exc)
        checks["redis"] = "unavailable"

    if all(v == "ok" for v in checks.values()):
        return {"status": "ready", "checks": checks}
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"status": "unavailable", "checks": checks},
    )
