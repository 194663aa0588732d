"""
Health check endpoint.
"""


import logging

import redis
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.cache import get_redis
from app.core.config import settings
from app.core.database import get_db


logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/health")
async def health_check(
    db: Session = Depends(get_db),
    cache: redis.Redis = Depends(get_redis)
):
    """Report database and cache reachability"""
    checks = {"database": "ok", "cache": "ok"}
    try:
        db.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.error("❌ Database health check failed: %s", e)
        checks["database"] = "unavailable"
    try:
        cache.ping()
    except redis.RedisError as e:
        logger.error("❌ Redis health check failed: %s", e)
        checks["cache"] = "unavailable"
    healthy = all(value == "ok" for value in checks.values())
    return JSONResponse(
        status_code=200 if healthy else 503,
        content={"status": "healthy" if healthy else "degraded", "version": settings.version, **checks}
    )
