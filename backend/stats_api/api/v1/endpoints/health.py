"""
Health Check Endpoints

- /health/live  - Basic liveness (app is running)
- /health/ready - Readiness check (database reachable, tables created)
- /health/deep  - Detailed diagnostics: database, Redis, language model config
"""

from fastapi import APIRouter, HTTPException, status
from typing import Dict, Any
import asyncio
import time

from stats_api.core.config import settings
from stats_api.core.logging_config import logger
from stats_api.core.types import utcnow

router = APIRouter(prefix="/health", tags=["Health Checks"])

VERSION = "1.0.0"


async def check_database() -> Dict[str, Any]:
    """Check database connectivity and that the profiles table is reachable"""
    start = time.time()
    try:
        from stats_api.core.database import get_session_local
        from sqlalchemy import text
        from sqlalchemy.exc import SQLAlchemyError

        session_factory = get_session_local()
        async with session_factory() as session:
            await session.execute(text("SELECT 1"))

            try:
                await session.execute(text("SELECT COUNT(*) FROM profiles"))
                tables_ok = True
            except SQLAlchemyError:
                tables_ok = False

            latency = (time.time() - start) * 1000
            return {
                "status": "healthy",
                "latency_ms": round(latency, 2),
                "connection": "ok",
                "tables_ready": tables_ok,
                "message": "Database connection successful"
            }
    except Exception as e:
        latency = (time.time() - start) * 1000
        logger.error(f"[HealthCheck] Database check failed: {e}")
        return {
            "status": "unhealthy",
            "latency_ms": round(latency, 2),
            "connection": "failed",
            "tables_ready": False,
            "error": str(e),
            "message": "Database connection failed"
        }


async def check_redis() -> Dict[str, Any]:
    """Check Redis connectivity (rate limit storage); skipped when not configured"""
    if not settings.REDIS_URL:
        return {
            "status": "healthy",
            "configured": False,
            "message": "Redis not configured - rate limits use in-process memory"
        }

    start = time.time()
    try:
        import redis.asyncio as redis

        client = redis.from_url(settings.REDIS_URL, decode_responses=True)
        await client.ping()
        await client.aclose()

        latency = (time.time() - start) * 1000
        return {
            "status": "healthy",
            "configured": True,
            "latency_ms": round(latency, 2),
            "connection": "ok",
            "message": "Redis connection successful"
        }
    except Exception as e:
        latency = (time.time() - start) * 1000
        logger.warning(f"[HealthCheck] Redis check failed: {e}")
        return {
            "status": "unhealthy",
            "configured": True,
            "latency_ms": round(latency, 2),
            "connection": "failed",
            "error": str(e),
            "message": "Redis connection failed - rate limiting may not work"
        }


def check_ai_config() -> Dict[str, Any]:
    """Language model configuration (no network call)"""
    if settings.is_ai_configured():
        return {
            "status": "healthy",
            "configured": True,
            "model": settings.CLAUDE_MODEL,
            "message": "Anthropic API key configured"
        }
    return {
        "status": "degraded",
        "configured": False,
        "model": settings.CLAUDE_MODEL,
        "message": "Anthropic API key not set - cache misses on /harmony/analyze will fail"
    }


@router.get("/live")
async def liveness_check():
    """Liveness probe: 200 while the process is up"""
    return {
        "status": "alive",
        "timestamp": utcnow().isoformat(),
        "app": settings.APP_NAME,
        "version": VERSION
    }


@router.get("/ready")
async def readiness_check():
    """
    Readiness probe.

    Returns 200 only when the database answers and the tables exist,
    503 otherwise.
    """
    db_check = await check_database()
    is_ready = db_check.get("status") == "healthy" and db_check.get("tables_ready", False)

    response = {
        "status": "ready" if is_ready else "not_ready",
        "timestamp": utcnow().isoformat(),
        "checks": {
            "database": db_check,
        }
    }

    if not is_ready:
        logger.warning(f"[HealthCheck] Readiness check failed: {response}")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=response
        )

    return response


@router.get("/deep")
async def deep_health_check():
    """Full diagnostics for monitoring dashboards"""
    start_time = time.time()

    db_check, redis_check = await asyncio.gather(
        check_database(),
        check_redis(),
        return_exceptions=True
    )

    checks = {}
    for name, result in [("database", db_check), ("redis", redis_check)]:
        if isinstance(result, Exception):
            checks[name] = {"status": "unhealthy", "error": str(result)}
        else:
            checks[name] = result
    checks["ai"] = check_ai_config()

    statuses = [c.get("status", "unknown") for c in checks.values()]
    if "unhealthy" in statuses:
        overall = "unhealthy"
    elif "degraded" in statuses:
        overall = "degraded"
    else:
        overall = "healthy"

    response = {
        "status": overall,
        "timestamp": utcnow().isoformat(),
        "environment": settings.ENVIRONMENT,
        "version": VERSION,
        "total_check_time_ms": round((time.time() - start_time) * 1000, 2),
        "checks": checks,
    }

    if overall == "unhealthy":
        logger.error(f"[HealthCheck] Deep check unhealthy: {response}")

    return response
