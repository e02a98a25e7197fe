# reelhub/routes/health.py
"""
Liveness and readiness endpoints.
"""

import time

from fastapi import APIRouter

from reelhub.db.pool import db_health_check
from reelhub.infrastructure.observability.logging import log_health_check
from reelhub.services.redis_client import fast_redis

router = APIRouter()


@router.get("/healthz")
async def healthz():
    """Basic health check - always returns 200 if app is running."""
    return {"status": "ok", "service": "reelhub"}


@router.get("/readyz")
async def readyz():
    """
    Readiness check covering Redis and the database pool.
    """
    checks = {}
    overall_ok = True

    # 1) Redis
    t0 = time.time()
    try:
        redis_ok = bool(await fast_redis.ping())
        checks["redis"] = {"ok": redis_ok, "latency_ms": round((time.time() - t0) * 1000, 1)}
    except Exception as e:
        redis_ok = False
        checks["redis"] = {"ok": False, "error": f"{type(e).__name__}: {e}"}
    overall_ok = overall_ok and redis_ok
    log_health_check("redis", redis_ok, checks["redis"].get("latency_ms", 0.0))

    # 2) Database pool
    t0 = time.time()
    try:
        db_health = await db_health_check()
        db_ok = bool(db_health.get("healthy", False))
        checks["database"] = {"ok": db_ok, "latency_ms": round((time.time() - t0) * 1000, 1)}
        if "pool_stats" in db_health:
            checks["database"]["pool_stats"] = db_health["pool_stats"]
        if not db_ok:
            checks["database"]["error"] = db_health.get("error", "Database unhealthy")
    except Exception as e:
        db_ok = False
        checks["database"] = {"ok": False, "error": f"{type(e).__name__}: {e}"}
    overall_ok = overall_ok and db_ok
    log_health_check(
        "database",
        db_ok,
        checks["database"].get("latency_ms", 0.0),
        error=checks["database"].get("error"),
    )

    return {"overall_ok": overall_ok, "checks": checks, "timestamp": time.time()}
