"""
Application entrypoint: lifespan management, middleware, and routers.
"""

import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request

from reelhub.config import settings
from reelhub.db.pool import db_pool
from reelhub.db.schema import apply_schema
from reelhub.infrastructure.observability.logging import get_logger, log_request, setup_logging
from reelhub.middleware import RequestContextMiddleware, register_exception_handlers
from reelhub.routes import auth, chat, health, reels, users
from reelhub.services.redis_client import fast_redis

# Setup logging before creating the app
setup_logging(log_level=settings.LOG_LEVEL)
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Handle application startup and shutdown with proper resource management."""

    logger.info("Application starting", environment=settings.environment, debug=settings.debug)

    startup_tasks = []

    try:
        logger.info("Initializing database pool")
        await db_pool.initialize()
        startup_tasks.append("database_pool")

        if settings.DB_AUTO_CREATE_SCHEMA:
            await apply_schema()

        logger.info("Initializing Redis connection")
        await fast_redis.initialize()
        startup_tasks.append("redis")

        logger.info("All services initialized successfully", services=startup_tasks)

    except Exception as e:
        logger.error("Failed to initialize services", error=str(e), completed_tasks=startup_tasks)

        # Clean up any successfully initialized services in reverse order
        if "redis" in startup_tasks:
            await fast_redis.close()
        if "database_pool" in startup_tasks:
            await db_pool.close()

        raise

    yield

    # Shutdown sequence (reverse order)
    logger.info("Application shutting down")
    await fast_redis.close()
    await db_pool.close()
    logger.info("All services closed")


app = FastAPI(
    title="ReelHub",
    description="Short-form video social backend: reels, follows, and direct messages",
    version="0.1.0",
    lifespan=lifespan,
)

register_exception_handlers(app)

app.include_router(health.router)
app.include_router(auth.router)
app.include_router(users.router)
app.include_router(chat.router)
app.include_router(reels.router)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log HTTP requests with timing."""
    start_time = time.time()
    response = await call_next(request)
    process_time = (time.time() - start_time) * 1000

    log_request(
        method=request.method,
        path=request.url.path,
        status_code=response.status_code,
        duration_ms=round(process_time, 2),
        user=getattr(request.state, "user_email", None),
        ip_address=getattr(request.state, "ip_address", None),
    )
    return response


# Added last so it runs first and the request id is bound for log_requests
app.add_middleware(RequestContextMiddleware)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
