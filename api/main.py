"""
Orders Service - FastAPI side-car.

The service answers commands over Redis Streams; this app owns the process
lifecycle (connect, serve, shut down) and exposes health endpoints.
"""
from contextlib import asynccontextmanager
import logging
import time

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from api import dependencies
from api.routes import health
from core.infrastructure.logging import configure_logging
from core.settings import get_app_settings


logger = logging.getLogger(__name__)


# =============================================================================
# LIFESPAN
# =============================================================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Start the command server on startup, stop it on shutdown."""
    settings = get_app_settings()
    configure_logging(settings.log_level)

    logger.info("🚀 Orders service starting up...")
    await dependencies.startup()
    logger.info(f"📨 Serving commands on stream: {settings.transport.command_stream}")

    try:
        yield
    finally:
        logger.info("👋 Orders service shutting down...")
        await dependencies.shutdown()


# =============================================================================
# CREATE FASTAPI APP
# =============================================================================

app = FastAPI(
    title="Orders Service",
    description="""
    Order management over Redis Streams request/reply.

    Commands:
    - create_order
    - find_all_orders
    - find_one_order
    - change_order_status
    """,
    version="1.0.0",
    lifespan=lifespan,
)


# =============================================================================
# REQUEST LOGGING MIDDLEWARE
# =============================================================================

@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log all requests with timing."""
    start_time = time.time()

    logger.info(f"→ {request.method} {request.url.path}")

    response = await call_next(request)

    duration = time.time() - start_time
    logger.info(
        f"← {request.method} {request.url.path} "
        f"[{response.status_code}] ({duration:.3f}s)"
    )

    return response


# =============================================================================
# GLOBAL EXCEPTION HANDLER
# =============================================================================

@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Handle all uncaught exceptions."""
    logger.error(f"Unhandled exception: {exc}", exc_info=True)

    return JSONResponse(
        status_code=500,
        content={
            "error": "Internal server error",
            "path": request.url.path,
        },
    )


# =============================================================================
# INCLUDE ROUTERS
# =============================================================================

app.include_router(
    health.router,
    tags=["Health"],
)


# =============================================================================
# ROOT ENDPOINT
# =============================================================================

@app.get("/", tags=["Root"])
async def root():
    """Service info."""
    return {
        "service": get_app_settings().service.service_name,
        "version": "1.0.0",
        "command_stream": get_app_settings().transport.command_stream,
        "health": "/health",
    }
