"""
FastAPI application entry point.
Mounts routes, correlation-id middleware, error handlers and Prometheus metrics.
"""

import logging
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from prometheus_client import make_asgi_app

from catalog.api.error_handlers import register_error_handlers
from catalog.api.v1.router import api_router
from catalog.cache.redis_client import close_redis
from catalog.config import get_settings
from catalog.core.logging import setup_logging

CORRELATION_ID_HEADER = "X-Correlation-Id"

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup: configure logging. Shutdown: release the Redis pool."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    yield
    await close_redis()


def create_app() -> FastAPI:
    settings = get_settings()
    app = FastAPI(
        title=settings.app_name,
        description="Product catalog: validated product creation with derived profile fields.",
        version="1.0.0",
        lifespan=lifespan,
    )

    # CORS for frontend/API consumers
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def correlation_id(request: Request, call_next):
        """Echo or mint X-Correlation-Id; handlers read it from request.state."""
        cid = request.headers.get(CORRELATION_ID_HEADER) or str(uuid.uuid4())
        request.state.correlation_id = cid
        logger.info("Request started with Correlation ID: %s", cid, extra={"correlation_id": cid})
        response = await call_next(request)
        response.headers[CORRELATION_ID_HEADER] = cid
        logger.info(
            "Request completed with Correlation ID: %s",
            cid,
            extra={"correlation_id": cid, "status_code": response.status_code},
        )
        return response

    register_error_handlers(app)

    # Prometheus metrics at /metrics
    metrics_app = make_asgi_app()
    app.mount("/metrics", metrics_app)

    app.include_router(api_router, prefix="/api")

    return app


app = create_app()
