"""
FastAPI application entry point.

Uses structured logging from teamup.logging. The realtime relay is created
at startup and shared by the chat router and the WebSocket endpoint through
app.state.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Callable

from fastapi import FastAPI, Request, Response, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from teamup.config import get_settings
from teamup.db import db
from teamup.logging import RequestLoggingMiddleware, configure_logging, get_logger
from teamup.relay import BroadcastRelay, RedisRelayBridge

from .error_handlers import register_exception_handlers
from .middleware.request_id import RequestIDMiddleware
from .routers import analytics as analytics_router
from .routers import chat as chat_router
from .routers import matchmaking as matchmaking_router
from .routers import profile as profile_router
from .routers import projects as projects_router
from .routers import realtime as realtime_router
from .routers import reviews as reviews_router
from .routers import tasks as tasks_router
from .routers import users as users_router


class RequestSizeLimitMiddleware(BaseHTTPMiddleware):
    """Middleware to limit request body size."""

    def __init__(self, app, max_size_mb: int = 10):
        super().__init__(app)
        self.max_size = max_size_mb * 1024 * 1024
        self.max_size_mb = max_size_mb

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        content_length = request.headers.get("content-length")
        if content_length and content_length.isdigit() and int(content_length) > self.max_size:
            return JSONResponse(
                status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
                content={
                    "detail": f"Maximum request size is {self.max_size_mb}MB",
                    "status_code": status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
                },
            )
        return await call_next(request)


settings = get_settings()
configure_logging(level="DEBUG" if settings.debug else "INFO")
logger = get_logger("api")


async def _start_bridge(relay: BroadcastRelay) -> RedisRelayBridge | None:
    """Connect the relay to Redis pub/sub; stay local-only when Redis is down."""
    bridge = RedisRelayBridge.from_settings(relay, settings)
    if await bridge.start():
        relay.attach_bridge(bridge)
        logger.info("relay_bridge_attached", redis_host=settings.redis_host)
        return bridge
    logger.warning("relay_local_only", reason="redis_unavailable")
    return None


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    logger.info("app_startup", app_name=settings.app_name)

    db.initialize(settings.database_url)
    if settings.auto_create_tables:
        db.create_all_tables()
    logger.info("database_initialized", sqlite=settings.is_sqlite)

    relay = BroadcastRelay.from_settings(settings)
    app.state.relay = relay
    bridge = await _start_bridge(relay) if settings.relay_redis_enabled else None

    yield

    logger.info("app_shutdown", open_connections=relay.connection_count)
    if bridge is not None:
        await bridge.stop()
    db.dispose()


def create_app() -> FastAPI:
    api_prefix = f"{settings.api_prefix}/v1"

    app = FastAPI(title=settings.app_name, debug=settings.debug, lifespan=lifespan)

    app.add_middleware(RequestSizeLimitMiddleware, max_size_mb=settings.max_request_size_mb)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "OPTIONS"],
        allow_headers=["Content-Type", "Accept", "Accept-Encoding", "Origin", "X-Requested-With"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestIDMiddleware)
    app.add_middleware(RequestLoggingMiddleware)

    register_exception_handlers(app)

    @app.get("/health", tags=["health"])
    def health_check():
        """Liveness check."""
        return {"status": "ok"}

    @app.get("/health/ready", tags=["health"])
    def readiness_check():
        """
        Readiness check. 503 until the database answers.

        Redis is optional: the relay falls back to local delivery without it.
        """
        database = db.health_check()
        relay = getattr(app.state, "relay", None)
        checks = {
            "database": database["healthy"],
            "relay_bridge": bool(relay and relay.bridge and relay.bridge.is_available),
        }
        if not checks["database"]:
            return JSONResponse(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                content={"status": "not_ready", "checks": checks},
            )
        return {"status": "ready", "checks": checks}

    app.include_router(matchmaking_router.router, prefix=api_prefix)
    app.include_router(users_router.router, prefix=api_prefix)
    app.include_router(profile_router.router, prefix=api_prefix)
    app.include_router(projects_router.router, prefix=api_prefix)
    app.include_router(tasks_router.router, prefix=api_prefix)
    app.include_router(reviews_router.router, prefix=api_prefix)
    app.include_router(analytics_router.router, prefix=api_prefix)
    app.include_router(chat_router.router, prefix=api_prefix)
    app.include_router(realtime_router.router)

    return app


app = create_app()
