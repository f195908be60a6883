"""
Structured logging for TeamUp.

structlog renders every event; stdlib logging is only the sink. Request ids
(HTTP) and connection ids (WebSocket) travel in contextvars, so any logger
called while a request or socket is served picks them up.

Usage:
    from teamup.logging import get_logger

    logger = get_logger("projects")
    logger.info("project_created", project_id=7, owner_id=3)
"""

import logging
import os
import sys
import time
from collections.abc import Callable
from functools import lru_cache, wraps
from typing import Any, TypeVar

import structlog
from structlog.types import EventDict, Processor

F = TypeVar("F", bound=Callable[..., Any])


def _renders_for_console() -> bool:
    """Human-readable output in debug mode or a development environment, JSON elsewhere."""
    from .config import get_settings

    return get_settings().debug or os.getenv("ENV", "development") == "development"


def _tag_service(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    event_dict.setdefault("service", "teamup")
    return event_dict


def _build_processors(console: bool) -> list[Processor]:
    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        _tag_service,
    ]
    if console:
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty()))
    else:
        processors.extend(
            [
                structlog.processors.format_exc_info,
                structlog.processors.JSONRenderer(),
            ]
        )
    return processors


@lru_cache(maxsize=1)
def configure_logging(level: str = "INFO") -> None:
    """Configure structlog over stdlib logging. Repeated calls are no-ops."""
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, level.upper(), logging.INFO),
    )
    structlog.configure(
        processors=_build_processors(_renders_for_console()),
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    if not structlog.is_configured():
        configure_logging()
    return structlog.get_logger(name)  # type: ignore[no-any-return]


# =============================================================================
# Context
# =============================================================================


def bind_context(**kwargs: Any) -> None:
    """Attach fields to every event logged from the current task or thread."""
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    structlog.contextvars.clear_contextvars()


class LogContext:
    """
    Bind fields for the duration of a block, then drop exactly those fields.

    Usage:
        with LogContext(connection_id=connection.id):
            await relay.handle_client_message(connection, raw)
    """

    def __init__(self, **fields: Any):
        self.fields = fields

    def __enter__(self) -> "LogContext":
        structlog.contextvars.bind_contextvars(**self.fields)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> bool:
        structlog.contextvars.unbind_contextvars(*self.fields)
        return False


# =============================================================================
# Timing
# =============================================================================


def log_timing(operation: str) -> Callable[[F], F]:
    """
    Log `<operation>_complete` or `<operation>_failed` with the elapsed milliseconds.

    Exceptions are logged and re-raised unchanged.
    """

    def decorator(func: F) -> F:
        timing_logger = get_logger(func.__module__)

        @wraps(func)
        def wrapper(*args, **kwargs):
            start = time.perf_counter()
            try:
                result = func(*args, **kwargs)
            except Exception as exc:
                timing_logger.warning(
                    f"{operation}_failed",
                    elapsed_ms=round((time.perf_counter() - start) * 1000, 2),
                    error_type=type(exc).__name__,
                )
                raise
            timing_logger.info(
                f"{operation}_complete",
                elapsed_ms=round((time.perf_counter() - start) * 1000, 2),
            )
            return result

        return wrapper  # type: ignore[return-value]

    return decorator


# =============================================================================
# ASGI
# =============================================================================


class RequestLoggingMiddleware:
    """
    Log one `request_complete` event per HTTP request.

    WebSocket and lifespan scopes pass straight through; sockets log their
    own open/close events with a connection id.
    """

    def __init__(self, app):
        self.app = app
        self.logger = get_logger("http")

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        start = time.perf_counter()
        status_code = 500

        async def capture_status(message):
            nonlocal status_code
            if message["type"] == "http.response.start":
                status_code = message["status"]
            await send(message)

        try:
            await self.app(scope, receive, capture_status)
        finally:
            if status_code >= 500:
                emit = self.logger.error
            elif status_code >= 400:
                emit = self.logger.warning
            else:
                emit = self.logger.info
            emit(
                "request_complete",
                method=scope.get("method", ""),
                path=scope.get("path", ""),
                status_code=status_code,
                elapsed_ms=round((time.perf_counter() - start) * 1000, 2),
            )
            clear_context()


__all__ = [
    "configure_logging",
    "get_logger",
    "bind_context",
    "clear_context",
    "LogContext",
    "log_timing",
    "RequestLoggingMiddleware",
]
