"""Translation of data-store failures into the service error taxonomy."""

from collections.abc import Generator
from contextlib import contextmanager

from sqlalchemy.exc import SQLAlchemyError

from teamup.exceptions import TransientStoreError, ValidationError
from teamup.logging import get_logger

logger = get_logger("services.store")


@contextmanager
def store_access(operation: str) -> Generator[None, None, None]:
    """
    Raise TransientStoreError for any SQLAlchemy failure inside the block.

    Domain errors raised inside pass through untouched. No retry happens here;
    the caller decides.
    """
    try:
        yield
    except SQLAlchemyError as exc:
        logger.error(
            "store_access_failed",
            operation=operation,
            error=str(exc),
            error_type=type(exc).__name__,
        )
        raise TransientStoreError(f"Data store unavailable during {operation}") from exc


def require_id(value, label: str) -> int:
    """Reject a missing identifier with a ValidationError."""
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ValidationError(f"{label} is required")
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise ValidationError(f"{label} must be an integer") from exc
