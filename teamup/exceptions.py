"""
Exception taxonomy shared by services, the relay and the API layer.

Every error carries the HTTP status the API answers with; the exception
handlers in backend.app.error_handlers only translate, never decide.
"""


class TeamUpError(Exception):
    """Base exception for domain and service layer errors."""

    status_code = 500

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class ValidationError(TeamUpError):
    """A required identifier or field is missing or malformed."""

    status_code = 400


class NotFoundError(TeamUpError):
    """A referenced user or project does not exist."""

    status_code = 404


class ForbiddenError(TeamUpError):
    """The acting user may not perform the operation (e.g. not a project member)."""

    status_code = 403


class ConflictError(TeamUpError):
    """The operation conflicts with current state (already a member, team full, project closed)."""

    status_code = 400


class TransientStoreError(TeamUpError):
    """The data store could not be reached. Safe for the caller to retry."""

    status_code = 503


class ConnectionStateError(TeamUpError):
    """A relay connection was asked to leave the disconnected state."""

    status_code = 409


class DeliveryFailure(TeamUpError):
    """A push to a single relay subscriber failed. Never raised to broadcasters."""

    def __init__(self, connection_id: str, reason: str):
        super().__init__(f"Delivery to connection {connection_id} failed: {reason}")
        self.connection_id = connection_id
        self.reason = reason


__all__ = [
    "TeamUpError",
    "ValidationError",
    "NotFoundError",
    "ForbiddenError",
    "ConflictError",
    "TransientStoreError",
    "ConnectionStateError",
    "DeliveryFailure",
]
