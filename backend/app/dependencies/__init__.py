"""
FastAPI dependency injection module.

Provides centralized dependencies for:
- Database sessions
- Domain services
- The realtime relay
"""

from collections.abc import Callable
from contextlib import AbstractContextManager

from fastapi import Depends
from fastapi.requests import HTTPConnection
from sqlalchemy.orm import Session

from teamup.db import db, get_db
from teamup.relay import BroadcastRelay
from teamup.services import (
    AnalyticsService,
    ChatService,
    MatchmakingService,
    MembershipService,
    ProfileService,
    ProjectService,
    ReviewService,
    TaskService,
    UserService,
)

SessionScope = Callable[[], AbstractContextManager[Session]]

# =============================================================================
# Infrastructure Dependencies
# =============================================================================


def get_relay(connection: HTTPConnection) -> BroadcastRelay:
    """The process-wide relay created at startup. Works for HTTP and WebSocket routes."""
    return connection.app.state.relay


def get_session_scope() -> SessionScope:
    """
    Session factory for code that outlives a single dependency scope.

    A WebSocket stays open for many messages, so each message opens its own
    session instead of holding one for the lifetime of the socket.
    """
    return db.session


# =============================================================================
# Service Dependencies
# =============================================================================


def get_matchmaking_service(session: Session = Depends(get_db)) -> MatchmakingService:
    return MatchmakingService(session)


def get_membership_service(session: Session = Depends(get_db)) -> MembershipService:
    return MembershipService(session)


def get_project_service(session: Session = Depends(get_db)) -> ProjectService:
    return ProjectService(session)


def get_profile_service(session: Session = Depends(get_db)) -> ProfileService:
    return ProfileService(session)


def get_chat_service(session: Session = Depends(get_db)) -> ChatService:
    return ChatService(session)


def get_user_service(session: Session = Depends(get_db)) -> UserService:
    return UserService(session)


def get_task_service(session: Session = Depends(get_db)) -> TaskService:
    return TaskService(session)


def get_review_service(session: Session = Depends(get_db)) -> ReviewService:
    return ReviewService(session)


def get_analytics_service(session: Session = Depends(get_db)) -> AnalyticsService:
    return AnalyticsService(session)


__all__ = [
    "get_db",
    "get_relay",
    "get_session_scope",
    "SessionScope",
    "get_matchmaking_service",
    "get_membership_service",
    "get_project_service",
    "get_profile_service",
    "get_chat_service",
    "get_user_service",
    "get_task_service",
    "get_review_service",
    "get_analytics_service",
]
