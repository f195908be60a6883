"""
Repository pattern implementations for data access.

Repositories provide a clean abstraction over database operations.

Usage:
    from teamup.repositories import ProjectRepository
    from teamup.db import db

    with db.session() as session:
        repo = ProjectRepository(session)
        candidates = repo.list_open_excluding_member(user_id)
"""

from .base import BaseRepository
from .chat_repository import ChatMessageRepository
from .project_repository import ProjectRepository
from .review_repository import ReviewRepository
from .skill_repository import SkillRepository
from .task_repository import TaskRepository
from .user_repository import UserRepository

__all__ = [
    "BaseRepository",
    "ChatMessageRepository",
    "ProjectRepository",
    "ReviewRepository",
    "SkillRepository",
    "TaskRepository",
    "UserRepository",
]
