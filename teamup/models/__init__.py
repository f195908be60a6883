"""
Unified SQLAlchemy models for TeamUp.

Single source of truth for all database models. Used by services and the API.

Usage:
    from teamup.models import User, Project, Skill
"""

from .base import Base
from .chat import ChatMessage
from .project import Project, ProjectMember
from .review import PeerReview
from .skill import ProjectSkill, Skill, UserSkill
from .task import Task
from .user import User

__all__ = [
    # Base
    "Base",
    # User
    "User",
    # Skills
    "Skill",
    "UserSkill",
    "ProjectSkill",
    # Projects
    "Project",
    "ProjectMember",
    # Tasks and reviews
    "Task",
    "PeerReview",
    # Chat
    "ChatMessage",
]
