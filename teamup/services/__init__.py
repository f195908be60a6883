"""
Domain services.

Services wrap repositories with validation, the error taxonomy and logging.
Each takes a SQLAlchemy session and commits its own writes.
"""

from .analytics_service import AnalyticsService, ProjectAnalytics, UserAnalytics
from .chat_service import ChatService
from .matchmaking_service import MatchmakingService
from .membership_service import MembershipService
from .profile_service import Profile, ProfileService, SkillInput
from .project_service import ProjectService, RequiredSkillInput
from .review_service import ReviewService
from .task_service import UNSET, TaskService
from .user_service import UserService

__all__ = [
    "AnalyticsService",
    "ChatService",
    "MatchmakingService",
    "MembershipService",
    "Profile",
    "ProfileService",
    "ProjectAnalytics",
    "ProjectService",
    "RequiredSkillInput",
    "ReviewService",
    "SkillInput",
    "TaskService",
    "UNSET",
    "UserAnalytics",
    "UserService",
]
