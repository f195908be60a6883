"""
TeamUp Core Library.

This package provides the domain functionality for TeamUp, including
database management, models, repositories, skill matchmaking, the realtime
chat relay, services (including the task board, peer reviews and analytics)
and logging.

Usage:
    # Database
    from teamup.db import db, get_db
    from teamup.models import User, Project, Skill
    from teamup.repositories import ProjectRepository, SkillRepository

    # Matchmaking
    from teamup.matching import recommend, score_project

    # Realtime relay
    from teamup.relay import BroadcastRelay

    # Config
    from teamup.config import get_settings, Settings

    # Logging
    from teamup.logging import get_logger, configure_logging
"""

__version__ = "1.0.0"

# Users should import directly from submodules:
#   from teamup.db import db
#   from teamup.config import get_settings
#   from teamup.logging import get_logger
