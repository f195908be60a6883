"""
Matchmaking service: reads a user's skills and the open projects, then ranks
them with the pure scorer in teamup.matching.
"""

from sqlalchemy.orm import Session

from teamup.constants import MAX_RECOMMENDATIONS
from teamup.exceptions import NotFoundError
from teamup.logging import get_logger, log_timing
from teamup.matching import CandidateProject, RecommendationResult, recommend
from teamup.repositories import ProjectRepository, SkillRepository, UserRepository

from ._store import require_id, store_access

logger = get_logger("matching")


class MatchmakingService:
    """
    Project recommendations for one user.

    Read-only: never changes membership or stores scores.

    Usage:
        with db.session() as session:
            result = MatchmakingService(session).recommend(user_id)
    """

    def __init__(self, session: Session):
        self.session = session
        self.user_repo = UserRepository(session)
        self.skill_repo = SkillRepository(session)
        self.project_repo = ProjectRepository(session)

    @log_timing("matchmaking")
    def recommend(self, user_id, limit: int = MAX_RECOMMENDATIONS) -> RecommendationResult:
        """
        Rank open projects the user has not joined.

        Raises:
            ValidationError: user_id missing.
            NotFoundError: No such user.
            TransientStoreError: The data store failed.
        """
        user_id = require_id(user_id, "User ID")

        with store_access("matchmaking"):
            if not self.user_repo.exists(user_id):
                raise NotFoundError("User not found")

            user_skills = self.skill_repo.get_user_skills(user_id)
            if not user_skills:
                logger.info("matchmaking_no_skills", user_id=user_id)
                return RecommendationResult.no_skills()

            projects = self.project_repo.list_open_excluding_member(user_id)
            candidates = [CandidateProject.from_model(project) for project in projects]

        result = recommend(user_skills, candidates, limit=limit)
        logger.info(
            "matchmaking_complete",
            user_id=user_id,
            skills=len(user_skills),
            candidates=len(candidates),
            returned=len(result.recommendations),
        )
        return result
