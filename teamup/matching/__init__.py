"""
Skill-based project matchmaking.

Pure computation: callers fetch the user's skills and candidate projects,
the scorer ranks them.

Usage:
    from teamup.matching import CandidateProject, recommend

    result = recommend({"React": 4}, candidates)
    if not result.has_skills:
        print(result.reason)
"""

from .scorer import (
    calculate_skill_score,
    calculate_urgency_bonus,
    rank_recommendations,
    recommend,
    round_half_up,
    score_project,
    skill_contribution,
)
from .types import (
    CandidateProject,
    MatchRecommendation,
    RecommendationResult,
    RequiredSkill,
    SkillMatch,
)

__all__ = [
    "CandidateProject",
    "MatchRecommendation",
    "RecommendationResult",
    "RequiredSkill",
    "SkillMatch",
    "calculate_skill_score",
    "calculate_urgency_bonus",
    "rank_recommendations",
    "recommend",
    "round_half_up",
    "score_project",
    "skill_contribution",
]
