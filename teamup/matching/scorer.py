# Skill-based project matchmaking: scores open projects against a user's skill profile

import math
from collections.abc import Iterable, Mapping, Sequence

from teamup.constants import MAX_RECOMMENDATIONS, URGENCY_BONUS_PER_OPEN_SEAT

from .types import (
    CandidateProject,
    MatchRecommendation,
    RecommendationResult,
    SkillMatch,
)


def round_half_up(value: float) -> int:
    """
    Round to the nearest integer, halves going up.

    Python's round() uses banker's rounding, so 62.5 would display as 62.
    """
    return math.floor(value + 0.5)


def skill_contribution(proficiency: int, required_level: int) -> float:
    """
    Score one required skill the user has.

    Args:
        proficiency: User's level in the skill (1-5).
        required_level: Level the project asks for (1-5).

    Returns:
        min(proficiency, required_level) / required_level * 100. Meeting or
        exceeding the requirement gives 100; there is no credit above it.
    """
    if required_level <= 0:
        raise ValueError(f"required level must be positive (got {required_level})")
    return min(proficiency, required_level) / required_level * 100.0


def calculate_urgency_bonus(team_size: int, member_count: int) -> float:
    """Bonus of 10 points per unfilled seat. Never negative, never capped."""
    return float(max(0, (team_size - member_count) * URGENCY_BONUS_PER_OPEN_SEAT))


def calculate_skill_score(
    user_skills: Mapping[str, int], project: CandidateProject
) -> tuple[float, list[SkillMatch]]:
    """
    Mean contribution over all of a project's required skills.

    Skills the user lacks contribute 0 but still count in the denominator, and
    are left out of the matched list.

    Returns:
        Tuple of (raw_score, matched_skills). raw_score is 0 for a project
        without required skills.
    """
    if not project.required_skills:
        return 0.0, []

    total = 0.0
    matched: list[SkillMatch] = []
    for requirement in project.required_skills:
        proficiency = user_skills.get(requirement.name)
        if proficiency is None:
            continue
        contribution = skill_contribution(proficiency, requirement.level)
        total += contribution
        matched.append(
            SkillMatch(
                skill=requirement.name,
                user_proficiency=proficiency,
                required_level=requirement.level,
                match_percentage=round_half_up(contribution),
            )
        )

    return total / len(project.required_skills), matched


def score_project(user_skills: Mapping[str, int], project: CandidateProject) -> MatchRecommendation:
    """
    Score a single candidate project for a user.

    Example:
        skills {React: 4, Node.js: 2} against {React: 3, Python: 5}, team of 5
        with 3 members: (100 + 0) / 2 + (5 - 3) * 10 = 70.
    """
    raw_score, matched = calculate_skill_score(user_skills, project)
    bonus = calculate_urgency_bonus(project.team_size, project.member_count)
    score = raw_score + bonus

    return MatchRecommendation(
        project=project,
        score=score,
        match_score=round_half_up(score),
        raw_skill_score=raw_score,
        urgency_bonus=bonus,
        urgency_score=project.team_size - project.member_count,
        matched_skills=matched,
    )


def rank_recommendations(
    recommendations: Iterable[MatchRecommendation], limit: int = MAX_RECOMMENDATIONS
) -> list[MatchRecommendation]:
    """
    Order by unrounded score, highest first, and keep the top `limit`.

    sorted() is stable, so equal scores keep the candidates' retrieval order.
    """
    ranked = sorted(recommendations, key=lambda r: r.score, reverse=True)
    return ranked[:limit]


def recommend(
    user_skills: Mapping[str, int],
    candidates: Sequence[CandidateProject],
    limit: int = MAX_RECOMMENDATIONS,
) -> RecommendationResult:
    """
    Rank candidate projects for a user.

    Args:
        user_skills: Skill name to proficiency.
        candidates: Open projects the user is not a member of, in retrieval order.
        limit: Maximum recommendations returned.

    Returns:
        RecommendationResult; the no-skills result when user_skills is empty.
    """
    if not user_skills:
        return RecommendationResult.no_skills()

    scored = [score_project(user_skills, project) for project in candidates]
    return RecommendationResult(
        recommendations=rank_recommendations(scored, limit=limit),
        user_skills=dict(user_skills),
    )
