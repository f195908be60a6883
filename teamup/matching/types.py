"""
Matchmaking data structures.

Recommendations are derived values: built fresh for every request, never stored.
"""

from dataclasses import dataclass, field
from typing import Optional

from teamup.constants import NO_SKILLS_REASON


@dataclass(frozen=True)
class RequiredSkill:
    """A skill a project asks for, with its minimum level (1-5)."""

    name: str
    level: int
    required: bool = True


@dataclass(frozen=True)
class CandidateProject:
    """An open project as the scorer sees it."""

    project_id: int
    title: str
    team_size: int
    member_count: int
    required_skills: tuple[RequiredSkill, ...] = ()
    description: str = ""
    status: str = "open"

    @classmethod
    def from_model(cls, project) -> "CandidateProject":
        """Build a candidate from a Project ORM row with members and skills loaded."""
        return cls(
            project_id=project.id,
            title=project.title,
            team_size=project.team_size,
            member_count=len(project.members),
            required_skills=tuple(
                RequiredSkill(name=ps.skill.name, level=ps.level, required=ps.required)
                for ps in project.skills
            ),
            description=project.description or "",
            status=project.status,
        )


@dataclass(frozen=True)
class SkillMatch:
    """A required skill the user has, with its rounded contribution."""

    skill: str
    user_proficiency: int
    required_level: int
    match_percentage: int

    def to_dict(self) -> dict:
        return {
            "skill": self.skill,
            "user_proficiency": self.user_proficiency,
            "required_level": self.required_level,
            "match_percentage": self.match_percentage,
        }


@dataclass
class MatchRecommendation:
    """
    Score of one (user, project) pair.

    Attributes:
        score: Unrounded final score. Ranking uses this value.
        match_score: Final score rounded half-up for display.
        raw_skill_score: Mean skill contribution over all required skills (0-100).
        urgency_bonus: Additive bonus for unfilled seats, never negative.
        urgency_score: Open seats (team_size - member_count); negative when over capacity.
        matched_skills: Required skills the user has. Missing skills are not listed.
    """

    project: CandidateProject
    score: float
    match_score: int
    raw_skill_score: float
    urgency_bonus: float
    urgency_score: int
    matched_skills: list[SkillMatch] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "project_id": self.project.project_id,
            "title": self.project.title,
            "description": self.project.description,
            "status": self.project.status,
            "team_size": self.project.team_size,
            "member_count": self.project.member_count,
            "required_skills": [
                {"skill": rs.name, "level": rs.level, "required": rs.required}
                for rs in self.project.required_skills
            ],
            "match_score": self.match_score,
            "matched_skills": [m.to_dict() for m in self.matched_skills],
            "urgency_score": self.urgency_score,
        }


@dataclass
class RecommendationResult:
    """
    Outcome of a recommendation request.

    A user without skills gets `reason` set and no recommendations; a user with
    skills but no candidates gets an empty list and `reason` None.
    """

    recommendations: list[MatchRecommendation] = field(default_factory=list)
    user_skills: dict[str, int] = field(default_factory=dict)
    reason: Optional[str] = None

    @property
    def has_skills(self) -> bool:
        return bool(self.user_skills)

    @classmethod
    def no_skills(cls) -> "RecommendationResult":
        return cls(recommendations=[], user_skills={}, reason=NO_SKILLS_REASON)
