"""
Profile service: user details and the skill profile.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from typing import NamedTuple

from sqlalchemy.orm import Session

from teamup.constants import PROFICIENCY_MAX, PROFICIENCY_MIN
from teamup.exceptions import NotFoundError, ValidationError
from teamup.logging import get_logger
from teamup.models import ProjectMember, User, UserSkill
from teamup.repositories import ProjectRepository, SkillRepository, UserRepository

from ._store import require_id, store_access

logger = get_logger("profile")


class SkillInput(NamedTuple):
    name: str
    proficiency: int
    category: str | None = None


@dataclass
class Profile:
    """A user with their skill rows and project memberships."""

    user: User
    skills: list[UserSkill]
    memberships: list[ProjectMember]


class ProfileService:
    """Read and edit user profiles."""

    def __init__(self, session: Session):
        self.session = session
        self.user_repo = UserRepository(session)
        self.skill_repo = SkillRepository(session)
        self.project_repo = ProjectRepository(session)

    def get_profile(self, user_id) -> Profile:
        user_id = require_id(user_id, "User ID")
        with store_access("get_profile"):
            user = self.user_repo.get_by_id(user_id)
            if user is None:
                raise NotFoundError("User not found")
            return Profile(
                user=user,
                skills=self.skill_repo.list_user_skill_rows(user_id),
                memberships=list(user.memberships),
            )

    def update_profile(
        self,
        user_id,
        name: str | None = None,
        bio: str | None = None,
        avatar_url: str | None = None,
        skills: Sequence[SkillInput] | None = None,
    ) -> Profile:
        """
        Update user details; when skills is given, replace the whole skill profile.

        Passing skills=[] clears the profile. Passing None leaves it untouched.
        """
        user_id = require_id(user_id, "User ID")

        entries: list[tuple[str, str | None, int]] | None = None
        if skills is not None:
            entries = []
            for skill in skills:
                skill_name = (skill.name or "").strip()
                if not skill_name:
                    raise ValidationError("Skill name is required")
                if not PROFICIENCY_MIN <= skill.proficiency <= PROFICIENCY_MAX:
                    raise ValidationError(
                        f"Proficiency for {skill_name} must be between {PROFICIENCY_MIN} and {PROFICIENCY_MAX}"
                    )
                entries.append((skill_name, skill.category, skill.proficiency))

        with store_access("update_profile"):
            user = self.user_repo.get_by_id(user_id)
            if user is None:
                raise NotFoundError("User not found")

            self.user_repo.update_details(user, name=name, bio=bio, avatar_url=avatar_url)
            if entries is not None:
                self.skill_repo.replace_user_skills(user_id, entries)

            self.session.commit()

        logger.info(
            "profile_updated",
            user_id=user_id,
            skills_replaced=entries is not None,
            skill_count=len(entries) if entries is not None else None,
        )
        return self.get_profile(user_id)
