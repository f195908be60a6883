"""Skill repository: the skill catalogue and per-user skill profiles."""

from collections.abc import Iterable

from sqlalchemy.orm import joinedload

from teamup.constants import DEFAULT_SKILL_CATEGORY
from teamup.logging import get_logger
from teamup.models import Skill, UserSkill

from .base import BaseRepository

logger = get_logger("repository.skill")


class SkillRepository(BaseRepository[Skill]):
    """Repository for Skill and UserSkill operations."""

    model = Skill

    def get_by_name(self, name: str) -> Skill | None:
        """Get a skill by its unique name."""
        return self.session.query(Skill).filter(Skill.name == name).first()

    def upsert(self, name: str, category: str | None = None) -> Skill:
        """
        Get or create a skill by name.

        An existing skill keeps its category unless a different one is given
        explicitly.
        """
        skill = self.get_by_name(name)
        if skill is None:
            skill = Skill(name=name, category=category or DEFAULT_SKILL_CATEGORY)
            self.session.add(skill)
            self.session.flush()
        elif category and category != skill.category:
            logger.info("skill_category_reassigned", skill=name, old=skill.category, new=category)
            skill.category = category
            self.session.flush()
        return skill

    def get_user_skills(self, user_id: int) -> dict[str, int]:
        """
        Get a user's skill profile.

        Returns:
            Mapping of skill name to proficiency. Empty when the user declared none.
        """
        rows = (
            self.session.query(Skill.name, UserSkill.proficiency)
            .join(UserSkill, UserSkill.skill_id == Skill.id)
            .filter(UserSkill.user_id == user_id)
            .order_by(UserSkill.id)
            .all()
        )
        return {name: proficiency for name, proficiency in rows}

    def list_user_skill_rows(self, user_id: int) -> list[UserSkill]:
        """UserSkill rows for a user, with their Skill eagerly loaded."""
        return (
            self.session.query(UserSkill)
            .options(joinedload(UserSkill.skill))
            .filter(UserSkill.user_id == user_id)
            .order_by(UserSkill.id)
            .all()
        )

    def replace_user_skills(
        self,
        user_id: int,
        entries: Iterable[tuple[str, str | None, int]],
    ) -> list[UserSkill]:
        """
        Replace a user's skill profile wholesale (delete all, then insert).

        Args:
            user_id: Owner of the profile.
            entries: (name, category, proficiency) triples. A repeated name keeps
                the last proficiency given.
        """
        self.session.query(UserSkill).filter(UserSkill.user_id == user_id).delete(
            synchronize_session="fetch"
        )
        self.session.flush()

        by_skill: dict[int, UserSkill] = {}
        for name, category, proficiency in entries:
            skill = self.upsert(name, category)
            row = by_skill.get(skill.id)
            if row is None:
                row = UserSkill(user_id=user_id, skill_id=skill.id, proficiency=proficiency)
                self.session.add(row)
                by_skill[skill.id] = row
            else:
                row.proficiency = proficiency

        self.session.flush()
        return list(by_skill.values())
