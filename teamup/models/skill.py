"""
Skill-related SQLAlchemy models.
"""

from typing import TYPE_CHECKING

from sqlalchemy import Boolean, CheckConstraint, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from teamup.constants import DEFAULT_REQUIRED_LEVEL, DEFAULT_SKILL_CATEGORY

from .base import Base

if TYPE_CHECKING:
    from .project import Project
    from .user import User


class Skill(Base):
    """A named capability such as "React". Identity is the name."""

    __tablename__ = "skills"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(100), unique=True, index=True)
    category: Mapped[str] = mapped_column(String(100), default=DEFAULT_SKILL_CATEGORY)


class UserSkill(Base):
    """A user's self-declared proficiency (1-5) in one skill."""

    __tablename__ = "user_skills"
    __table_args__ = (
        UniqueConstraint("user_id", "skill_id", name="uq_user_skills_user_skill"),
        CheckConstraint("proficiency BETWEEN 1 AND 5", name="ck_user_skills_proficiency"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), index=True)
    skill_id: Mapped[int] = mapped_column(ForeignKey("skills.id"), index=True)
    proficiency: Mapped[int] = mapped_column(Integer)

    user: Mapped["User"] = relationship("User", back_populates="skills")
    skill: Mapped["Skill"] = relationship("Skill", lazy="joined")


class ProjectSkill(Base):
    """A skill a project asks for, with the minimum level (1-5) it wants."""

    __tablename__ = "project_skills"
    __table_args__ = (
        UniqueConstraint("project_id", "skill_id", name="uq_project_skills_project_skill"),
        CheckConstraint("level BETWEEN 1 AND 5", name="ck_project_skills_level"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    project_id: Mapped[int] = mapped_column(
        ForeignKey("projects.id", ondelete="CASCADE"), index=True
    )
    skill_id: Mapped[int] = mapped_column(ForeignKey("skills.id"), index=True)
    level: Mapped[int] = mapped_column(Integer, default=DEFAULT_REQUIRED_LEVEL)
    required: Mapped[bool] = mapped_column(Boolean, default=True)

    project: Mapped["Project"] = relationship("Project", back_populates="skills")
    skill: Mapped["Skill"] = relationship("Skill", lazy="joined")
