"""
Project service: creation with required skills, lookup and listing.
"""

from collections.abc import Sequence
from typing import NamedTuple

from sqlalchemy.orm import Session

from teamup.constants import (
    DEFAULT_REQUIRED_LEVEL,
    MEMBER_ROLE_OWNER,
    PROFICIENCY_MAX,
    PROFICIENCY_MIN,
    PROJECT_STATUS_OPEN,
    PROJECT_STATUSES,
)
from teamup.exceptions import NotFoundError, ValidationError
from teamup.logging import get_logger
from teamup.models import Project, ProjectMember
from teamup.repositories import ProjectRepository, SkillRepository, UserRepository

from ._store import require_id, store_access

logger = get_logger("projects")


class RequiredSkillInput(NamedTuple):
    name: str
    level: int = DEFAULT_REQUIRED_LEVEL
    category: str | None = None


class ProjectService:
    """Create and read projects."""

    def __init__(self, session: Session):
        self.session = session
        self.project_repo = ProjectRepository(session)
        self.skill_repo = SkillRepository(session)
        self.user_repo = UserRepository(session)

    def create_project(
        self,
        title: str,
        description: str,
        team_size: int,
        owner_id,
        required_skills: Sequence[RequiredSkillInput] = (),
    ) -> Project:
        """
        Create an open project owned by owner_id.

        The owner becomes the first member. Required skills are upserted into
        the skill catalogue; a repeated skill name keeps its last level.
        """
        owner_id = require_id(owner_id, "User ID")
        if not title or not title.strip():
            raise ValidationError("Title is required")
        if not description or not description.strip():
            raise ValidationError("Description is required")
        if team_size is None or team_size < 1:
            raise ValidationError("Team size must be at least 1")

        levels: dict[str, RequiredSkillInput] = {}
        for entry in required_skills:
            name = (entry.name or "").strip()
            if not name:
                raise ValidationError("Skill name is required")
            if not PROFICIENCY_MIN <= entry.level <= PROFICIENCY_MAX:
                raise ValidationError(
                    f"Required level for {name} must be between {PROFICIENCY_MIN} and {PROFICIENCY_MAX}"
                )
            levels[name] = entry._replace(name=name)

        with store_access("create_project"):
            if not self.user_repo.exists(owner_id):
                raise NotFoundError("User not found")

            project = self.project_repo.create(
                title=title.strip(),
                description=description.strip(),
                team_size=team_size,
                status=PROJECT_STATUS_OPEN,
            )
            self.project_repo.add_member(project.id, owner_id, role=MEMBER_ROLE_OWNER)

            for entry in levels.values():
                skill = self.skill_repo.upsert(entry.name, entry.category)
                self.project_repo.add_required_skill(project.id, skill.id, level=entry.level)

            self.session.commit()
            created = self.project_repo.get_with_relations(project.id)

        logger.info(
            "project_created",
            project_id=project.id,
            owner_id=owner_id,
            team_size=team_size,
            required_skills=len(levels),
        )
        return created

    def get_project(self, project_id) -> Project:
        project_id = require_id(project_id, "Project ID")
        with store_access("get_project"):
            project = self.project_repo.get_with_relations(project_id)
        if project is None:
            raise NotFoundError("Project not found")
        return project

    def list_projects(
        self,
        status: str | None = None,
        search: str | None = None,
        skill: str | None = None,
        limit: int = 100,
        offset: int = 0,
    ) -> list[Project]:
        if status and status != "all" and status not in PROJECT_STATUSES:
            raise ValidationError(f"Unknown project status: {status}")
        with store_access("list_projects"):
            return self.project_repo.list_projects(
                status=status, search=search, skill=skill, limit=limit, offset=offset
            )

    def list_members(self, project_id) -> list[ProjectMember]:
        project_id = require_id(project_id, "Project ID")
        with store_access("list_members"):
            if not self.project_repo.exists(project_id):
                raise NotFoundError("Project not found")
            return self.project_repo.list_members(project_id)
