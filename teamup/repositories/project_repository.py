"""Project repository: projects, required skills and memberships."""

from sqlalchemy import func, or_, select
from sqlalchemy.orm import selectinload

from teamup.constants import (
    DEFAULT_REQUIRED_LEVEL,
    MEMBER_ROLE_MEMBER,
    PROJECT_STATUS_OPEN,
)
from teamup.models import Project, ProjectMember, ProjectSkill, Skill

from .base import BaseRepository


class ProjectRepository(BaseRepository[Project]):
    """Repository for Project operations."""

    model = Project

    def get_with_relations(self, project_id: int) -> Project | None:
        """Get a project with members and required skills loaded."""
        return (
            self.session.query(Project)
            .options(selectinload(Project.members), selectinload(Project.skills))
            .execution_options(populate_existing=True)
            .filter(Project.id == project_id)
            .first()
        )

    def list_open_excluding_member(self, user_id: int) -> list[Project]:
        """
        Open projects the user has not joined, newest first.

        The retrieval order is the tie-break order for equal match scores.
        """
        member_of = select(ProjectMember.project_id).where(ProjectMember.user_id == user_id)
        return (
            self.session.query(Project)
            .options(selectinload(Project.members), selectinload(Project.skills))
            .execution_options(populate_existing=True)
            .filter(Project.status == PROJECT_STATUS_OPEN)
            .filter(Project.id.not_in(member_of))
            .order_by(Project.created_at.desc(), Project.id.desc())
            .all()
        )

    def list_projects(
        self,
        status: str | None = None,
        search: str | None = None,
        skill: str | None = None,
        limit: int = 100,
        offset: int = 0,
    ) -> list[Project]:
        """
        List projects newest first with optional filters.

        Args:
            status: Exact lifecycle status; None or "all" disables the filter.
            search: Case-insensitive substring of title or description.
            skill: Case-insensitive skill name the project must require.
        """
        query = self.session.query(Project).options(
            selectinload(Project.members), selectinload(Project.skills)
        ).execution_options(populate_existing=True)

        if status and status != "all":
            query = query.filter(Project.status == status)

        if search:
            pattern = f"%{search.lower()}%"
            query = query.filter(
                or_(
                    func.lower(Project.title).like(pattern),
                    func.lower(Project.description).like(pattern),
                )
            )

        if skill and skill != "all":
            requiring = (
                select(ProjectSkill.project_id)
                .join(Skill, Skill.id == ProjectSkill.skill_id)
                .where(func.lower(Skill.name) == skill.lower())
            )
            query = query.filter(Project.id.in_(requiring))

        return (
            query.order_by(Project.created_at.desc(), Project.id.desc())
            .offset(offset)
            .limit(limit)
            .all()
        )

    def member_count(self, project_id: int) -> int:
        return (
            self.session.query(func.count(ProjectMember.id))
            .filter(ProjectMember.project_id == project_id)
            .scalar()
            or 0
        )

    def is_member(self, project_id: int, user_id: int) -> bool:
        """Check membership with an exists query."""
        result = self.session.query(
            self.session.query(ProjectMember)
            .filter(ProjectMember.project_id == project_id, ProjectMember.user_id == user_id)
            .exists()
        ).scalar()
        return bool(result)

    def add_member(self, project_id: int, user_id: int, role: str = MEMBER_ROLE_MEMBER) -> ProjectMember:
        member = ProjectMember(project_id=project_id, user_id=user_id, role=role)
        self.session.add(member)
        self.session.flush()
        return member

    def list_members(self, project_id: int) -> list[ProjectMember]:
        return (
            self.session.query(ProjectMember)
            .options(selectinload(ProjectMember.user))
            .filter(ProjectMember.project_id == project_id)
            .order_by(ProjectMember.joined_at, ProjectMember.id)
            .all()
        )

    def add_required_skill(
        self,
        project_id: int,
        skill_id: int,
        level: int = DEFAULT_REQUIRED_LEVEL,
        required: bool = True,
    ) -> ProjectSkill:
        requirement = ProjectSkill(
            project_id=project_id, skill_id=skill_id, level=level, required=required
        )
        self.session.add(requirement)
        self.session.flush()
        return requirement

    def set_status(self, project: Project, status: str) -> Project:
        project.status = status
        self.session.flush()
        return project

    def member_role(self, project_id: int, user_id: int) -> str | None:
        """The user's role in the project, or None when not a member."""
        return (
            self.session.query(ProjectMember.role)
            .filter(ProjectMember.project_id == project_id, ProjectMember.user_id == user_id)
            .scalar()
        )

    def list_memberships_for_user(self, user_id: int) -> list[ProjectMember]:
        """A user's memberships with their projects loaded."""
        return (
            self.session.query(ProjectMember)
            .options(selectinload(ProjectMember.project))
            .filter(ProjectMember.user_id == user_id)
            .order_by(ProjectMember.joined_at, ProjectMember.id)
            .all()
        )
