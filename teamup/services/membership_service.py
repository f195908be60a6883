"""
Membership service: the join-project workflow.
"""

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from teamup.constants import MEMBER_ROLE_MEMBER, PROJECT_STATUS_IN_PROGRESS, PROJECT_STATUS_OPEN
from teamup.exceptions import ConflictError, NotFoundError
from teamup.logging import get_logger
from teamup.models import ProjectMember
from teamup.repositories import ProjectRepository, UserRepository

from ._store import require_id, store_access

logger = get_logger("membership")


class MembershipService:
    """Adds users to projects while enforcing status and capacity."""

    def __init__(self, session: Session):
        self.session = session
        self.project_repo = ProjectRepository(session)
        self.user_repo = UserRepository(session)

    def join_project(self, project_id, user_id) -> ProjectMember:
        """
        Join an open project as a member.

        The project moves to in_progress when this join fills the team.

        Raises:
            ValidationError: An identifier is missing.
            NotFoundError: Project or user does not exist.
            ConflictError: Project not open, already a member, or team full.
        """
        project_id = require_id(project_id, "Project ID")
        user_id = require_id(user_id, "User ID")

        with store_access("join_project"):
            project = self.project_repo.get_by_id(project_id)
            if project is None:
                raise NotFoundError("Project not found")
            if not self.user_repo.exists(user_id):
                raise NotFoundError("User not found")

            if project.status != PROJECT_STATUS_OPEN:
                raise ConflictError("Project is not accepting new members")
            if self.project_repo.is_member(project_id, user_id):
                raise ConflictError("User is already a member of this project")

            current = self.project_repo.member_count(project_id)
            if current >= project.team_size:
                raise ConflictError("Project has reached its team size limit")

            try:
                member = self.project_repo.add_member(project_id, user_id, role=MEMBER_ROLE_MEMBER)
            except IntegrityError as exc:
                self.session.rollback()
                raise ConflictError("User is already a member of this project") from exc

            if current + 1 >= project.team_size:
                self.project_repo.set_status(project, PROJECT_STATUS_IN_PROGRESS)
                logger.info("project_team_full", project_id=project_id, team_size=project.team_size)

            self.session.commit()

        logger.info("project_joined", project_id=project_id, user_id=user_id)
        return member
