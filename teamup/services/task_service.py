"""
Task service: the project kanban board.

Any project member may create tasks and move them between columns. Moving a
task to done is reserved for the project owner.
"""

from datetime import datetime

from sqlalchemy.orm import Session

from teamup.constants import (
    MEMBER_ROLE_OWNER,
    TASK_PRIORITIES,
    TASK_PRIORITY_MEDIUM,
    TASK_STATUS_DONE,
    TASK_STATUS_TODO,
    TASK_STATUSES,
)
from teamup.exceptions import ForbiddenError, NotFoundError, ValidationError
from teamup.logging import get_logger
from teamup.models import Task
from teamup.repositories import ProjectRepository, TaskRepository

from ._store import require_id, store_access

logger = get_logger("tasks")

# Marks an update argument the caller did not pass, so None can mean "unassign"
UNSET = object()


class TaskService:
    def __init__(self, session: Session):
        self.session = session
        self.task_repo = TaskRepository(session)
        self.project_repo = ProjectRepository(session)

    def list_board(self, project_id) -> dict[str, list[Task]]:
        """
        A project's tasks grouped by status.

        Every status is present, in column order, even when empty. Within a
        column tasks are ordered by priority, then newest first.
        """
        project_id = require_id(project_id, "Project ID")
        with store_access("list_tasks"):
            if not self.project_repo.exists(project_id):
                raise NotFoundError("Project not found")
            tasks = self.task_repo.list_for_project(project_id)

        board: dict[str, list[Task]] = {status: [] for status in TASK_STATUSES}
        for task in tasks:
            board[task.status].append(task)
        return board

    def create_task(
        self,
        project_id,
        creator_id,
        title: str | None,
        description: str | None = None,
        priority: str | None = None,
        assignee_id=None,
        due_date: datetime | None = None,
    ) -> Task:
        """
        Add a todo card to a project's board.

        Raises:
            ValidationError: Missing title or identifiers, unknown priority, or
                an assignee outside the project.
            NotFoundError: No such project.
            ForbiddenError: The creator is not a project member.
        """
        if not title or not title.strip():
            raise ValidationError("Title, project ID, and creator ID are required")
        project_id = require_id(project_id, "Project ID")
        creator_id = require_id(creator_id, "Creator ID")
        priority = priority or TASK_PRIORITY_MEDIUM
        if priority not in TASK_PRIORITIES:
            raise ValidationError(f"Unknown task priority: {priority}")
        if assignee_id is not None:
            assignee_id = require_id(assignee_id, "Assignee ID")

        with store_access("create_task"):
            if not self.project_repo.exists(project_id):
                raise NotFoundError("Project not found")
            if not self.project_repo.is_member(project_id, creator_id):
                raise ForbiddenError("User is not a member of this project")
            self._check_assignee(project_id, assignee_id)

            task = self.task_repo.create(
                project_id=project_id,
                title=title.strip(),
                description=description,
                status=TASK_STATUS_TODO,
                priority=priority,
                assignee_id=assignee_id,
                creator_id=creator_id,
                due_date=due_date,
            )
            self.session.commit()
            self.session.refresh(task)

        logger.info("task_created", task_id=task.id, project_id=project_id, creator_id=creator_id)
        return task

    def update_task(self, task_id, user_id, status=UNSET, assignee_id=UNSET) -> Task:
        """
        Move a task between columns and/or change its assignee.

        Pass assignee_id=None to unassign. Arguments left at UNSET are not
        touched.

        Raises:
            ValidationError: Missing identifiers, unknown status, or an
                assignee outside the project.
            NotFoundError: No such task.
            ForbiddenError: The user is not a project member, or is not the
                owner and tries to mark the task done.
        """
        task_id = require_id(task_id, "Task ID")
        user_id = require_id(user_id, "User ID")
        if status is not UNSET and status not in TASK_STATUSES:
            raise ValidationError(f"Unknown task status: {status}")
        if assignee_id is not UNSET and assignee_id is not None:
            assignee_id = require_id(assignee_id, "Assignee ID")

        with store_access("update_task"):
            task = self.task_repo.get_by_id(task_id)
            if task is None:
                raise NotFoundError("Task not found")

            role = self.project_repo.member_role(task.project_id, user_id)
            if role is None:
                raise ForbiddenError("User is not a member of this project")

            changes: dict = {}
            if status is not UNSET and status != task.status:
                if status == TASK_STATUS_DONE and role != MEMBER_ROLE_OWNER:
                    raise ForbiddenError("Only the project owner can mark tasks as done")
                changes["status"] = status
            if assignee_id is not UNSET:
                self._check_assignee(task.project_id, assignee_id)
                changes["assignee_id"] = assignee_id

            if changes:
                self.task_repo.update_fields(task, **changes)
                self.session.commit()
                self.session.refresh(task)

        logger.info("task_updated", task_id=task_id, user_id=user_id, changed=sorted(changes))
        return task

    def _check_assignee(self, project_id: int, assignee_id: int | None) -> None:
        if assignee_id is not None and not self.project_repo.is_member(project_id, assignee_id):
            raise ValidationError("Assignee must be a member of this project")
