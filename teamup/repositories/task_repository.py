"""Task repository: the per-project kanban board."""

from sqlalchemy import case, or_

from teamup.constants import TASK_PRIORITY_RANK
from teamup.models import Task

from .base import BaseRepository

_priority_rank = case(TASK_PRIORITY_RANK, value=Task.priority, else_=0)


class TaskRepository(BaseRepository[Task]):
    """Repository for Task operations."""

    model = Task

    def list_for_project(self, project_id: int) -> list[Task]:
        """A project's tasks, highest priority first, then newest first."""
        return (
            self.session.query(Task)
            .filter(Task.project_id == project_id)
            .order_by(_priority_rank.desc(), Task.created_at.desc(), Task.id.desc())
            .all()
        )

    def list_for_user(self, user_id: int) -> list[Task]:
        """Tasks the user created or is assigned to, most recently updated first."""
        return (
            self.session.query(Task)
            .filter(or_(Task.assignee_id == user_id, Task.creator_id == user_id))
            .order_by(Task.updated_at.desc(), Task.id.desc())
            .all()
        )

    def update_fields(self, task: Task, **changes) -> Task:
        """Apply column changes; unknown keys raise ValueError."""
        for key, value in changes.items():
            self._column(key)
            setattr(task, key, value)
        self.session.flush()
        return task
