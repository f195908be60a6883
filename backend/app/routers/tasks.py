"""
Task board endpoints.
"""

from fastapi import APIRouter, Depends, Query, status

from teamup.services import UNSET, TaskService

from ..dependencies import get_task_service
from ..schemas import TaskCreateRequest, TaskListResponse, TaskMutationResponse, TaskUpdateRequest
from ..serializers import serialize_board, serialize_task

router = APIRouter(prefix="/tasks", tags=["tasks"])


@router.get("", response_model=TaskListResponse)
def list_tasks(
    project_id: int | None = Query(default=None),
    service: TaskService = Depends(get_task_service),
):
    """A project's tasks grouped into kanban columns."""
    return TaskListResponse(tasks=serialize_board(service.list_board(project_id)))


@router.post("", response_model=TaskMutationResponse, status_code=status.HTTP_201_CREATED)
def create_task(payload: TaskCreateRequest, service: TaskService = Depends(get_task_service)):
    task = service.create_task(
        project_id=payload.project_id,
        creator_id=payload.creator_id,
        title=payload.title,
        description=payload.description,
        priority=payload.priority,
        assignee_id=payload.assignee_id,
        due_date=payload.due_date,
    )
    return TaskMutationResponse(message="Task created successfully", task=serialize_task(task))


@router.put("/update", response_model=TaskMutationResponse)
def update_task(payload: TaskUpdateRequest, service: TaskService = Depends(get_task_service)):
    """Move a task or reassign it. Marking a task done is reserved for the project owner."""
    sent = payload.model_fields_set
    task = service.update_task(
        payload.task_id,
        payload.user_id,
        status=payload.status if "status" in sent and payload.status is not None else UNSET,
        assignee_id=payload.assignee_id if "assignee_id" in sent else UNSET,
    )
    return TaskMutationResponse(message="Task updated successfully", task=serialize_task(task))
