"""
Project endpoints: listing, creation, detail and joining.
"""

from fastapi import APIRouter, Depends, Query, status

from teamup.services import MembershipService, ProjectService, RequiredSkillInput

from ..dependencies import get_membership_service, get_project_service
from ..schemas import (
    JoinProjectRequest,
    JoinProjectResponse,
    MemberResponse,
    ProjectCreateRequest,
    ProjectDetailResponse,
    ProjectListResponse,
)
from ..serializers import serialize_member, serialize_project, serialize_project_detail

router = APIRouter(prefix="/projects", tags=["projects"])


@router.get("", response_model=ProjectListResponse)
def list_projects(
    status_filter: str | None = Query(default=None, alias="status"),
    search: str | None = None,
    skill: str | None = None,
    limit: int = Query(default=50, ge=1, le=100),
    offset: int = Query(default=0, ge=0),
    service: ProjectService = Depends(get_project_service),
):
    projects = service.list_projects(
        status=status_filter, search=search, skill=skill, limit=limit, offset=offset
    )
    items = [serialize_project(p) for p in projects]
    return ProjectListResponse(projects=items, total=len(items))


@router.post("", response_model=ProjectDetailResponse, status_code=status.HTTP_201_CREATED)
def create_project(
    payload: ProjectCreateRequest,
    service: ProjectService = Depends(get_project_service),
):
    """Create an open project; the owner joins it as its first member."""
    project = service.create_project(
        title=payload.title,
        description=payload.description,
        team_size=payload.team_size,
        owner_id=payload.owner_id,
        required_skills=[
            RequiredSkillInput(s.name, s.level, s.category) for s in payload.required_skills
        ],
    )
    return serialize_project_detail(project)


@router.post("/join", response_model=JoinProjectResponse)
def join_project(
    payload: JoinProjectRequest,
    memberships: MembershipService = Depends(get_membership_service),
    projects: ProjectService = Depends(get_project_service),
):
    memberships.join_project(payload.project_id, payload.user_id)
    project = projects.get_project(payload.project_id)
    return JoinProjectResponse(
        message="Successfully joined project",
        project=serialize_project(project),
    )


@router.get("/{project_id}", response_model=ProjectDetailResponse)
def get_project(project_id: int, service: ProjectService = Depends(get_project_service)):
    return serialize_project_detail(service.get_project(project_id))


@router.get("/{project_id}/members", response_model=list[MemberResponse])
def list_members(project_id: int, service: ProjectService = Depends(get_project_service)):
    return [serialize_member(m) for m in service.list_members(project_id)]
