"""
Pydantic schemas for request and response validation.
"""

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from teamup.constants import (
    DEFAULT_REQUIRED_LEVEL,
    PROFICIENCY_MAX,
    PROFICIENCY_MIN,
    RATING_MAX,
    RATING_MIN,
    TASK_PRIORITY_MEDIUM,
)

# =============================================================================
# Users / Profile
# =============================================================================


class UserCreateRequest(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    email: EmailStr
    bio: str | None = None
    avatar_url: str | None = None


class UserResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: EmailStr
    bio: str | None = None
    avatar_url: str | None = None
    created_at: datetime | None = None


class SkillEntry(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    proficiency: int = Field(ge=PROFICIENCY_MIN, le=PROFICIENCY_MAX)
    category: str | None = None


class UserSkillResponse(BaseModel):
    name: str
    category: str
    proficiency: int


class MembershipSummary(BaseModel):
    project_id: int
    title: str
    status: str
    role: str


class ProfileResponse(BaseModel):
    user: UserResponse
    skills: list[UserSkillResponse] = Field(default_factory=list)
    projects: list[MembershipSummary] = Field(default_factory=list)


class ProfileUpdateRequest(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=255)
    bio: str | None = None
    avatar_url: str | None = None
    skills: list[SkillEntry] | None = None


# =============================================================================
# Projects
# =============================================================================


class RequiredSkillEntry(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    level: int = Field(default=DEFAULT_REQUIRED_LEVEL, ge=PROFICIENCY_MIN, le=PROFICIENCY_MAX)
    category: str | None = None


class ProjectCreateRequest(BaseModel):
    title: str = Field(min_length=1, max_length=255)
    description: str = Field(min_length=1)
    team_size: int = Field(ge=1)
    owner_id: int
    required_skills: list[RequiredSkillEntry] = Field(default_factory=list)


class JoinProjectRequest(BaseModel):
    project_id: int
    user_id: int


class RequiredSkillResponse(BaseModel):
    skill: str
    category: str
    level: int
    required: bool = True


class MemberResponse(BaseModel):
    user_id: int
    name: str
    avatar_url: str | None = None
    role: str
    joined_at: datetime | None = None


class ProjectResponse(BaseModel):
    id: int
    title: str
    description: str
    team_size: int
    status: str
    member_count: int
    open_seats: int
    required_skills: list[RequiredSkillResponse] = Field(default_factory=list)
    created_at: datetime | None = None


class ProjectDetailResponse(ProjectResponse):
    members: list[MemberResponse] = Field(default_factory=list)


class ProjectListResponse(BaseModel):
    projects: list[ProjectResponse]
    total: int


class JoinProjectResponse(BaseModel):
    message: str
    project: ProjectResponse


# =============================================================================
# Matchmaking
# =============================================================================


class SkillMatchResponse(BaseModel):
    skill: str
    user_proficiency: int
    required_level: int
    match_percentage: int


class RecommendationResponse(BaseModel):
    project_id: int
    title: str
    description: str
    status: str
    team_size: int
    member_count: int
    required_skills: list[dict[str, Any]] = Field(default_factory=list)
    match_score: int
    matched_skills: list[SkillMatchResponse] = Field(default_factory=list)
    urgency_score: int


class MatchmakingResponse(BaseModel):
    recommendations: list[RecommendationResponse]
    user_skills: dict[str, int] = Field(default_factory=dict)
    message: str | None = None


# =============================================================================
# Chat
# =============================================================================


class ChatMessageCreateRequest(BaseModel):
    project_id: int
    user_id: int
    content: str = Field(min_length=1, max_length=5000)


class ChatAuthor(BaseModel):
    id: int
    name: str
    avatar_url: str | None = None


class ChatMessageResponse(BaseModel):
    id: int
    project_id: int
    user_id: int
    content: str
    created_at: datetime | None = None
    user: ChatAuthor | None = None


class ChatHistoryResponse(BaseModel):
    messages: list[ChatMessageResponse]


# =============================================================================
# Tasks
# =============================================================================

TaskStatus = Literal["todo", "in_progress", "review", "done"]
TaskPriority = Literal["low", "medium", "high"]


class TaskCreateRequest(BaseModel):
    title: str = Field(min_length=1, max_length=255)
    description: str | None = None
    priority: TaskPriority = TASK_PRIORITY_MEDIUM
    project_id: int
    creator_id: int
    assignee_id: int | None = None
    due_date: datetime | None = None


class TaskUpdateRequest(BaseModel):
    """Only the fields sent are changed; an explicit null assignee_id unassigns."""

    task_id: int
    user_id: int
    status: TaskStatus | None = None
    assignee_id: int | None = None


class TaskPerson(BaseModel):
    id: int
    name: str
    avatar_url: str | None = None


class TaskResponse(BaseModel):
    id: int
    project_id: int
    title: str
    description: str | None = None
    status: str
    priority: str
    assignee: TaskPerson | None = None
    creator: TaskPerson
    due_date: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class TaskBoardResponse(BaseModel):
    todo: list[TaskResponse] = Field(default_factory=list)
    in_progress: list[TaskResponse] = Field(default_factory=list)
    review: list[TaskResponse] = Field(default_factory=list)
    done: list[TaskResponse] = Field(default_factory=list)


class TaskListResponse(BaseModel):
    tasks: TaskBoardResponse


class TaskMutationResponse(BaseModel):
    message: str
    task: TaskResponse


# =============================================================================
# Reviews
# =============================================================================


class ReviewCreateRequest(BaseModel):
    project_id: int | None = None
    task_id: int | None = None
    reviewer_id: int
    reviewee_id: int
    rating: int = Field(ge=RATING_MIN, le=RATING_MAX)
    comments: str | None = None
    anonymous: bool = False


class ReviewResponse(BaseModel):
    id: int
    project_id: int
    task_id: int | None = None
    reviewer: TaskPerson | None = None
    reviewee: TaskPerson
    rating: int
    comments: str | None = None
    anonymous: bool
    created_at: datetime | None = None


class ReviewListResponse(BaseModel):
    reviews: list[ReviewResponse]


class ReviewMutationResponse(BaseModel):
    message: str
    review: ReviewResponse


# =============================================================================
# Analytics
# =============================================================================


class ActivityResponse(BaseModel):
    type: str
    title: str
    date: datetime
    status: str | None = None
    rating: int | None = None
    project: str | None = None


class UserAnalyticsResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    total_projects: int
    completed_projects: int
    total_tasks: int
    completed_tasks: int
    total_reviews: int
    average_rating: float
    task_completion_rate: float
    project_success_rate: float


class MemberContributionResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    user_id: int
    name: str
    total_tasks: int
    completed_tasks: int
    contribution_rate: float


class TimelineEntryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    date: datetime
    title: str
    status: str


class ProjectAnalyticsResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    total_tasks: int
    completed_tasks: int
    total_reviews: int
    average_rating: float
    task_completion_rate: float
    task_statuses: dict[str, int]
    member_contributions: list[MemberContributionResponse]


class AnalyticsPayload(BaseModel):
    user: UserAnalyticsResponse | None = None
    recent_activity: list[ActivityResponse] | None = None
    project: ProjectAnalyticsResponse | None = None
    timeline: list[TimelineEntryResponse] | None = None


class AnalyticsResponse(BaseModel):
    analytics: AnalyticsPayload
