"""
ORM to response-schema conversion shared by the routers.
"""

from teamup.models import PeerReview, Project, ProjectMember, Task, User
from teamup.services import Profile, ProjectAnalytics, UserAnalytics

from .schemas import (
    ActivityResponse,
    AnalyticsPayload,
    MemberResponse,
    MembershipSummary,
    ProfileResponse,
    ProjectAnalyticsResponse,
    ProjectDetailResponse,
    ProjectResponse,
    RequiredSkillResponse,
    ReviewResponse,
    TaskBoardResponse,
    TaskPerson,
    TaskResponse,
    TimelineEntryResponse,
    UserAnalyticsResponse,
    UserResponse,
    UserSkillResponse,
)


def serialize_member(member: ProjectMember) -> MemberResponse:
    return MemberResponse(
        user_id=member.user_id,
        name=member.user.name,
        avatar_url=member.user.avatar_url,
        role=member.role,
        joined_at=member.joined_at,
    )


def serialize_project(project: Project) -> ProjectResponse:
    return ProjectResponse(
        id=project.id,
        title=project.title,
        description=project.description,
        team_size=project.team_size,
        status=project.status,
        member_count=project.member_count,
        open_seats=project.open_seats,
        required_skills=[
            RequiredSkillResponse(
                skill=ps.skill.name,
                category=ps.skill.category,
                level=ps.level,
                required=ps.required,
            )
            for ps in project.skills
        ],
        created_at=project.created_at,
    )


def serialize_project_detail(project: Project) -> ProjectDetailResponse:
    base = serialize_project(project)
    return ProjectDetailResponse(
        **base.model_dump(),
        members=[serialize_member(m) for m in project.members],
    )


def serialize_profile(profile: Profile) -> ProfileResponse:
    return ProfileResponse(
        user=UserResponse.model_validate(profile.user),
        skills=[
            UserSkillResponse(
                name=row.skill.name,
                category=row.skill.category,
                proficiency=row.proficiency,
            )
            for row in profile.skills
        ],
        projects=[
            MembershipSummary(
                project_id=m.project_id,
                title=m.project.title,
                status=m.project.status,
                role=m.role,
            )
            for m in profile.memberships
        ],
    )


def _person(user: User | None) -> TaskPerson | None:
    if user is None:
        return None
    return TaskPerson(id=user.id, name=user.name, avatar_url=user.avatar_url)


def serialize_task(task: Task) -> TaskResponse:
    return TaskResponse(
        id=task.id,
        project_id=task.project_id,
        title=task.title,
        description=task.description,
        status=task.status,
        priority=task.priority,
        assignee=_person(task.assignee),
        creator=_person(task.creator),
        due_date=task.due_date,
        created_at=task.created_at,
        updated_at=task.updated_at,
    )


def serialize_board(board: dict[str, list[Task]]) -> TaskBoardResponse:
    return TaskBoardResponse(
        **{status: [serialize_task(t) for t in tasks] for status, tasks in board.items()}
    )


def serialize_review(review: PeerReview) -> ReviewResponse:
    """Anonymous reviews never reveal the reviewer."""
    return ReviewResponse(
        id=review.id,
        project_id=review.project_id,
        task_id=review.task_id,
        reviewer=None if review.anonymous else _person(review.reviewer),
        reviewee=_person(review.reviewee),
        rating=review.rating,
        comments=review.comments,
        anonymous=review.anonymous,
        created_at=review.created_at,
    )


def serialize_analytics(
    user: UserAnalytics | None = None, project: ProjectAnalytics | None = None
) -> AnalyticsPayload:
    payload = AnalyticsPayload()
    if user is not None:
        payload.user = UserAnalyticsResponse.model_validate(user)
        payload.recent_activity = [
            ActivityResponse(
                type=item.kind,
                title=item.title,
                date=item.date,
                status=item.status,
                rating=item.rating,
                project=item.project,
            )
            for item in user.recent_activity
        ]
    if project is not None:
        payload.project = ProjectAnalyticsResponse.model_validate(project)
        payload.timeline = [TimelineEntryResponse.model_validate(e) for e in project.timeline]
    return payload
