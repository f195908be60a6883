"""
Analytics service: read-only aggregates over projects, tasks and reviews.

Rates are percentages in [0, 100]; averages and rates are 0 when there is
nothing to aggregate.
"""

from collections import Counter
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import datetime, timezone

from sqlalchemy.orm import Session

from teamup.constants import (
    PROJECT_STATUS_COMPLETED,
    RECENT_ACTIVITY_LIMIT,
    RECENT_REVIEW_ACTIVITY,
    RECENT_TASK_ACTIVITY,
    TASK_STATUS_DONE,
    TASK_STATUSES,
)
from teamup.exceptions import NotFoundError
from teamup.logging import get_logger
from teamup.models import PeerReview, Task
from teamup.repositories import ProjectRepository, ReviewRepository, TaskRepository, UserRepository

from ._store import require_id, store_access

logger = get_logger("analytics")


def percentage(part: int, whole: int) -> float:
    return part / whole * 100 if whole else 0.0


def mean_rating(reviews: Iterable[PeerReview]) -> float:
    ratings = [review.rating for review in reviews]
    return sum(ratings) / len(ratings) if ratings else 0.0


def _utc(value: datetime) -> datetime:
    """Naive UTC, so rows read back from the store compare with fresh ones."""
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


@dataclass
class ActivityItem:
    kind: str  # "task" or "review"
    title: str
    date: datetime
    status: str | None = None
    rating: int | None = None
    project: str | None = None


@dataclass
class UserAnalytics:
    total_projects: int
    completed_projects: int
    total_tasks: int
    completed_tasks: int
    total_reviews: int
    average_rating: float
    task_completion_rate: float
    project_success_rate: float
    recent_activity: list[ActivityItem] = field(default_factory=list)


@dataclass
class MemberContribution:
    user_id: int
    name: str
    total_tasks: int
    completed_tasks: int
    contribution_rate: float


@dataclass
class TimelineEntry:
    date: datetime
    title: str
    status: str


@dataclass
class ProjectAnalytics:
    total_tasks: int
    completed_tasks: int
    total_reviews: int
    average_rating: float
    task_completion_rate: float
    task_statuses: dict[str, int]
    member_contributions: list[MemberContribution]
    timeline: list[TimelineEntry]


class AnalyticsService:
    def __init__(self, session: Session):
        self.session = session
        self.user_repo = UserRepository(session)
        self.project_repo = ProjectRepository(session)
        self.task_repo = TaskRepository(session)
        self.review_repo = ReviewRepository(session)

    def user_analytics(self, user_id) -> UserAnalytics:
        """
        Project, task and review totals for one user.

        Tasks count when the user created or is assigned them. The average
        rating covers reviews the user received; total_reviews counts both
        written and received.
        """
        user_id = require_id(user_id, "User ID")
        with store_access("user_analytics"):
            if not self.user_repo.exists(user_id):
                raise NotFoundError("User not found")
            memberships = self.project_repo.list_memberships_for_user(user_id)
            tasks = self.task_repo.list_for_user(user_id)
            reviews = self.review_repo.list_for_user(user_id)

        completed_projects = sum(
            1 for m in memberships if m.project.status == PROJECT_STATUS_COMPLETED
        )
        completed_tasks = sum(1 for task in tasks if task.status == TASK_STATUS_DONE)
        project_titles = {m.project_id: m.project.title for m in memberships}

        return UserAnalytics(
            total_projects=len(memberships),
            completed_projects=completed_projects,
            total_tasks=len(tasks),
            completed_tasks=completed_tasks,
            total_reviews=len(reviews),
            average_rating=mean_rating(r for r in reviews if r.reviewee_id == user_id),
            task_completion_rate=percentage(completed_tasks, len(tasks)),
            project_success_rate=percentage(completed_projects, len(memberships)),
            recent_activity=self._recent_activity(user_id, tasks, reviews, project_titles),
        )

    def project_analytics(self, project_id) -> ProjectAnalytics:
        """
        Task progress, ratings and per-member contribution for one project.

        A member's tasks are those they created or are assigned; members are
        ordered by contribution rate, highest first, ties in join order.
        """
        project_id = require_id(project_id, "Project ID")
        with store_access("project_analytics"):
            if not self.project_repo.exists(project_id):
                raise NotFoundError("Project not found")
            members = self.project_repo.list_members(project_id)
            tasks = self.task_repo.list_for_project(project_id)
            reviews = self.review_repo.list_reviews(project_id=project_id)

        completed_tasks = sum(1 for task in tasks if task.status == TASK_STATUS_DONE)
        counts = Counter(task.status for task in tasks)

        contributions = []
        for member in members:
            own = [t for t in tasks if member.user_id in (t.assignee_id, t.creator_id)]
            done = sum(1 for t in own if t.status == TASK_STATUS_DONE)
            contributions.append(
                MemberContribution(
                    user_id=member.user_id,
                    name=member.user.name,
                    total_tasks=len(own),
                    completed_tasks=done,
                    contribution_rate=percentage(done, len(own)),
                )
            )
        contributions.sort(key=lambda c: c.contribution_rate, reverse=True)

        timeline = [
            TimelineEntry(date=task.created_at, title=task.title, status=task.status)
            for task in sorted(tasks, key=lambda t: t.id)
        ]

        logger.debug("project_analytics_computed", project_id=project_id, tasks=len(tasks))
        return ProjectAnalytics(
            total_tasks=len(tasks),
            completed_tasks=completed_tasks,
            total_reviews=len(reviews),
            average_rating=mean_rating(reviews),
            task_completion_rate=percentage(completed_tasks, len(tasks)),
            task_statuses={status: counts.get(status, 0) for status in TASK_STATUSES},
            member_contributions=contributions,
            timeline=timeline,
        )

    @staticmethod
    def _recent_activity(
        user_id: int,
        tasks: list[Task],
        reviews: list[PeerReview],
        project_titles: dict[int, str],
    ) -> list[ActivityItem]:
        items = [
            ActivityItem(
                kind="task",
                title=task.title,
                date=task.updated_at,
                status=task.status,
                project=project_titles.get(task.project_id),
            )
            for task in tasks[:RECENT_TASK_ACTIVITY]
        ]
        items.extend(
            ActivityItem(
                kind="review",
                title="Review for you" if review.reviewee_id == user_id else "Review for team member",
                date=review.created_at,
                rating=review.rating,
            )
            for review in reviews[:RECENT_REVIEW_ACTIVITY]
        )
        items.sort(key=lambda item: _utc(item.date), reverse=True)
        return items[:RECENT_ACTIVITY_LIMIT]
