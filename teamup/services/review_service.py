"""
Review service: peer reviews between teammates.
"""

from sqlalchemy.orm import Session

from teamup.constants import RATING_MAX, RATING_MIN
from teamup.exceptions import ConflictError, ForbiddenError, NotFoundError, ValidationError
from teamup.logging import get_logger
from teamup.models import PeerReview
from teamup.repositories import ProjectRepository, ReviewRepository, TaskRepository

from ._store import require_id, store_access

logger = get_logger("reviews")


class ReviewService:
    """Submit and list peer reviews."""

    def __init__(self, session: Session):
        self.session = session
        self.review_repo = ReviewRepository(session)
        self.project_repo = ProjectRepository(session)
        self.task_repo = TaskRepository(session)

    def submit_review(
        self,
        reviewer_id,
        reviewee_id,
        rating,
        project_id=None,
        task_id=None,
        comments: str | None = None,
        anonymous: bool = False,
    ) -> PeerReview:
        """
        Record one teammate's rating of another.

        A task review belongs to the task's project. Both people must be
        members of that project, and each (reviewer, reviewee, project, task)
        combination is reviewed at most once.

        Raises:
            ValidationError: Missing identifiers, rating outside 1-5, a
                self-review, a task from another project, or a reviewee
                outside the project.
            NotFoundError: No such task or project.
            ForbiddenError: The reviewer is not a project member.
            ConflictError: The same review already exists.
        """
        if project_id is None and task_id is None:
            raise ValidationError("Task or project ID is required")
        reviewer_id = require_id(reviewer_id, "Reviewer ID")
        reviewee_id = require_id(reviewee_id, "Reviewee ID")
        if rating is None or not RATING_MIN <= rating <= RATING_MAX:
            raise ValidationError(f"Rating must be between {RATING_MIN} and {RATING_MAX}")
        if reviewer_id == reviewee_id:
            raise ValidationError("Users cannot review themselves")

        with store_access("submit_review"):
            if task_id is not None:
                task_id = require_id(task_id, "Task ID")
                task = self.task_repo.get_by_id(task_id)
                if task is None:
                    raise NotFoundError("Task not found")
                if project_id is not None and require_id(project_id, "Project ID") != task.project_id:
                    raise ValidationError("Task does not belong to this project")
                project_id = task.project_id
            else:
                project_id = require_id(project_id, "Project ID")
                if not self.project_repo.exists(project_id):
                    raise NotFoundError("Project not found")

            if not self.project_repo.is_member(project_id, reviewer_id):
                raise ForbiddenError("Reviewer is not a member of this project")
            if not self.project_repo.is_member(project_id, reviewee_id):
                raise ValidationError("Reviewee is not a member of this project")
            if self.review_repo.exists_for(project_id, task_id, reviewer_id, reviewee_id):
                raise ConflictError("Review already exists for this combination")

            review = self.review_repo.create(
                project_id=project_id,
                task_id=task_id,
                reviewer_id=reviewer_id,
                reviewee_id=reviewee_id,
                rating=rating,
                comments=comments,
                anonymous=anonymous,
            )
            self.session.commit()
            self.session.refresh(review)

        logger.info(
            "review_submitted",
            review_id=review.id,
            project_id=project_id,
            task_id=task_id,
            rating=rating,
        )
        return review

    def list_reviews(self, project_id=None, task_id=None, reviewee_id=None) -> list[PeerReview]:
        """Reviews matching the given filters, newest first. No filter lists every review."""
        if project_id is not None:
            project_id = require_id(project_id, "Project ID")
        if task_id is not None:
            task_id = require_id(task_id, "Task ID")
        if reviewee_id is not None:
            reviewee_id = require_id(reviewee_id, "Reviewee ID")
        with store_access("list_reviews"):
            return self.review_repo.list_reviews(
                project_id=project_id, task_id=task_id, reviewee_id=reviewee_id
            )
