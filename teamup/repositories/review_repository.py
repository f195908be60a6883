"""Peer review repository."""

from sqlalchemy import or_

from teamup.models import PeerReview

from .base import BaseRepository


class ReviewRepository(BaseRepository[PeerReview]):
    """Repository for PeerReview operations. Reviews are append-only."""

    model = PeerReview

    def list_reviews(
        self,
        project_id: int | None = None,
        task_id: int | None = None,
        reviewee_id: int | None = None,
    ) -> list[PeerReview]:
        """Reviews matching every given filter, newest first."""
        query = self.session.query(PeerReview)
        if project_id is not None:
            query = query.filter(PeerReview.project_id == project_id)
        if task_id is not None:
            query = query.filter(PeerReview.task_id == task_id)
        if reviewee_id is not None:
            query = query.filter(PeerReview.reviewee_id == reviewee_id)
        return query.order_by(PeerReview.created_at.desc(), PeerReview.id.desc()).all()

    def list_for_user(self, user_id: int) -> list[PeerReview]:
        """Reviews the user wrote or received, newest first."""
        return (
            self.session.query(PeerReview)
            .filter(or_(PeerReview.reviewer_id == user_id, PeerReview.reviewee_id == user_id))
            .order_by(PeerReview.created_at.desc(), PeerReview.id.desc())
            .all()
        )

    def exists_for(
        self, project_id: int, task_id: int | None, reviewer_id: int, reviewee_id: int
    ) -> bool:
        """Whether this reviewer already reviewed this reviewee for the same project or task."""
        query = self.session.query(PeerReview).filter(
            PeerReview.project_id == project_id,
            PeerReview.reviewer_id == reviewer_id,
            PeerReview.reviewee_id == reviewee_id,
        )
        if task_id is None:
            query = query.filter(PeerReview.task_id.is_(None))
        else:
            query = query.filter(PeerReview.task_id == task_id)
        return bool(self.session.query(query.exists()).scalar())
