"""
Peer review SQLAlchemy model.
"""

from datetime import datetime, timezone
from typing import TYPE_CHECKING, Optional

from sqlalchemy import Boolean, CheckConstraint, DateTime, ForeignKey, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base

if TYPE_CHECKING:
    from .project import Project
    from .task import Task
    from .user import User


class PeerReview(Base):
    """
    One teammate's rating (1-5) of another, for a project or a single task.

    project_id is always set; a task review carries the task's project.
    """

    __tablename__ = "peer_reviews"
    __table_args__ = (CheckConstraint("rating BETWEEN 1 AND 5", name="ck_peer_reviews_rating"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    project_id: Mapped[int] = mapped_column(
        ForeignKey("projects.id", ondelete="CASCADE"), index=True
    )
    task_id: Mapped[int | None] = mapped_column(
        ForeignKey("tasks.id", ondelete="CASCADE"), nullable=True, index=True
    )
    reviewer_id: Mapped[int] = mapped_column(ForeignKey("users.id"), index=True)
    reviewee_id: Mapped[int] = mapped_column(ForeignKey("users.id"), index=True)
    rating: Mapped[int] = mapped_column(Integer)
    comments: Mapped[str | None] = mapped_column(Text, nullable=True)
    anonymous: Mapped[bool] = mapped_column(Boolean, default=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, default=lambda: datetime.now(timezone.utc), index=True
    )

    project: Mapped["Project"] = relationship("Project", back_populates="reviews")
    task: Mapped[Optional["Task"]] = relationship("Task")
    reviewer: Mapped["User"] = relationship("User", foreign_keys=[reviewer_id], lazy="joined")
    reviewee: Mapped["User"] = relationship("User", foreign_keys=[reviewee_id], lazy="joined")
