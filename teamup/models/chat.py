"""
Chat message SQLAlchemy model.
"""

from datetime import datetime, timezone
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base

if TYPE_CHECKING:
    from .project import Project
    from .user import User


class ChatMessage(Base):
    """
    A project chat message. Written once, never updated.
    """

    __tablename__ = "chat_messages"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    project_id: Mapped[int] = mapped_column(
        ForeignKey("projects.id", ondelete="CASCADE"), index=True
    )
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id"), index=True)
    content: Mapped[str] = mapped_column(Text)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, default=lambda: datetime.now(timezone.utc), index=True
    )

    project: Mapped["Project"] = relationship("Project", back_populates="messages")
    user: Mapped["User"] = relationship("User", back_populates="messages", lazy="joined")

    def to_dict(self) -> dict:
        """
        Convert the message into the payload shared by the chat API and the relay.

        Returns:
            JSON-serializable dictionary including a compact author record.
        """
        return {
            "id": self.id,
            "content": self.content,
            "project_id": self.project_id,
            "user_id": self.user_id,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "user": {
                "id": self.user.id,
                "name": self.user.name,
                "avatar_url": self.user.avatar_url,
            }
            if self.user
            else None,
        }
