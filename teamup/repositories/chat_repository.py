"""Chat message repository."""

from teamup.models import ChatMessage

from .base import BaseRepository


class ChatMessageRepository(BaseRepository[ChatMessage]):
    """Repository for ChatMessage operations. Messages are append-only."""

    model = ChatMessage

    def create_message(self, project_id: int, user_id: int, content: str) -> ChatMessage:
        message = ChatMessage(project_id=project_id, user_id=user_id, content=content)
        self.session.add(message)
        self.session.flush()
        self.session.refresh(message)
        return message

    def list_recent(self, project_id: int, limit: int) -> list[ChatMessage]:
        """
        The latest `limit` messages of a project, oldest first.

        Fetched newest-first so the limit keeps the most recent messages,
        then reversed for display.
        """
        newest_first = (
            self.session.query(ChatMessage)
            .filter(ChatMessage.project_id == project_id)
            .order_by(ChatMessage.created_at.desc(), ChatMessage.id.desc())
            .limit(limit)
            .all()
        )
        return list(reversed(newest_first))
