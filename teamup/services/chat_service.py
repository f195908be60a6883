"""
Chat service: persistence and history for project chat.

Messages are committed here before anyone hands them to the relay, so a
failed broadcast never loses a message.
"""

from sqlalchemy.orm import Session

from teamup.config import get_settings
from teamup.constants import DEFAULT_CHAT_HISTORY_LIMIT
from teamup.exceptions import ForbiddenError, ValidationError
from teamup.logging import get_logger
from teamup.repositories import ChatMessageRepository, ProjectRepository

from ._store import require_id, store_access

logger = get_logger("chat")


class ChatService:
    def __init__(self, session: Session):
        self.session = session
        self.message_repo = ChatMessageRepository(session)
        self.project_repo = ProjectRepository(session)

    def create_message(self, project_id, user_id, content: str | None) -> dict:
        """
        Store a message from a project member.

        Returns:
            The stored message payload, ready for broadcasting.

        Raises:
            ValidationError: Missing content or identifiers.
            ForbiddenError: The author is not a member of the project.
        """
        if not content or not content.strip():
            raise ValidationError("Content, user ID, and project ID are required")
        project_id = require_id(project_id, "Project ID")
        user_id = require_id(user_id, "User ID")

        with store_access("create_message"):
            if not self.project_repo.is_member(project_id, user_id):
                raise ForbiddenError("User is not a member of this project")

            message = self.message_repo.create_message(project_id, user_id, content)
            payload = message.to_dict()
            self.session.commit()

        logger.info("chat_message_created", project_id=project_id, user_id=user_id, message_id=payload["id"])
        return payload

    def list_messages(self, project_id, limit: int = DEFAULT_CHAT_HISTORY_LIMIT) -> list[dict]:
        """The latest messages of a project, oldest first. limit is capped by configuration."""
        project_id = require_id(project_id, "Project ID")
        if limit < 1:
            raise ValidationError("Limit must be at least 1")
        limit = min(limit, get_settings().chat_history_max_limit)

        with store_access("list_messages"):
            messages = self.message_repo.list_recent(project_id, limit)
            return [message.to_dict() for message in messages]
