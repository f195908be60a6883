"""
User service: minimal account records (authentication lives elsewhere).
"""

from sqlalchemy.orm import Session

from teamup.exceptions import ConflictError, NotFoundError, ValidationError
from teamup.logging import get_logger
from teamup.models import User
from teamup.repositories import UserRepository

from ._store import require_id, store_access

logger = get_logger("users")


class UserService:
    def __init__(self, session: Session):
        self.session = session
        self.user_repo = UserRepository(session)

    def create_user(self, name: str, email: str, bio: str | None = None, avatar_url: str | None = None) -> User:
        if not name or not name.strip():
            raise ValidationError("Name is required")
        if not email or not email.strip():
            raise ValidationError("Email is required")
        email = email.strip().lower()

        with store_access("create_user"):
            if self.user_repo.get_by_email(email) is not None:
                raise ConflictError("A user with this email already exists")
            user = self.user_repo.create(
                name=name.strip(), email=email, bio=bio, avatar_url=avatar_url
            )
            self.session.commit()

        logger.info("user_created", user_id=user.id)
        return user

    def get_user(self, user_id) -> User:
        user_id = require_id(user_id, "User ID")
        with store_access("get_user"):
            user = self.user_repo.get_by_id(user_id)
        if user is None:
            raise NotFoundError("User not found")
        return user
