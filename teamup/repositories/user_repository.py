"""User repository."""

from teamup.models import User

from .base import BaseRepository


class UserRepository(BaseRepository[User]):
    """Repository for User operations."""

    model = User

    def get_by_email(self, email: str) -> User | None:
        """Get user by email address."""
        return self.session.query(User).filter(User.email == email).first()

    def update_details(
        self,
        user: User,
        name: str | None = None,
        bio: str | None = None,
        avatar_url: str | None = None,
    ) -> User:
        """Update only the profile fields that are provided (not None)."""
        if name is not None:
            user.name = name
        if bio is not None:
            user.bio = bio
        if avatar_url is not None:
            user.avatar_url = avatar_url
        self.session.flush()
        return user
