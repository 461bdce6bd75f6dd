"""
User repository - encapsulates all user data access (SOLID: Single Responsibility).
Challenge: Keep queries in one place for optimization and reuse.
"""

from sqlalchemy import select

from app.db.models.user import User
from app.db.repositories.base_repository import BaseRepository


class UserRepository(BaseRepository[User]):
    """User-specific queries. Extends base CRUD with domain logic."""

    def __init__(self, session):
        super().__init__(session, User)

    async def get_by_username(self, username: str) -> User | None:
        """Find user by username - used for login."""
        result = await self.session.execute(select(User).where(User.username == username))
        return result.scalar_one_or_none()

    async def get_by_email(self, email: str) -> User | None:
        result = await self.session.execute(select(User).where(User.email == email))
        return result.scalar_one_or_none()

    async def lock(self, user_id: int) -> None:
        """Row-lock the user for the rest of the transaction (serializes hierarchy edits).

        Rendered as SELECT ... FOR UPDATE on PostgreSQL; a no-op on SQLite.
        """
        await self.session.execute(select(User.id).where(User.id == user_id).with_for_update())
