"""
Auth service - registration, login and token resolution (the service's AuthProvider).
Challenge: Duplicate checks that stay correct under concurrent registration.
Design: Pre-check for a friendly error; the unique indexes are the real guard.
"""

import logging

from sqlalchemy.exc import IntegrityError

from app.core.exceptions import (
    Conflict,
    DuplicateEmail,
    DuplicateUsername,
    InvalidCredentials,
    Unauthenticated,
    UserNotFound,
)
from app.core.security import create_access_token, decode_access_token, hash_password, verify_password
from app.db.base import utcnow
from app.db.models.user import User
from app.db.repositories.user_repository import UserRepository

logger = logging.getLogger(__name__)


def issue_token(user: User) -> str:
    """Token carries user id, username and email; expiry comes from settings."""
    return create_access_token(user.id, {"username": user.username, "email": user.email})


class AuthService:
    """Handles account creation, credential checks and identity resolution."""

    def __init__(self, user_repo: UserRepository):
        self.user_repo = user_repo

    async def _raise_if_taken(self, username: str, email: str) -> None:
        if await self.user_repo.get_by_username(username):
            raise DuplicateUsername()
        if await self.user_repo.get_by_email(email):
            raise DuplicateEmail()

    async def register(self, username: str, email: str, password: str) -> tuple[str, User]:
        """Create the user and return (token, user)."""
        await self._raise_if_taken(username, email)
        user = User(
            username=username,
            email=email,
            password_hash=hash_password(password),
            created_at=utcnow(),
        )
        try:
            user = await self.user_repo.add(user)
        except IntegrityError:
            # Lost a race with a concurrent registration: report which field collided
            logger.warning("register: unique violation for username=%r email=%r", username, email)
            await self._raise_if_taken(username, email)
            raise Conflict("Username or email already exists.")
        logger.info("register: created user id=%s username=%r", user.id, user.username)
        return issue_token(user), user

    async def login(self, username: str, password: str) -> tuple[str, User]:
        user = await self.user_repo.get_by_username(username)
        if user is None:
            raise UserNotFound()
        if not verify_password(password, user.password_hash):
            logger.info("login: wrong password for username=%r", username)
            raise InvalidCredentials()
        return issue_token(user), user

    async def resolve_identity(self, token: str | None) -> int:
        """Map a bearer token to a user id, or raise Unauthenticated."""
        if not token:
            raise Unauthenticated()
        payload = decode_access_token(token)
        if not payload or "sub" not in payload:
            raise Unauthenticated("Invalid or expired token")
        try:
            user_id = int(payload["sub"])
        except (TypeError, ValueError):
            raise Unauthenticated("Invalid or expired token")
        user = await self.user_repo.get_by_id(user_id)
        if user is None:
            raise Unauthenticated("User not found")
        return user.id
