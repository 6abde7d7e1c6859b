"""User service for querying and managing account holders."""

import logging
from dataclasses import dataclass

from sqlalchemy import func, or_, select
from sqlalchemy.orm import Session

from homeledger.api.errors import NotFoundError, UserAlreadyExistsError
from homeledger.models.property import Property
from homeledger.models.user import User
from homeledger.services.auth_service import hash_password, validate_password_strength

logger = logging.getLogger(__name__)

MIN_USERNAME_LENGTH = 3


@dataclass
class UserSummary:
    """Row of the user listing."""

    id: int
    username: str
    email: str
    property_count: int


class UserService:
    """Service for user-related operations."""

    def __init__(self, db: Session):
        """Initialize with database session."""
        self.db = db

    def get_by_id(self, user_id: int) -> User | None:
        return self.db.get(User, user_id)

    def get_by_username(self, username: str) -> User | None:
        """Get user by username (exact match).

        Args:
            username: Login name

        Returns:
            User if found, None otherwise
        """
        return self.db.scalar(select(User).where(User.username == username))

    def create_user(self, username: str, email: str, password: str) -> User:
        """Create a user after validating the username, email and password.

        Raises:
            ValueError: If username or email is malformed
            WeakPasswordError: If the password does not meet the strength rules
            UserAlreadyExistsError: If username or email is taken
        """
        username = username.strip()
        email = email.strip()
        if len(username) < MIN_USERNAME_LENGTH:
            raise ValueError(f"Username must be at least {MIN_USERNAME_LENGTH} characters")
        if "@" not in email:
            raise ValueError("Invalid email address")
        validate_password_strength(password)

        existing = self.db.scalar(
            select(User).where(or_(User.username == username, User.email == email))
        )
        if existing:
            logger.warning("User %r or email %r already exists", username, email)
            raise UserAlreadyExistsError("Username or email already in use")

        user = User(username=username, email=email, password_hash=hash_password(password))
        self.db.add(user)
        self.db.commit()
        self.db.refresh(user)
        logger.info("Created user: id=%d, username=%s", user.id, user.username)
        return user

    def list_users(self) -> list[UserSummary]:
        """List all users with the number of properties they own, ordered by id."""
        stmt = (
            select(User.id, User.username, User.email, func.count(Property.id))
            .outerjoin(Property, Property.user_id == User.id)
            .group_by(User.id)
            .order_by(User.id)
        )
        return [
            UserSummary(id=row[0], username=row[1], email=row[2], property_count=row[3])
            for row in self.db.execute(stmt)
        ]

    def set_password(self, username: str, password: str) -> User:
        """Replace a user's password.

        Raises:
            NotFoundError: If the user does not exist
            WeakPasswordError: If the password does not meet the strength rules
        """
        user = self.get_by_username(username)
        if not user:
            raise NotFoundError(f"User {username!r} not found")
        validate_password_strength(password)
        user.password_hash = hash_password(password)
        self.db.commit()
        logger.info("Password reset for user id=%d", user.id)
        return user

    def delete_user(self, username: str) -> None:
        """Delete a user and, by cascade, everything they own.

        Raises:
            NotFoundError: If the user does not exist
        """
        user = self.get_by_username(username)
        if not user:
            raise NotFoundError(f"User {username!r} not found")
        self.db.delete(user)
        self.db.commit()
        logger.info("Deleted user %s", username)


__all__ = ["UserService", "UserSummary", "MIN_USERNAME_LENGTH"]
