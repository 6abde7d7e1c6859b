"""User ORM model for account holders."""

from sqlalchemy import Index, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from homeledger.models import Base, BaseModel


class User(Base, BaseModel):
    """A person who owns properties and logs in to the API.

    Users are created from the command line while public registration is
    disabled; every property belongs to exactly one user.
    """

    __tablename__ = "users"

    username: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
        unique=True,
        comment="Login name (at least 3 characters)",
    )
    email: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        unique=True,
    )
    password_hash: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="bcrypt hash of the user's password",
    )

    # Relationships
    properties: Mapped[list["Property"]] = relationship(  # noqa: F821
        "Property",
        back_populates="owner",
        cascade="all, delete-orphan",
    )

    __table_args__ = (Index("idx_user_email", "email"),)

    def __repr__(self) -> str:
        return f"<User(id={self.id}, username={self.username!r}, email={self.email!r})>"


__all__ = ["User"]
