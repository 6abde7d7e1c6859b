"""Property ORM model: the root aggregate for categories, expenses and debtors."""

from sqlalchemy import ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from homeledger.models import Base, BaseModel


class Property(Base, BaseModel):
    """Model representing a user-owned property (a household, a flat, a building).

    Everything tracked in the ledger hangs off a property. Deleting a property
    removes its categories, expenses, debtors and their payments.
    """

    __tablename__ = "properties"

    # Ownership
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        comment="Owning user; all access is scoped to this user",
    )

    name: Mapped[str] = mapped_column(
        String(200),
        nullable=False,
    )
    description: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
    )

    # Relationships
    owner: Mapped["User"] = relationship(  # noqa: F821
        "User",
        back_populates="properties",
    )
    categories: Mapped[list["Category"]] = relationship(  # noqa: F821
        "Category",
        back_populates="property",
        cascade="all, delete-orphan",
        order_by="Category.name",
    )
    expenses: Mapped[list["Expense"]] = relationship(  # noqa: F821
        "Expense",
        back_populates="property",
        cascade="all, delete-orphan",
    )
    debtors: Mapped[list["Debtor"]] = relationship(  # noqa: F821
        "Debtor",
        back_populates="property",
        cascade="all, delete-orphan",
        order_by="Debtor.name",
    )

    __table_args__ = (Index("idx_property_user_created", "user_id", "created_at"),)

    def __repr__(self) -> str:
        return f"<Property(id={self.id}, user_id={self.user_id}, name={self.name!r})>"


__all__ = ["Property"]
