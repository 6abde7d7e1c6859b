"""Expense ORM model for categorized costs recorded against a property."""

import datetime
from decimal import Decimal

from sqlalchemy import Date, ForeignKey, Index, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from homeledger.models import Base, BaseModel


class Expense(Base, BaseModel):
    """Model representing a single expense.

    The category must belong to the same property as the expense; the
    expense service checks this before every write.
    """

    __tablename__ = "expenses"

    # Foreign keys
    property_id: Mapped[int] = mapped_column(
        ForeignKey("properties.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    category_id: Mapped[int] = mapped_column(
        ForeignKey("categories.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    # Expense details
    date: Mapped[datetime.date] = mapped_column(
        Date,
        nullable=False,
        index=True,
        comment="Date the expense was incurred",
    )
    amount: Mapped[Decimal] = mapped_column(
        Numeric(12, 2),
        nullable=False,
    )
    description: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
    )
    receipt_path: Mapped[str | None] = mapped_column(
        String(500),
        nullable=True,
        comment="Path of the stored receipt, if any",
    )

    # Relationships
    property: Mapped["Property"] = relationship(  # noqa: F821
        "Property",
        back_populates="expenses",
    )
    category: Mapped["Category"] = relationship(  # noqa: F821
        "Category",
        back_populates="expenses",
    )

    __table_args__ = (Index("idx_expense_property_date", "property_id", "date"),)

    def __repr__(self) -> str:
        return (
            f"<Expense(id={self.id}, property_id={self.property_id}, "
            f"category_id={self.category_id}, amount={self.amount}, date={self.date})>"
        )


__all__ = ["Expense"]
