"""Category ORM model for grouping expenses within a property."""

from sqlalchemy import ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from homeledger.models import Base, BaseModel


class Category(Base, BaseModel):
    """Expense category. Names are unique per property."""

    __tablename__ = "categories"

    name: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
    )
    property_id: Mapped[int] = mapped_column(
        ForeignKey("properties.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    # Relationships
    property: Mapped["Property"] = relationship(  # noqa: F821
        "Property",
        back_populates="categories",
    )
    expenses: Mapped[list["Expense"]] = relationship(  # noqa: F821
        "Expense",
        back_populates="category",
        cascade="all, delete-orphan",
    )

    __table_args__ = (
        UniqueConstraint("property_id", "name", name="uq_category_property_name"),
    )

    def __repr__(self) -> str:
        return f"<Category(id={self.id}, property_id={self.property_id}, name={self.name!r})>"


__all__ = ["Category"]
