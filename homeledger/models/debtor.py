"""Debtor ORM model: a person who reimburses a property's expenses."""

from sqlalchemy import ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from homeledger.models import Base, BaseModel


class Debtor(Base, BaseModel):
    """Debtor of a property. Names are unique per property."""

    __tablename__ = "debtors"

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
        back_populates="debtors",
    )
    payments: Mapped[list["Payment"]] = relationship(  # noqa: F821
        "Payment",
        back_populates="debtor",
        cascade="all, delete-orphan",
        order_by="[Payment.date.desc(), Payment.id.desc()]",
    )

    __table_args__ = (
        UniqueConstraint("property_id", "name", name="uq_debtor_property_name"),
    )

    def __repr__(self) -> str:
        return f"<Debtor(id={self.id}, property_id={self.property_id}, name={self.name!r})>"


__all__ = ["Debtor"]
