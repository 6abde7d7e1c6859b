"""Payment ORM model for reimbursements received from debtors."""

import datetime
from decimal import Decimal

from sqlalchemy import Date, ForeignKey, Index, Numeric, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from homeledger.models import Base, BaseModel


class Payment(Base, BaseModel):
    """Model representing a reimbursement payment.

    Links a debtor to an amount, a date, and optional notes.
    """

    __tablename__ = "payments"

    # Foreign keys
    debtor_id: Mapped[int] = mapped_column(
        ForeignKey("debtors.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        comment="Debtor who made the payment",
    )

    # Payment details
    amount: Mapped[Decimal] = mapped_column(
        Numeric(12, 2),
        nullable=False,
    )
    date: Mapped[datetime.date] = mapped_column(
        Date,
        nullable=False,
        index=True,
        comment="Date of payment",
    )
    notes: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
    )

    # Relationships
    debtor: Mapped["Debtor"] = relationship(  # noqa: F821
        "Debtor",
        back_populates="payments",
    )

    __table_args__ = (Index("idx_payment_debtor_date", "debtor_id", "date"),)

    def __repr__(self) -> str:
        return (
            f"<Payment(id={self.id}, debtor_id={self.debtor_id}, "
            f"amount={self.amount}, date={self.date})>"
        )


__all__ = ["Payment"]
