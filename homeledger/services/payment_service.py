"""Payment service: reimbursements made by a debtor."""

import logging
from datetime import date
from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.orm import Session

from homeledger.models.payment import Payment
from homeledger.models.user import User
from homeledger.services.auth_service import authorize_debtor_access, authorize_payment_access

logger = logging.getLogger(__name__)


class PaymentService:
    """Service for payment database operations.

    Payments are addressed through their debtor; access is granted when the
    debtor's property belongs to the requesting user.
    """

    def __init__(self, db: Session):
        """Initialize with database session."""
        self.db = db

    def list_payments(self, debtor_id: int, user: User) -> list[Payment]:
        """List a debtor's payments, newest first."""
        authorize_debtor_access(self.db, debtor_id, user)
        stmt = (
            select(Payment)
            .where(Payment.debtor_id == debtor_id)
            .order_by(Payment.date.desc(), Payment.id.desc())
        )
        return list(self.db.scalars(stmt))

    def create_payment(
        self,
        debtor_id: int,
        user: User,
        amount: Decimal,
        payment_date: date,
        notes: str | None = None,
    ) -> Payment:
        """Record a payment.

        Raises:
            NotFoundError: Debtor missing or not owned by the user
        """
        authorize_debtor_access(self.db, debtor_id, user)
        payment = Payment(debtor_id=debtor_id, amount=amount, date=payment_date, notes=notes)
        self.db.add(payment)
        self.db.commit()
        self.db.refresh(payment)
        logger.info(
            "Created payment %d for debtor %d: %s on %s",
            payment.id,
            debtor_id,
            amount,
            payment_date.isoformat(),
        )
        return payment

    def update_payment(
        self,
        debtor_id: int,
        payment_id: int,
        user: User,
        amount: Decimal,
        payment_date: date,
        notes: str | None = None,
    ) -> Payment:
        """Replace a payment's fields.

        Raises:
            NotFoundError: Debtor or payment not found
        """
        payment = authorize_payment_access(self.db, debtor_id, payment_id, user)
        payment.amount = amount
        payment.date = payment_date
        payment.notes = notes
        self.db.commit()
        self.db.refresh(payment)
        logger.info("Updated payment %d", payment.id)
        return payment

    def delete_payment(self, debtor_id: int, payment_id: int, user: User) -> None:
        payment = authorize_payment_access(self.db, debtor_id, payment_id, user)
        self.db.delete(payment)
        self.db.commit()
        logger.info("Deleted payment %d of debtor %d", payment_id, debtor_id)


__all__ = ["PaymentService"]
