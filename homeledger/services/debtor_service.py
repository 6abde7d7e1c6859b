"""Debtor service: people who reimburse a property's expenses."""

import logging
from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload

from homeledger.api.errors import DuplicateNameError, NotFoundError
from homeledger.models.debtor import Debtor
from homeledger.models.user import User
from homeledger.services.auth_service import authorize_property_access
from homeledger.services.money import ZERO, coerce_decimal, to_cents

logger = logging.getLogger(__name__)


def total_paid(debtor: Debtor) -> Decimal:
    """Sum of all of a debtor's payments, regardless of date."""
    return to_cents(sum((coerce_decimal(p.amount) for p in debtor.payments), ZERO))


class DebtorService:
    """Service for debtor database operations."""

    def __init__(self, db: Session):
        """Initialize with database session."""
        self.db = db

    def list_debtors(self, property_id: int, user: User) -> list[Debtor]:
        """List a property's debtors by name with all of their payments loaded.

        The listing is not windowed: every payment is included. Reports are
        where payments get filtered by date.
        """
        authorize_property_access(self.db, property_id, user)
        stmt = (
            select(Debtor)
            .options(selectinload(Debtor.payments))
            .where(Debtor.property_id == property_id)
            .order_by(Debtor.name)
        )
        return list(self.db.scalars(stmt))

    def get_debtor(self, property_id: int, debtor_id: int) -> Debtor:
        debtor = self.db.get(Debtor, debtor_id)
        if debtor is None or debtor.property_id != property_id:
            raise NotFoundError("Debtor not found")
        return debtor

    def _ensure_unique(self, property_id: int, name: str, exclude_id: int | None = None) -> None:
        stmt = select(Debtor.id).where(Debtor.property_id == property_id, Debtor.name == name)
        if exclude_id is not None:
            stmt = stmt.where(Debtor.id != exclude_id)
        if self.db.scalar(stmt) is not None:
            logger.warning("Debtor %r already exists on property %d", name, property_id)
            raise DuplicateNameError("Debtor already exists")

    def _commit_name(self, property_id: int, name: str) -> None:
        # A concurrent insert can pass _ensure_unique; the unique constraint decides
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            logger.warning("Debtor %r already exists on property %d", name, property_id)
            raise DuplicateNameError("Debtor already exists") from e

    def create_debtor(self, property_id: int, user: User, name: str) -> Debtor:
        """Create a debtor.

        Raises:
            NotFoundError: Property missing or not owned by the user
            DuplicateNameError: A debtor with this name already exists
        """
        authorize_property_access(self.db, property_id, user)
        self._ensure_unique(property_id, name)
        debtor = Debtor(property_id=property_id, name=name)
        self.db.add(debtor)
        self._commit_name(property_id, name)
        self.db.refresh(debtor)
        logger.info("Created debtor %d (%s) on property %d", debtor.id, name, property_id)
        return debtor

    def update_debtor(self, property_id: int, debtor_id: int, user: User, name: str) -> Debtor:
        authorize_property_access(self.db, property_id, user)
        debtor = self.get_debtor(property_id, debtor_id)
        self._ensure_unique(property_id, name, exclude_id=debtor.id)
        debtor.name = name
        self._commit_name(property_id, name)
        self.db.refresh(debtor)
        logger.info("Renamed debtor %d to %s", debtor.id, name)
        return debtor

    def delete_debtor(self, property_id: int, debtor_id: int, user: User) -> None:
        """Delete a debtor and all of their payments."""
        authorize_property_access(self.db, property_id, user)
        debtor = self.get_debtor(property_id, debtor_id)
        self.db.delete(debtor)
        self.db.commit()
        logger.info("Deleted debtor %d from property %d", debtor_id, property_id)


__all__ = ["DebtorService", "total_paid"]
