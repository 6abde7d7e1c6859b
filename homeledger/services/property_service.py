"""Property service: ownership-scoped CRUD for a user's properties."""

import logging
from dataclasses import dataclass

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from homeledger.models.category import Category
from homeledger.models.debtor import Debtor
from homeledger.models.expense import Expense
from homeledger.models.property import Property
from homeledger.models.user import User
from homeledger.services.auth_service import authorize_property_access

logger = logging.getLogger(__name__)


@dataclass
class PropertyCounts:
    """Number of child records attached to a property."""

    expenses: int = 0
    categories: int = 0
    debtors: int = 0


class PropertyService:
    """Service for property database operations."""

    def __init__(self, db: Session):
        """Initialize with database session."""
        self.db = db

    def _count_by_property(self, model, property_ids: list[int]) -> dict[int, int]:
        if not property_ids:
            return {}
        stmt = (
            select(model.property_id, func.count(model.id))
            .where(model.property_id.in_(property_ids))
            .group_by(model.property_id)
        )
        return {property_id: count for property_id, count in self.db.execute(stmt)}

    def count_children(self, property_ids: list[int]) -> dict[int, PropertyCounts]:
        """Expense, category and debtor counts for each of the given properties."""
        expenses = self._count_by_property(Expense, property_ids)
        categories = self._count_by_property(Category, property_ids)
        debtors = self._count_by_property(Debtor, property_ids)
        return {
            pid: PropertyCounts(
                expenses=expenses.get(pid, 0),
                categories=categories.get(pid, 0),
                debtors=debtors.get(pid, 0),
            )
            for pid in property_ids
        }

    def list_properties(self, user: User) -> list[tuple[Property, PropertyCounts]]:
        """List the user's properties, newest first, with child counts.

        Args:
            user: Requesting user

        Returns:
            List of (Property, PropertyCounts) pairs
        """
        properties = list(
            self.db.scalars(
                select(Property)
                .where(Property.user_id == user.id)
                .order_by(Property.created_at.desc(), Property.id.desc())
            )
        )
        counts = self.count_children([p.id for p in properties])
        return [(p, counts[p.id]) for p in properties]

    def get_property(self, property_id: int, user: User) -> tuple[Property, PropertyCounts]:
        """Get one property with its child counts.

        Raises:
            NotFoundError: Property missing or not owned by the user
        """
        prop = authorize_property_access(self.db, property_id, user)
        return prop, self.count_children([prop.id])[prop.id]

    def create_property(self, user: User, name: str, description: str | None = None) -> Property:
        prop = Property(user_id=user.id, name=name, description=description)
        self.db.add(prop)
        self.db.commit()
        self.db.refresh(prop)
        logger.info("Created property: id=%d, user_id=%d, name=%s", prop.id, user.id, name)
        return prop

    def update_property(
        self, property_id: int, user: User, name: str, description: str | None = None
    ) -> Property:
        """Replace a property's name and description.

        Raises:
            NotFoundError: Property missing or not owned by the user
        """
        prop = authorize_property_access(self.db, property_id, user)
        prop.name = name
        prop.description = description
        self.db.commit()
        self.db.refresh(prop)
        logger.info("Updated property %d", prop.id)
        return prop

    def delete_property(self, property_id: int, user: User) -> None:
        """Delete a property with all its categories, expenses, debtors and payments.

        Raises:
            NotFoundError: Property missing or not owned by the user
        """
        prop = authorize_property_access(self.db, property_id, user)
        self.db.delete(prop)
        self.db.commit()
        logger.info("Deleted property %d", property_id)


__all__ = ["PropertyService", "PropertyCounts"]
