"""Category service: CRUD for a property's expense categories."""

import logging

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from homeledger.api.errors import DuplicateNameError, NotFoundError
from homeledger.models.category import Category
from homeledger.models.expense import Expense
from homeledger.models.user import User
from homeledger.services.auth_service import authorize_property_access

logger = logging.getLogger(__name__)


class CategoryService:
    """Service for category database operations.

    Every method first checks that the property belongs to the requesting user.
    """

    def __init__(self, db: Session):
        """Initialize with database session."""
        self.db = db

    def list_categories(self, property_id: int, user: User) -> list[tuple[Category, int]]:
        """List a property's categories by name with their expense counts."""
        authorize_property_access(self.db, property_id, user)
        stmt = (
            select(Category, func.count(Expense.id))
            .outerjoin(Expense, Expense.category_id == Category.id)
            .where(Category.property_id == property_id)
            .group_by(Category.id)
            .order_by(Category.name)
        )
        return [(category, count) for category, count in self.db.execute(stmt)]

    def get_category(self, property_id: int, category_id: int) -> Category:
        """Get a category of the given property.

        Raises:
            NotFoundError: If no such category exists on the property
        """
        category = self.db.scalar(
            select(Category).where(
                Category.id == category_id, Category.property_id == property_id
            )
        )
        if not category:
            raise NotFoundError("Category not found")
        return category

    def _ensure_unique(self, property_id: int, name: str, exclude_id: int | None = None) -> None:
        stmt = select(Category.id).where(Category.property_id == property_id, Category.name == name)
        if exclude_id is not None:
            stmt = stmt.where(Category.id != exclude_id)
        if self.db.scalar(stmt) is not None:
            logger.warning("Category %r already exists on property %d", name, property_id)
            raise DuplicateNameError("Category already exists")

    def _commit_name(self, property_id: int, name: str) -> None:
        # A concurrent insert can pass _ensure_unique; the unique constraint decides
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            logger.warning("Category %r already exists on property %d", name, property_id)
            raise DuplicateNameError("Category already exists") from e

    def create_category(self, property_id: int, user: User, name: str) -> Category:
        """Create a category.

        Raises:
            NotFoundError: Property missing or not owned by the user
            DuplicateNameError: A category with this name already exists
        """
        authorize_property_access(self.db, property_id, user)
        self._ensure_unique(property_id, name)
        category = Category(property_id=property_id, name=name)
        self.db.add(category)
        self._commit_name(property_id, name)
        self.db.refresh(category)
        logger.info("Created category %d (%s) on property %d", category.id, name, property_id)
        return category

    def update_category(self, property_id: int, category_id: int, user: User, name: str) -> Category:
        """Rename a category.

        Raises:
            NotFoundError: Property or category not found
            DuplicateNameError: Another category already has this name
        """
        authorize_property_access(self.db, property_id, user)
        category = self.get_category(property_id, category_id)
        self._ensure_unique(property_id, name, exclude_id=category.id)
        category.name = name
        self._commit_name(property_id, name)
        self.db.refresh(category)
        logger.info("Renamed category %d to %s", category.id, name)
        return category

    def delete_category(self, property_id: int, category_id: int, user: User) -> None:
        """Delete a category and its expenses.

        Raises:
            NotFoundError: Property or category not found
        """
        authorize_property_access(self.db, property_id, user)
        category = self.get_category(property_id, category_id)
        self.db.delete(category)
        self.db.commit()
        logger.info("Deleted category %d from property %d", category_id, property_id)


__all__ = ["CategoryService"]
