"""Expense service: record, filter and edit a property's expenses."""

import logging
from datetime import date
from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.orm import Session, joinedload

from homeledger.api.errors import NotFoundError
from homeledger.models.category import Category
from homeledger.models.expense import Expense
from homeledger.models.user import User
from homeledger.services.auth_service import authorize_property_access
from homeledger.services.period_service import custom_window

logger = logging.getLogger(__name__)


class ExpenseService:
    """Service for expense database operations."""

    def __init__(self, db: Session):
        """Initialize with database session."""
        self.db = db

    def _get_category(self, property_id: int, category_id: int) -> Category:
        # The category must hang off the same property as the expense
        category = self.db.get(Category, category_id)
        if category is None or category.property_id != property_id:
            raise NotFoundError("Category not found")
        return category

    def _get_expense(self, property_id: int, expense_id: int) -> Expense:
        expense = self.db.get(Expense, expense_id)
        if expense is None or expense.property_id != property_id:
            raise NotFoundError("Expense not found")
        return expense

    def list_expenses(
        self,
        property_id: int,
        user: User,
        start_date: str | None = None,
        end_date: str | None = None,
        category_id: int | None = None,
    ) -> list[Expense]:
        """List a property's expenses, newest first.

        Args:
            property_id: Property to list
            user: Requesting user
            start_date: Optional inclusive ISO lower bound
            end_date: Optional inclusive ISO upper bound
            category_id: Optional category filter

        Returns:
            Expenses with their category loaded

        Raises:
            NotFoundError: Property missing or not owned by the user
            InvalidDateError: A bound does not parse
            InvalidWindowError: start_date is after end_date
        """
        authorize_property_access(self.db, property_id, user)
        window = custom_window(start_date, end_date)

        stmt = (
            select(Expense)
            .options(joinedload(Expense.category))
            .where(Expense.property_id == property_id)
        )
        if window.start is not None:
            stmt = stmt.where(Expense.date >= window.start)
        if window.end is not None:
            stmt = stmt.where(Expense.date <= window.end)
        if category_id is not None:
            stmt = stmt.where(Expense.category_id == category_id)

        stmt = stmt.order_by(Expense.date.desc(), Expense.id.desc())
        return list(self.db.scalars(stmt))

    def get_expense(self, property_id: int, expense_id: int, user: User) -> Expense:
        authorize_property_access(self.db, property_id, user)
        return self._get_expense(property_id, expense_id)

    def create_expense(
        self,
        property_id: int,
        user: User,
        category_id: int,
        amount: Decimal,
        expense_date: date,
        description: str | None = None,
        receipt_path: str | None = None,
    ) -> Expense:
        """Record an expense.

        Raises:
            NotFoundError: Property or category not found, or the category
                belongs to a different property
        """
        authorize_property_access(self.db, property_id, user)
        self._get_category(property_id, category_id)

        expense = Expense(
            property_id=property_id,
            category_id=category_id,
            amount=amount,
            date=expense_date,
            description=description,
            receipt_path=receipt_path,
        )
        self.db.add(expense)
        self.db.commit()
        self.db.refresh(expense)
        logger.info(
            "Created expense %d on property %d: %s on %s",
            expense.id,
            property_id,
            amount,
            expense_date.isoformat(),
        )
        return expense

    def update_expense(
        self,
        property_id: int,
        expense_id: int,
        user: User,
        category_id: int,
        amount: Decimal,
        expense_date: date,
        description: str | None = None,
        receipt_path: str | None = None,
    ) -> Expense:
        """Replace an expense's fields.

        Raises:
            NotFoundError: Property, expense or category not found
        """
        authorize_property_access(self.db, property_id, user)
        expense = self._get_expense(property_id, expense_id)
        self._get_category(property_id, category_id)

        expense.category_id = category_id
        expense.amount = amount
        expense.date = expense_date
        expense.description = description
        expense.receipt_path = receipt_path
        self.db.commit()
        self.db.refresh(expense)
        logger.info("Updated expense %d", expense.id)
        return expense

    def delete_expense(self, property_id: int, expense_id: int, user: User) -> None:
        authorize_property_access(self.db, property_id, user)
        expense = self._get_expense(property_id, expense_id)
        self.db.delete(expense)
        self.db.commit()
        logger.info("Deleted expense %d from property %d", expense_id, property_id)


__all__ = ["ExpenseService"]
