"""Report service: load a property's ledger and hand it to the aggregator.

This is the only place where reports touch the database. The ORM rows are
frozen into snapshots first, so the aggregation itself stays pure.
"""

import logging

from sqlalchemy import select
from sqlalchemy.orm import Session, joinedload, selectinload

from homeledger.models.debtor import Debtor
from homeledger.models.expense import Expense
from homeledger.models.property import Property
from homeledger.models.user import User
from homeledger.services.aggregation import (
    DebtorSnapshot,
    ExpenseSnapshot,
    PaymentSnapshot,
    PropertySnapshot,
    Report,
    build_report,
    build_yearly_report,
)
from homeledger.services.auth_service import authorize_property_access
from homeledger.services.period_service import DateWindow, custom_window, year_window

logger = logging.getLogger(__name__)


def snapshot_property(prop: Property) -> PropertySnapshot:
    return PropertySnapshot(id=prop.id, name=prop.name)


def snapshot_expense(expense: Expense) -> ExpenseSnapshot:
    return ExpenseSnapshot(
        id=expense.id,
        date=expense.date,
        amount=expense.amount,
        category_name=expense.category.name,
        description=expense.description,
    )


def snapshot_debtor(debtor: Debtor) -> DebtorSnapshot:
    return DebtorSnapshot(
        id=debtor.id,
        name=debtor.name,
        payments=tuple(
            PaymentSnapshot(id=p.id, date=p.date, amount=p.amount, notes=p.notes)
            for p in debtor.payments
        ),
    )


class ReportService:
    """Service producing expense reports for a user's property."""

    def __init__(self, db: Session):
        """Initialize with database session."""
        self.db = db

    def load_ledger(
        self, property_id: int, user: User
    ) -> tuple[PropertySnapshot, list[ExpenseSnapshot], list[DebtorSnapshot]]:
        """Load a property's expenses and debtors (with all payments) as snapshots.

        Raises:
            NotFoundError: Property missing or not owned by the user
        """
        prop = authorize_property_access(self.db, property_id, user)

        expenses = self.db.scalars(
            select(Expense)
            .options(joinedload(Expense.category))
            .where(Expense.property_id == property_id)
        )
        debtors = self.db.scalars(
            select(Debtor)
            .options(selectinload(Debtor.payments))
            .where(Debtor.property_id == property_id)
            .order_by(Debtor.name, Debtor.id)
        )
        return (
            snapshot_property(prop),
            [snapshot_expense(e) for e in expenses],
            [snapshot_debtor(d) for d in debtors],
        )

    def _log_report(self, report: Report, window: DateWindow) -> None:
        logger.info(
            "Report for property %d (%s..%s): %d expenses, %d debtors, total=%s, payments=%s",
            report.property.id,
            window.start_label(),
            window.end_label(),
            report.summary.expense_count,
            len(report.debtor_balances),
            report.summary.total_expenses,
            report.summary.total_payments,
        )

    def get_report(
        self,
        property_id: int,
        user: User,
        start_date: str | None = None,
        end_date: str | None = None,
    ) -> Report:
        """Build a report for an optional custom date range.

        Args:
            property_id: Property to report on
            user: Requesting user
            start_date: Optional inclusive ISO lower bound
            end_date: Optional inclusive ISO upper bound

        Raises:
            InvalidDateError: A bound does not parse
            InvalidWindowError: start_date is after end_date
            NotFoundError: Property missing or not owned by the user
        """
        window = custom_window(start_date, end_date)
        prop, expenses, debtors = self.load_ledger(property_id, user)
        report = build_report(prop, expenses, debtors, window)
        self._log_report(report, window)
        return report

    def get_yearly_report(self, property_id: int, user: User, year: int) -> Report:
        """Build a calendar-year report with a 12-month breakdown.

        Raises:
            InvalidDateError: Year outside 1..9999
            NotFoundError: Property missing or not owned by the user
        """
        window = year_window(year)
        prop, expenses, debtors = self.load_ledger(property_id, user)
        report = build_yearly_report(prop, expenses, debtors, window)
        self._log_report(report, window)
        return report


__all__ = [
    "ReportService",
    "snapshot_property",
    "snapshot_expense",
    "snapshot_debtor",
]
