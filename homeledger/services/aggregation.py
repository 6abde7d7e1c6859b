"""Report aggregation over an immutable snapshot of one property's ledger.

Everything here is a pure function of its inputs: no database access, no
clock, no shared state. Callers load the data (see ``report_service``),
freeze it into snapshots and hand it over together with a ``DateWindow``.

Amounts stay Decimal from input to output. Totals are summed at full
precision and rounded to cents (ROUND_HALF_UP) once, when a result value is
produced.
"""

import logging
from dataclasses import dataclass, replace
from datetime import date
from decimal import Decimal
from typing import Callable, Hashable, Iterable, Sequence

from homeledger.api.errors import InvalidWindowError
from homeledger.services.money import ZERO, coerce_decimal, to_cents
from homeledger.services.period_service import DateWindow

logger = logging.getLogger(__name__)


# --------------------------------------------------------------------------
# Input snapshots
# --------------------------------------------------------------------------


@dataclass(frozen=True)
class PropertySnapshot:
    id: int
    name: str


@dataclass(frozen=True)
class ExpenseSnapshot:
    id: int
    date: date
    amount: Decimal
    category_name: str
    description: str | None = None


@dataclass(frozen=True)
class PaymentSnapshot:
    id: int
    date: date
    amount: Decimal
    notes: str | None = None


@dataclass(frozen=True)
class DebtorSnapshot:
    id: int
    name: str
    payments: tuple[PaymentSnapshot, ...] = ()


# --------------------------------------------------------------------------
# Report values
# --------------------------------------------------------------------------


@dataclass(frozen=True)
class GroupTotal:
    """One row of an explicit, ordered grouping: key, summed amount, row count."""

    key: Hashable
    total: Decimal
    count: int


@dataclass(frozen=True)
class ReportPeriod:
    start_date: str
    end_date: str


@dataclass(frozen=True)
class ReportSummary:
    total_expenses: Decimal
    total_payments: Decimal
    net_balance: Decimal
    expense_count: int


@dataclass(frozen=True)
class CategoryTotal:
    category: str
    total: Decimal
    count: int


@dataclass(frozen=True)
class DebtorBalance:
    debtor: str
    total_paid: Decimal
    payment_count: int


@dataclass(frozen=True)
class ExpenseLine:
    id: int
    date: date
    amount: Decimal
    category: str
    description: str | None = None


@dataclass(frozen=True)
class MonthTotal:
    month: int
    total: Decimal
    count: int


@dataclass(frozen=True)
class Report:
    """Aggregated view of a property's expenses and reimbursements for a window."""

    property: PropertySnapshot
    period: ReportPeriod
    summary: ReportSummary
    expenses_by_category: tuple[CategoryTotal, ...]
    debtor_balances: tuple[DebtorBalance, ...]
    expenses: tuple[ExpenseLine, ...]
    year: int | None = None
    monthly_breakdown: tuple[MonthTotal, ...] | None = None


# --------------------------------------------------------------------------
# Aggregation steps
# --------------------------------------------------------------------------


def group_totals(
    items: Iterable,
    key: Callable,
    amount: Callable,
    keys: Sequence[Hashable] = (),
) -> list[GroupTotal]:
    """Sum ``amount(item)`` per ``key(item)`` into an ordered list.

    Order is ``keys`` first (pre-seeded with zero totals, so they always
    appear), then any other key in first-seen order. Totals are returned at
    full precision; rounding is left to the caller.
    """
    order: list[Hashable] = list(keys)
    totals: dict[Hashable, Decimal] = {k: ZERO for k in order}
    counts: dict[Hashable, int] = {k: 0 for k in order}

    for item in items:
        k = key(item)
        if k not in totals:
            order.append(k)
            totals[k] = ZERO
            counts[k] = 0
        totals[k] += coerce_decimal(amount(item))
        counts[k] += 1

    return [GroupTotal(key=k, total=totals[k], count=counts[k]) for k in order]


def filter_expenses(
    expenses: Iterable[ExpenseSnapshot], window: DateWindow
) -> list[ExpenseSnapshot]:
    """Expenses inside the window, ordered by date then id."""
    selected = [e for e in expenses if window.contains(e.date)]
    selected.sort(key=lambda e: (e.date, e.id))
    return selected


def filter_payments(
    payments: Iterable[PaymentSnapshot], window: DateWindow
) -> list[PaymentSnapshot]:
    """Payments inside the window."""
    return [p for p in payments if window.contains(p.date)]


def compute_debtor_balances(
    debtors: Sequence[DebtorSnapshot], window: DateWindow
) -> list[tuple[DebtorSnapshot, Decimal, int]]:
    """Unrounded paid total and payment count per debtor, one entry per debtor."""
    balances = []
    for debtor in debtors:
        payments = filter_payments(debtor.payments, window)
        paid = sum((coerce_decimal(p.amount) for p in payments), ZERO)
        balances.append((debtor, paid, len(payments)))
    return balances


def build_report(
    property: PropertySnapshot,
    expenses: Sequence[ExpenseSnapshot],
    debtors: Sequence[DebtorSnapshot],
    window: DateWindow,
) -> Report:
    """Build the period report for one property.

    Args:
        property: Property being reported on
        expenses: All of the property's expenses (filtered here)
        debtors: All of the property's debtors with all their payments
        window: Inclusive date window applied to expenses and payments alike

    Returns:
        Report with totals, category breakdown, debtor balances and the
        windowed expense list
    """
    selected = filter_expenses(expenses, window)

    total_expenses = sum((coerce_decimal(e.amount) for e in selected), ZERO)
    by_category = group_totals(selected, key=lambda e: e.category_name, amount=lambda e: e.amount)

    balances = compute_debtor_balances(debtors, window)
    total_payments = sum((paid for _, paid, _ in balances), ZERO)

    total_expenses = to_cents(total_expenses)
    total_payments = to_cents(total_payments)
    summary = ReportSummary(
        total_expenses=total_expenses,
        total_payments=total_payments,
        net_balance=total_expenses - total_payments,
        expense_count=len(selected),
    )

    logger.debug(
        "Built report for property %d: %d expenses, %d debtors, window=%s..%s",
        property.id,
        len(selected),
        len(balances),
        window.start_label(),
        window.end_label(),
    )

    return Report(
        property=property,
        period=ReportPeriod(start_date=window.start_label(), end_date=window.end_label()),
        summary=summary,
        expenses_by_category=tuple(
            CategoryTotal(category=g.key, total=to_cents(g.total), count=g.count)
            for g in by_category
        ),
        debtor_balances=tuple(
            DebtorBalance(debtor=d.name, total_paid=to_cents(paid), payment_count=count)
            for d, paid, count in balances
        ),
        expenses=tuple(
            ExpenseLine(
                id=e.id,
                date=e.date,
                amount=coerce_decimal(e.amount),
                category=e.category_name,
                description=e.description,
            )
            for e in selected
        ),
    )


def build_monthly_breakdown(
    expenses: Iterable[ExpenseSnapshot], window: DateWindow
) -> tuple[MonthTotal, ...]:
    """Twelve month totals (Jan..Dec) for a full-year window.

    Raises:
        InvalidWindowError: If the window is not exactly one calendar year
    """
    if not window.is_full_year():
        raise InvalidWindowError("Monthly breakdown requires a full calendar year window")

    selected = filter_expenses(expenses, window)
    groups = group_totals(
        selected,
        key=lambda e: e.date.month,
        amount=lambda e: e.amount,
        keys=range(1, 13),
    )
    return tuple(MonthTotal(month=g.key, total=to_cents(g.total), count=g.count) for g in groups)


def build_yearly_report(
    property: PropertySnapshot,
    expenses: Sequence[ExpenseSnapshot],
    debtors: Sequence[DebtorSnapshot],
    window: DateWindow,
) -> Report:
    """Build the period report plus ``year`` and a 12-entry monthly breakdown.

    Raises:
        InvalidWindowError: If the window is not exactly one calendar year
    """
    # Raises for a non-year window before the main report is built
    monthly = build_monthly_breakdown(expenses, window)
    report = build_report(property, expenses, debtors, window)
    return replace(report, year=window.year, monthly_breakdown=monthly)


__all__ = [
    "PropertySnapshot",
    "ExpenseSnapshot",
    "PaymentSnapshot",
    "DebtorSnapshot",
    "GroupTotal",
    "Report",
    "ReportPeriod",
    "ReportSummary",
    "CategoryTotal",
    "DebtorBalance",
    "ExpenseLine",
    "MonthTotal",
    "group_totals",
    "filter_expenses",
    "filter_payments",
    "compute_debtor_balances",
    "build_report",
    "build_monthly_breakdown",
    "build_yearly_report",
]
