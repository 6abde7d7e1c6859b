"""Unit tests for report aggregation over ledger snapshots."""

from datetime import date
from decimal import Decimal

import pytest

from homeledger.api.errors import InvalidWindowError
from homeledger.services.aggregation import (
    DebtorSnapshot,
    ExpenseSnapshot,
    PaymentSnapshot,
    PropertySnapshot,
    build_monthly_breakdown,
    build_report,
    build_yearly_report,
    group_totals,
)
from homeledger.services.period_service import DateWindow, year_window

PROPERTY = PropertySnapshot(id=1, name="Beach House")


def expense(id, day, amount, category="Utilities", description=None):
    return ExpenseSnapshot(
        id=id,
        date=day,
        amount=Decimal(amount),
        category_name=category,
        description=description,
    )


def payment(id, day, amount):
    return PaymentSnapshot(id=id, date=day, amount=Decimal(amount))


class TestGroupTotals:
    """Tests for the explicit ordered grouping step."""

    def test_first_seen_order(self):
        items = [("b", 1), ("a", 2), ("b", 3)]

        groups = group_totals(items, key=lambda i: i[0], amount=lambda i: i[1])

        assert [g.key for g in groups] == ["b", "a"]
        assert groups[0].total == Decimal("4")
        assert groups[0].count == 2

    def test_preseeded_keys_always_present(self):
        groups = group_totals([("x", 5)], key=lambda i: i[0], amount=lambda i: i[1], keys=["y"])

        assert [(g.key, g.total, g.count) for g in groups] == [
            ("y", Decimal("0"), 0),
            ("x", Decimal("5"), 1),
        ]

    def test_keeps_full_precision(self):
        groups = group_totals(
            ["0.004", "0.004"], key=lambda _: "k", amount=lambda a: Decimal(a)
        )
        assert groups[0].total == Decimal("0.008")


class TestBuildReport:
    """Tests for build_report."""

    def test_year_scenario(self):
        """Only in-year expenses count; the 2023 expense is excluded."""
        expenses = [
            expense(1, date(2024, 1, 15), "100", "A"),
            expense(2, date(2024, 6, 15), "200", "A"),
            expense(3, date(2023, 12, 1), "50", "B"),
        ]

        report = build_report(PROPERTY, expenses, [], year_window(2024))

        assert report.summary.total_expenses == Decimal("300.00")
        assert report.summary.expense_count == 2
        assert [(c.category, c.total, c.count) for c in report.expenses_by_category] == [
            ("A", Decimal("300.00"), 2)
        ]

    def test_payment_rounds_half_up(self):
        debtors = [DebtorSnapshot(id=1, name="Bob", payments=(payment(1, date(2024, 3, 1), "50.005"),))]

        report = build_report(PROPERTY, [], debtors, DateWindow())

        assert report.debtor_balances[0].total_paid == Decimal("50.01")
        assert report.summary.total_payments == Decimal("50.01")

    def test_empty_ledger(self):
        report = build_report(PROPERTY, [], [], DateWindow())

        assert report.summary.total_expenses == Decimal("0.00")
        assert report.summary.total_payments == Decimal("0.00")
        assert report.summary.net_balance == Decimal("0.00")
        assert report.summary.expense_count == 0
        assert report.expenses_by_category == ()
        assert report.debtor_balances == ()
        assert report.expenses == ()

    def test_period_labels(self):
        open_report = build_report(PROPERTY, [], [], DateWindow())
        assert open_report.period.start_date == "Beginning"
        assert open_report.period.end_date == "Now"

        bounded = build_report(PROPERTY, [], [], DateWindow(date(2024, 1, 1), date(2024, 6, 30)))
        assert bounded.period.start_date == "2024-01-01"
        assert bounded.period.end_date == "2024-06-30"

    def test_window_bounds_inclusive(self):
        window = DateWindow(date(2024, 2, 1), date(2024, 2, 29))
        expenses = [
            expense(1, date(2024, 2, 1), "10"),
            expense(2, date(2024, 2, 29), "20"),
            expense(3, date(2024, 3, 1), "40"),
        ]

        report = build_report(PROPERTY, expenses, [], window)

        assert report.summary.expense_count == 2
        assert report.summary.total_expenses == Decimal("30.00")

    def test_debtor_without_payments_in_window_included(self):
        debtors = [
            DebtorSnapshot(id=1, name="Ann", payments=(payment(1, date(2023, 5, 1), "70"),)),
            DebtorSnapshot(id=2, name="Bob", payments=(payment(2, date(2024, 5, 1), "30"),)),
        ]

        report = build_report(PROPERTY, [], debtors, year_window(2024))

        assert [(d.debtor, d.total_paid, d.payment_count) for d in report.debtor_balances] == [
            ("Ann", Decimal("0.00"), 0),
            ("Bob", Decimal("30.00"), 1),
        ]

    def test_net_balance(self):
        expenses = [expense(1, date(2024, 1, 10), "120.50")]
        debtors = [DebtorSnapshot(id=1, name="Bob", payments=(payment(1, date(2024, 1, 20), "20.25"),))]

        report = build_report(PROPERTY, expenses, debtors, DateWindow())

        assert report.summary.net_balance == Decimal("100.25")

    def test_net_balance_can_be_negative(self):
        debtors = [DebtorSnapshot(id=1, name="Bob", payments=(payment(1, date(2024, 1, 20), "15"),))]

        report = build_report(PROPERTY, [expense(1, date(2024, 1, 1), "10")], debtors, DateWindow())

        assert report.summary.net_balance == Decimal("-5.00")

    def test_expenses_sorted_by_date_then_id(self):
        expenses = [
            expense(5, date(2024, 3, 1), "1", "Water"),
            expense(2, date(2024, 1, 1), "1", "Power"),
            expense(1, date(2024, 3, 1), "1", "Power"),
        ]

        report = build_report(PROPERTY, expenses, [], DateWindow())

        assert [e.id for e in report.expenses] == [2, 1, 5]
        # Category order follows the sorted expense order
        assert [c.category for c in report.expenses_by_category] == ["Power", "Water"]

    def test_expense_lines_keep_description(self):
        report = build_report(
            PROPERTY, [expense(1, date(2024, 1, 1), "9.99", "Food", "Groceries")], [], DateWindow()
        )

        line = report.expenses[0]
        assert (line.id, line.date, line.amount, line.category, line.description) == (
            1,
            date(2024, 1, 1),
            Decimal("9.99"),
            "Food",
            "Groceries",
        )

    def test_sum_consistency(self):
        expenses = [
            expense(1, date(2024, 1, 1), "0.005", "A"),
            expense(2, date(2024, 1, 2), "0.005", "A"),
            expense(3, date(2024, 1, 3), "33.333", "B"),
            expense(4, date(2024, 1, 4), "66.667", "C"),
        ]
        debtors = [
            DebtorSnapshot(id=1, name="Ann", payments=(payment(1, date(2024, 1, 5), "10.10"),)),
            DebtorSnapshot(id=2, name="Bob", payments=(payment(2, date(2024, 1, 6), "5.05"),)),
        ]

        report = build_report(PROPERTY, expenses, debtors, DateWindow())

        assert report.summary.total_expenses == sum(c.total for c in report.expenses_by_category)
        assert report.summary.total_payments == sum(d.total_paid for d in report.debtor_balances)
        assert (
            report.summary.net_balance
            == report.summary.total_expenses - report.summary.total_payments
        )

    def test_one_balance_per_debtor(self):
        debtors = [DebtorSnapshot(id=i, name=f"D{i}") for i in range(5)]

        report = build_report(PROPERTY, [], debtors, DateWindow())

        assert len(report.debtor_balances) == 5

    def test_idempotent(self):
        expenses = [expense(1, date(2024, 1, 1), "10"), expense(2, date(2024, 2, 1), "20", "B")]
        debtors = [DebtorSnapshot(id=1, name="Ann", payments=(payment(1, date(2024, 1, 5), "3"),))]

        first = build_report(PROPERTY, expenses, debtors, DateWindow())
        second = build_report(PROPERTY, expenses, debtors, DateWindow())

        assert first == second

    def test_yearly_fields_absent(self):
        report = build_report(PROPERTY, [], [], year_window(2024))

        assert report.year is None
        assert report.monthly_breakdown is None


class TestYearlyReport:
    """Tests for the yearly variant and monthly breakdown."""

    def test_single_january_expense(self):
        report = build_yearly_report(
            PROPERTY, [expense(1, date(2024, 1, 10), "100")], [], year_window(2024)
        )

        assert report.year == 2024
        months = report.monthly_breakdown
        assert [m.month for m in months] == list(range(1, 13))
        assert (months[0].total, months[0].count) == (Decimal("100.00"), 1)
        assert all((m.total, m.count) == (Decimal("0.00"), 0) for m in months[1:])

    def test_empty_year_has_twelve_zero_months(self):
        months = build_monthly_breakdown([], year_window(2023))

        assert len(months) == 12
        assert sum(m.total for m in months) == Decimal("0.00")

    def test_monthly_totals_match_summary(self):
        expenses = [
            expense(1, date(2024, 1, 31), "10.10"),
            expense(2, date(2024, 2, 1), "20.20"),
            expense(3, date(2024, 12, 31), "30.30"),
            expense(4, date(2025, 1, 1), "999"),
        ]

        report = build_yearly_report(PROPERTY, expenses, [], year_window(2024))

        assert sum(m.total for m in report.monthly_breakdown) == report.summary.total_expenses
        assert report.monthly_breakdown[11].count == 1

    def test_requires_full_year(self):
        with pytest.raises(InvalidWindowError):
            build_monthly_breakdown([], DateWindow(date(2024, 1, 1), date(2024, 6, 30)))

        with pytest.raises(InvalidWindowError):
            build_yearly_report(PROPERTY, [], [], DateWindow())
