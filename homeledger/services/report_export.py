"""Plain-text rendering of a report for download.

Numbers and dates are formatted with babel for the configured LOCALE
(default: en_AE).

Example:
    >>> print(render_report_text(report, "en_US"))
    EXPENSE REPORT
    Property: Beach House
    Period: 2024-01-01 to 2024-12-31
    ...
"""

import logging
import re
from datetime import date
from decimal import Decimal

from babel import Locale, UnknownLocaleError
from babel.dates import format_date as babel_format_date
from babel.numbers import format_decimal as babel_format_decimal

from homeledger.config import settings
from homeledger.services.aggregation import Report
from homeledger.services.money import to_cents

logger = logging.getLogger(__name__)

# Fallback when LOCALE is not a locale babel knows
DEFAULT_LOCALE = "en_AE"
AMOUNT_PATTERN = "#,##0.00"
MISSING_DESCRIPTION = "N/A"


def resolve_locale(locale_str: str | None = None) -> str:
    """Validate a locale string, falling back to DEFAULT_LOCALE.

    Args:
        locale_str: Locale such as 'en_US'; settings.locale when None

    Returns:
        Valid locale string
    """
    locale_str = locale_str or settings.locale
    try:
        Locale.parse(locale_str)
        return locale_str
    except (UnknownLocaleError, ValueError) as e:
        logger.warning("Invalid LOCALE '%s': %s. Falling back to '%s'", locale_str, e, DEFAULT_LOCALE)
        return DEFAULT_LOCALE


def format_amount(amount: Decimal, locale: str) -> str:
    """Format an amount with grouping and exactly two fraction digits.

    Example:
        >>> format_amount(Decimal("1234.5"), "en_US")
        '1,234.50'
    """
    return babel_format_decimal(to_cents(amount), format=AMOUNT_PATTERN, locale=locale)


def format_day(day: date, locale: str) -> str:
    return babel_format_date(day, format="medium", locale=locale)


def _section(title: str, lines: list[str]) -> list[str]:
    return ["", title, "-" * len(title), *lines]


def render_report_text(report: Report, locale: str | None = None) -> str:
    """Render a report as the downloadable plain-text export.

    Args:
        report: Report from build_report or build_yearly_report
        locale: Locale for numbers and dates; settings.locale when None

    Returns:
        Report text without trailing newline
    """
    loc = resolve_locale(locale)
    summary = report.summary

    lines = [
        "EXPENSE REPORT",
        f"Property: {report.property.name}",
        f"Period: {report.period.start_date} to {report.period.end_date}",
    ]
    lines += _section(
        "SUMMARY",
        [
            f"Total Expenses: {format_amount(summary.total_expenses, loc)}",
            f"Total Payments: {format_amount(summary.total_payments, loc)}",
            f"Net Balance: {format_amount(summary.net_balance, loc)}",
            f"Number of Expenses: {summary.expense_count}",
        ],
    )
    lines += _section(
        "EXPENSES BY CATEGORY",
        [
            f"{c.category}: {format_amount(c.total, loc)} ({c.count} expenses)"
            for c in report.expenses_by_category
        ],
    )
    lines += _section(
        "DEBTOR BALANCES",
        [
            f"{d.debtor}: {format_amount(d.total_paid, loc)} ({d.payment_count} payments)"
            for d in report.debtor_balances
        ],
    )
    if report.monthly_breakdown is not None:
        month_names = Locale.parse(loc).months["format"]["wide"]
        lines += _section(
            "MONTHLY BREAKDOWN",
            [
                f"{month_names[m.month]}: {format_amount(m.total, loc)} ({m.count} expenses)"
                for m in report.monthly_breakdown
            ],
        )
    lines += _section(
        "DETAILED EXPENSES",
        [
            " | ".join(
                (
                    format_day(e.date, loc),
                    e.category,
                    format_amount(e.amount, loc),
                    e.description or MISSING_DESCRIPTION,
                )
            )
            for e in report.expenses
        ],
    )
    return "\n".join(lines)


def export_filename(report: Report) -> str:
    """Download name, e.g. ``expense-report-Beach-House.txt``."""
    slug = re.sub(r"[^A-Za-z0-9_.-]+", "-", report.property.name.strip()).strip("-") or "property"
    if report.year is not None:
        return f"expense-report-{slug}-{report.year}.txt"
    return f"expense-report-{slug}.txt"


__all__ = [
    "DEFAULT_LOCALE",
    "resolve_locale",
    "format_amount",
    "format_day",
    "render_report_text",
    "export_filename",
]
