"""Pydantic response schemas for expense reports.

Built directly from the aggregation dataclasses (``from_attributes``); money
stays Decimal until serialization.
"""

import datetime

from homeledger.schemas.common import ApiModel, Money


class ReportPropertyResponse(ApiModel):
    id: int
    name: str


class ReportPeriodResponse(ApiModel):
    start_date: str
    end_date: str


class ReportSummaryResponse(ApiModel):
    total_expenses: Money
    total_payments: Money
    net_balance: Money
    expense_count: int


class CategoryTotalResponse(ApiModel):
    category: str
    total: Money
    count: int


class DebtorBalanceResponse(ApiModel):
    debtor: str
    total_paid: Money
    payment_count: int


class ReportExpenseResponse(ApiModel):
    id: int
    date: datetime.date
    amount: Money
    category: str
    description: str | None = None


class MonthTotalResponse(ApiModel):
    month: int
    total: Money
    count: int


class ReportResponse(ApiModel):
    """Report for a custom (possibly open-ended) date range."""

    property: ReportPropertyResponse
    period: ReportPeriodResponse
    summary: ReportSummaryResponse
    expenses_by_category: list[CategoryTotalResponse]
    debtor_balances: list[DebtorBalanceResponse]
    expenses: list[ReportExpenseResponse]


class YearlyReportResponse(ReportResponse):
    """Calendar-year report with exactly twelve monthly totals."""

    year: int
    monthly_breakdown: list[MonthTotalResponse]
