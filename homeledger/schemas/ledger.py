"""Pydantic schemas for properties, categories, expenses, debtors and payments."""

import datetime
from typing import Annotated

from pydantic import Field, StringConstraints, field_validator

from homeledger.api.errors import InvalidDateError
from homeledger.schemas.common import AmountIn, ApiModel, IdIn, Money, Name
from homeledger.services.period_service import parse_report_date


def _coerce_day(value):
    # ISO datetimes are accepted and reduced to their calendar date
    if isinstance(value, str):
        try:
            parsed = parse_report_date(value, "date")
        except InvalidDateError as e:
            raise ValueError(e.message) from e
        if parsed is None:
            raise ValueError("Date is required")
        return parsed
    return value


# --------------------------------------------------------------------------
# Properties
# --------------------------------------------------------------------------


class PropertyRequest(ApiModel):
    """Request payload for creating or updating a property."""

    name: Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=200)]
    description: str | None = None


class PropertyCountsResponse(ApiModel):
    expenses: int = 0
    categories: int = 0
    debtors: int = 0


class PropertyResponse(ApiModel):
    """Response schema for a single property."""

    id: int
    name: str
    description: str | None = None
    created_at: datetime.datetime
    updated_at: datetime.datetime


class PropertyListItemResponse(PropertyResponse):
    """Property row of the listing, with child counts."""

    counts: PropertyCountsResponse


# --------------------------------------------------------------------------
# Categories
# --------------------------------------------------------------------------


class CategoryRequest(ApiModel):
    name: Name


class CategoryResponse(ApiModel):
    """Response schema for a category."""

    id: int
    name: str
    property_id: int
    created_at: datetime.datetime


class CategoryListItemResponse(CategoryResponse):
    expense_count: int = 0


class CategoryRefResponse(ApiModel):
    id: int
    name: str


# --------------------------------------------------------------------------
# Expenses
# --------------------------------------------------------------------------


class ExpenseRequest(ApiModel):
    """Request payload for creating or updating an expense."""

    category_id: IdIn
    amount: AmountIn = Field(..., ge=0)
    date: datetime.date
    description: str | None = None
    receipt_path: str | None = Field(None, max_length=500)

    @field_validator("date", mode="before")
    @classmethod
    def parse_date(cls, value):
        return _coerce_day(value)


class ExpenseResponse(ApiModel):
    """Response schema for an expense with its category."""

    id: int
    property_id: int
    category_id: int
    date: datetime.date
    amount: Money
    description: str | None = None
    receipt_path: str | None = None
    category: CategoryRefResponse
    created_at: datetime.datetime


# --------------------------------------------------------------------------
# Debtors and payments
# --------------------------------------------------------------------------


class PaymentRequest(ApiModel):
    """Request payload for creating or updating a payment."""

    amount: AmountIn = Field(..., gt=0)
    date: datetime.date
    notes: str | None = None

    @field_validator("date", mode="before")
    @classmethod
    def parse_date(cls, value):
        return _coerce_day(value)


class PaymentResponse(ApiModel):
    id: int
    debtor_id: int
    amount: Money
    date: datetime.date
    notes: str | None = None
    created_at: datetime.datetime


class DebtorRequest(ApiModel):
    name: Name


class DebtorResponse(ApiModel):
    """Debtor with every payment on record (not windowed) and their sum."""

    id: int
    name: str
    property_id: int
    created_at: datetime.datetime
    payments: list[PaymentResponse] = []
    total_paid: Money


class PropertyDetailResponse(PropertyResponse):
    """Property with its categories, debtors and number of expenses."""

    categories: list[CategoryResponse]
    debtors: list[DebtorResponse]
    expense_count: int
