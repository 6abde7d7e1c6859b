"""Expense API routes."""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from homeledger.api.deps import RecordId, get_current_user
from homeledger.models.user import User
from homeledger.schemas.common import MAX_ID, MessageResponse
from homeledger.schemas.ledger import ExpenseRequest, ExpenseResponse
from homeledger.services import get_db
from homeledger.services.expense_service import ExpenseService

router = APIRouter(prefix="/api/expenses", tags=["expenses"])


@router.get("/property/{property_id}", response_model=list[ExpenseResponse])
async def list_expenses(
    property_id: RecordId,
    start_date: str | None = Query(None, alias="startDate"),  # noqa: B008
    end_date: str | None = Query(None, alias="endDate"),  # noqa: B008
    category_id: int | None = Query(None, alias="categoryId", ge=1, le=MAX_ID),  # noqa: B008
    user: User = Depends(get_current_user),  # noqa: B008
    db: Session = Depends(get_db),  # noqa: B008
) -> list[ExpenseResponse]:
    """List a property's expenses, newest first.

    Query:
        startDate / endDate: Inclusive ISO date bounds, each optional
        categoryId: Only expenses of this category

    Returns:
        200: Expenses with their category
        400: Unparseable or inverted date bounds
        404: Property not found
    """
    expenses = ExpenseService(db).list_expenses(
        property_id, user, start_date=start_date, end_date=end_date, category_id=category_id
    )
    return [ExpenseResponse.model_validate(e) for e in expenses]


@router.get("/property/{property_id}/{expense_id}", response_model=ExpenseResponse)
async def get_expense(
    property_id: RecordId,
    expense_id: RecordId,
    user: User = Depends(get_current_user),  # noqa: B008
    db: Session = Depends(get_db),  # noqa: B008
) -> ExpenseResponse:
    expense = ExpenseService(db).get_expense(property_id, expense_id, user)
    return ExpenseResponse.model_validate(expense)


@router.post(
    "/property/{property_id}",
    response_model=ExpenseResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_expense(
    property_id: RecordId,
    payload: ExpenseRequest,
    user: User = Depends(get_current_user),  # noqa: B008
    db: Session = Depends(get_db),  # noqa: B008
) -> ExpenseResponse:
    """Record an expense.

    Returns:
        201: Created expense
        404: Property not found, or category not found on this property
        422: Invalid body (negative amount, more than 2 decimals, bad date)
    """
    expense = ExpenseService(db).create_expense(
        property_id,
        user,
        category_id=payload.category_id,
        amount=payload.amount,
        expense_date=payload.date,
        description=payload.description,
        receipt_path=payload.receipt_path,
    )
    return ExpenseResponse.model_validate(expense)


@router.put("/property/{property_id}/{expense_id}", response_model=ExpenseResponse)
async def update_expense(
    property_id: RecordId,
    expense_id: RecordId,
    payload: ExpenseRequest,
    user: User = Depends(get_current_user),  # noqa: B008
    db: Session = Depends(get_db),  # noqa: B008
) -> ExpenseResponse:
    expense = ExpenseService(db).update_expense(
        property_id,
        expense_id,
        user,
        category_id=payload.category_id,
        amount=payload.amount,
        expense_date=payload.date,
        description=payload.description,
        receipt_path=payload.receipt_path,
    )
    return ExpenseResponse.model_validate(expense)


@router.delete("/property/{property_id}/{expense_id}", response_model=MessageResponse)
async def delete_expense(
    property_id: RecordId,
    expense_id: RecordId,
    user: User = Depends(get_current_user),  # noqa: B008
    db: Session = Depends(get_db),  # noqa: B008
) -> MessageResponse:
    ExpenseService(db).delete_expense(property_id, expense_id, user)
    return MessageResponse(message="Expense deleted successfully")
