"""Payment API routes."""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from homeledger.api.deps import RecordId, get_current_user
from homeledger.models.user import User
from homeledger.schemas.common import MessageResponse
from homeledger.schemas.ledger import PaymentRequest, PaymentResponse
from homeledger.services import get_db
from homeledger.services.payment_service import PaymentService

router = APIRouter(prefix="/api/payments", tags=["payments"])


@router.get("/debtor/{debtor_id}", response_model=list[PaymentResponse])
async def list_payments(
    debtor_id: RecordId,
    user: User = Depends(get_current_user),  # noqa: B008
    db: Session = Depends(get_db),  # noqa: B008
) -> list[PaymentResponse]:
    """A debtor's payments, newest first."""
    return [
        PaymentResponse.model_validate(p) for p in PaymentService(db).list_payments(debtor_id, user)
    ]


@router.post(
    "/debtor/{debtor_id}",
    response_model=PaymentResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_payment(
    debtor_id: RecordId,
    payload: PaymentRequest,
    user: User = Depends(get_current_user),  # noqa: B008
    db: Session = Depends(get_db),  # noqa: B008
) -> PaymentResponse:
    """Record a payment.

    Returns:
        201: Created payment
        404: Debtor not found
        422: Invalid body (non-positive amount, more than 2 decimals, bad date)
    """
    payment = PaymentService(db).create_payment(
        debtor_id, user, amount=payload.amount, payment_date=payload.date, notes=payload.notes
    )
    return PaymentResponse.model_validate(payment)


@router.put("/debtor/{debtor_id}/{payment_id}", response_model=PaymentResponse)
async def update_payment(
    debtor_id: RecordId,
    payment_id: RecordId,
    payload: PaymentRequest,
    user: User = Depends(get_current_user),  # noqa: B008
    db: Session = Depends(get_db),  # noqa: B008
) -> PaymentResponse:
    payment = PaymentService(db).update_payment(
        debtor_id,
        payment_id,
        user,
        amount=payload.amount,
        payment_date=payload.date,
        notes=payload.notes,
    )
    return PaymentResponse.model_validate(payment)


@router.delete("/debtor/{debtor_id}/{payment_id}", response_model=MessageResponse)
async def delete_payment(
    debtor_id: RecordId,
    payment_id: RecordId,
    user: User = Depends(get_current_user),  # noqa: B008
    db: Session = Depends(get_db),  # noqa: B008
) -> MessageResponse:
    PaymentService(db).delete_payment(debtor_id, payment_id, user)
    return MessageResponse(message="Payment deleted successfully")
