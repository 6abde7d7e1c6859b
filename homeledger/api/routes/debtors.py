"""Debtor API routes.

The debtor listing shows every payment on record; reports are the place where
payments are filtered by date.
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from homeledger.api.deps import RecordId, get_current_user
from homeledger.models.debtor import Debtor
from homeledger.models.user import User
from homeledger.schemas.common import MessageResponse
from homeledger.schemas.ledger import DebtorRequest, DebtorResponse, PaymentResponse
from homeledger.services import get_db
from homeledger.services.debtor_service import DebtorService, total_paid

router = APIRouter(prefix="/api/debtors", tags=["debtors"])


def debtor_response(debtor: Debtor) -> DebtorResponse:
    return DebtorResponse(
        id=debtor.id,
        name=debtor.name,
        property_id=debtor.property_id,
        created_at=debtor.created_at,
        payments=[PaymentResponse.model_validate(p) for p in debtor.payments],
        total_paid=total_paid(debtor),
    )


@router.get("/property/{property_id}", response_model=list[DebtorResponse])
async def list_debtors(
    property_id: RecordId,
    user: User = Depends(get_current_user),  # noqa: B008
    db: Session = Depends(get_db),  # noqa: B008
) -> list[DebtorResponse]:
    """Debtors ordered by name, each with all payments (newest first) and totalPaid."""
    return [debtor_response(d) for d in DebtorService(db).list_debtors(property_id, user)]


@router.post(
    "/property/{property_id}",
    response_model=DebtorResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_debtor(
    property_id: RecordId,
    payload: DebtorRequest,
    user: User = Depends(get_current_user),  # noqa: B008
    db: Session = Depends(get_db),  # noqa: B008
) -> DebtorResponse:
    """Create a debtor.

    Returns:
        201: Created debtor
        400: Debtor already exists
        404: Property not found
    """
    debtor = DebtorService(db).create_debtor(property_id, user, payload.name)
    return debtor_response(debtor)


@router.put("/property/{property_id}/{debtor_id}", response_model=DebtorResponse)
async def update_debtor(
    property_id: RecordId,
    debtor_id: RecordId,
    payload: DebtorRequest,
    user: User = Depends(get_current_user),  # noqa: B008
    db: Session = Depends(get_db),  # noqa: B008
) -> DebtorResponse:
    debtor = DebtorService(db).update_debtor(property_id, debtor_id, user, payload.name)
    return debtor_response(debtor)


@router.delete("/property/{property_id}/{debtor_id}", response_model=MessageResponse)
async def delete_debtor(
    property_id: RecordId,
    debtor_id: RecordId,
    user: User = Depends(get_current_user),  # noqa: B008
    db: Session = Depends(get_db),  # noqa: B008
) -> MessageResponse:
    DebtorService(db).delete_debtor(property_id, debtor_id, user)
    return MessageResponse(message="Debtor deleted successfully")
