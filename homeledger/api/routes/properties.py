"""Property API routes."""

import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from homeledger.api.deps import RecordId, get_current_user
from homeledger.api.routes.debtors import debtor_response
from homeledger.models.property import Property
from homeledger.models.user import User
from homeledger.schemas.common import MessageResponse
from homeledger.schemas.ledger import (
    CategoryResponse,
    PropertyCountsResponse,
    PropertyDetailResponse,
    PropertyListItemResponse,
    PropertyRequest,
    PropertyResponse,
)
from homeledger.services import get_db
from homeledger.services.property_service import PropertyCounts, PropertyService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/properties", tags=["properties"])


def _list_item(prop: Property, counts: PropertyCounts) -> PropertyListItemResponse:
    return PropertyListItemResponse(
        **PropertyResponse.model_validate(prop).model_dump(),
        counts=PropertyCountsResponse(
            expenses=counts.expenses, categories=counts.categories, debtors=counts.debtors
        ),
    )


@router.get("", response_model=list[PropertyListItemResponse])
async def list_properties(
    user: User = Depends(get_current_user),  # noqa: B008
    db: Session = Depends(get_db),  # noqa: B008
) -> list[PropertyListItemResponse]:
    """List the caller's properties, newest first, with child counts."""
    rows = PropertyService(db).list_properties(user)
    return [_list_item(prop, counts) for prop, counts in rows]


@router.get("/{property_id}", response_model=PropertyDetailResponse)
async def get_property(
    property_id: RecordId,
    user: User = Depends(get_current_user),  # noqa: B008
    db: Session = Depends(get_db),  # noqa: B008
) -> PropertyDetailResponse:
    """Property with categories, debtors (with all payments) and its expense count.

    Returns:
        200: Property detail
        404: Property not found
    """
    prop, counts = PropertyService(db).get_property(property_id, user)
    return PropertyDetailResponse(
        **PropertyResponse.model_validate(prop).model_dump(),
        categories=[CategoryResponse.model_validate(c) for c in prop.categories],
        debtors=[debtor_response(d) for d in prop.debtors],
        expense_count=counts.expenses,
    )


@router.post("", response_model=PropertyResponse, status_code=status.HTTP_201_CREATED)
async def create_property(
    payload: PropertyRequest,
    user: User = Depends(get_current_user),  # noqa: B008
    db: Session = Depends(get_db),  # noqa: B008
) -> PropertyResponse:
    prop = PropertyService(db).create_property(user, payload.name, payload.description)
    return PropertyResponse.model_validate(prop)


@router.put("/{property_id}", response_model=PropertyResponse)
async def update_property(
    property_id: RecordId,
    payload: PropertyRequest,
    user: User = Depends(get_current_user),  # noqa: B008
    db: Session = Depends(get_db),  # noqa: B008
) -> PropertyResponse:
    prop = PropertyService(db).update_property(
        property_id, user, payload.name, payload.description
    )
    return PropertyResponse.model_validate(prop)


@router.delete("/{property_id}", response_model=MessageResponse)
async def delete_property(
    property_id: RecordId,
    user: User = Depends(get_current_user),  # noqa: B008
    db: Session = Depends(get_db),  # noqa: B008
) -> MessageResponse:
    """Delete a property together with its categories, expenses, debtors and payments."""
    PropertyService(db).delete_property(property_id, user)
    return MessageResponse(message="Property deleted successfully")
