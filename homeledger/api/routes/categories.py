"""Category API routes."""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from homeledger.api.deps import RecordId, get_current_user
from homeledger.models.user import User
from homeledger.schemas.common import MessageResponse
from homeledger.schemas.ledger import CategoryListItemResponse, CategoryRequest, CategoryResponse
from homeledger.services import get_db
from homeledger.services.category_service import CategoryService

router = APIRouter(prefix="/api/categories", tags=["categories"])


@router.get("/property/{property_id}", response_model=list[CategoryListItemResponse])
async def list_categories(
    property_id: RecordId,
    user: User = Depends(get_current_user),  # noqa: B008
    db: Session = Depends(get_db),  # noqa: B008
) -> list[CategoryListItemResponse]:
    """Categories of a property ordered by name, with expense counts."""
    rows = CategoryService(db).list_categories(property_id, user)
    return [
        CategoryListItemResponse(
            **CategoryResponse.model_validate(category).model_dump(), expense_count=count
        )
        for category, count in rows
    ]


@router.post(
    "/property/{property_id}",
    response_model=CategoryResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_category(
    property_id: RecordId,
    payload: CategoryRequest,
    user: User = Depends(get_current_user),  # noqa: B008
    db: Session = Depends(get_db),  # noqa: B008
) -> CategoryResponse:
    """Create a category.

    Returns:
        201: Created category
        400: Category already exists
        404: Property not found
    """
    category = CategoryService(db).create_category(property_id, user, payload.name)
    return CategoryResponse.model_validate(category)


@router.put("/property/{property_id}/{category_id}", response_model=CategoryResponse)
async def update_category(
    property_id: RecordId,
    category_id: RecordId,
    payload: CategoryRequest,
    user: User = Depends(get_current_user),  # noqa: B008
    db: Session = Depends(get_db),  # noqa: B008
) -> CategoryResponse:
    category = CategoryService(db).update_category(property_id, category_id, user, payload.name)
    return CategoryResponse.model_validate(category)


@router.delete("/property/{property_id}/{category_id}", response_model=MessageResponse)
async def delete_category(
    property_id: RecordId,
    category_id: RecordId,
    user: User = Depends(get_current_user),  # noqa: B008
    db: Session = Depends(get_db),  # noqa: B008
) -> MessageResponse:
    CategoryService(db).delete_category(property_id, category_id, user)
    return MessageResponse(message="Category deleted successfully")
