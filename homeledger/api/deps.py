"""Shared FastAPI dependencies."""

import logging
from typing import Annotated

from fastapi import Depends, Header, Path
from sqlalchemy.orm import Session

from homeledger.api.errors import InvalidTokenError
from homeledger.models.user import User
from homeledger.schemas.common import MAX_ID
from homeledger.services import get_db
from homeledger.services.auth_service import verify_token

logger = logging.getLogger(__name__)

# Path id that fits the database key range; larger values fail validation (422)
RecordId = Annotated[int, Path(ge=1, le=MAX_ID)]


def extract_bearer_token(authorization: str | None) -> str:
    """Return the token from an ``Authorization: Bearer <token>`` header.

    Raises:
        InvalidTokenError: If the header is missing or not a bearer header
    """
    if not authorization:
        raise InvalidTokenError("Missing authorization header")
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise InvalidTokenError("Authorization header must be 'Bearer <token>'")
    return token.strip()


async def get_current_user(
    authorization: str | None = Header(None, alias="Authorization"),  # noqa: B008
    db: Session = Depends(get_db),  # noqa: B008
) -> User:
    """Resolve the requesting user from the bearer token.

    Raises:
        InvalidTokenError: Missing, forged or expired token, or deleted user
    """
    user_id = verify_token(extract_bearer_token(authorization))
    user = db.get(User, user_id)
    if user is None:
        logger.warning("Token for unknown user %d", user_id)
        raise InvalidTokenError("User no longer exists")
    return user
