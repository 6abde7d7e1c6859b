"""Authentication API routes."""

import logging

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.orm import Session

from homeledger.api.deps import get_current_user
from homeledger.api.errors import InvalidInputError, RegistrationDisabledError
from homeledger.api.limiter import limiter
from homeledger.config import settings
from homeledger.models.user import User
from homeledger.schemas.auth import LoginRequest, RegisterRequest, TokenResponse, UserResponse
from homeledger.services import get_db
from homeledger.services.auth_service import authenticate, issue_token
from homeledger.services.user_service import UserService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["auth"])


def _token_response(user: User) -> TokenResponse:
    return TokenResponse(token=issue_token(user.id), user=UserResponse.model_validate(user))


@router.post("/login", response_model=TokenResponse)
@limiter.limit(settings.login_rate_limit)
async def login(
    request: Request, payload: LoginRequest, db: Session = Depends(get_db)  # noqa: B008
) -> TokenResponse:
    """Exchange username and password for an access token.

    Attempts are throttled per client address (LOGIN_RATE_LIMIT).

    Returns:
        200: Token and user
        401: Invalid credentials
        429: Too many login attempts
    """
    user = authenticate(db, payload.username, payload.password)
    return _token_response(user)


@router.post("/register", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
async def register(
    payload: RegisterRequest, db: Session = Depends(get_db)  # noqa: B008
) -> TokenResponse:
    """Self-service sign up, only when REGISTRATION_ENABLED is set.

    Returns:
        201: Token and the new user
        400: Weak password or username/email taken
        403: Registration disabled
    """
    if not settings.registration_enabled:
        logger.warning("Registration attempt for %r while disabled", payload.username)
        raise RegistrationDisabledError()

    try:
        user = UserService(db).create_user(payload.username, payload.email, payload.password)
    except ValueError as e:
        raise InvalidInputError(str(e)) from e
    return _token_response(user)


@router.get("/profile", response_model=UserResponse)
async def profile(user: User = Depends(get_current_user)) -> UserResponse:  # noqa: B008
    """Return the authenticated user."""
    return UserResponse.model_validate(user)
