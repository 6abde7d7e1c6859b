"""Pydantic schemas for login, registration and the user profile."""

from datetime import datetime

from pydantic import Field

from homeledger.schemas.common import ApiModel


class LoginRequest(ApiModel):
    """Request payload for POST /api/auth/login."""

    username: str = Field(..., min_length=1, description="Login name")
    password: str = Field(..., min_length=1, description="Plain-text password")


class RegisterRequest(ApiModel):
    """Request payload for POST /api/auth/register."""

    username: str = Field(..., min_length=3, max_length=100)
    email: str = Field(..., min_length=3, max_length=255, pattern=r"^[^@\s]+@[^@\s]+$")
    password: str = Field(..., min_length=1)


class UserResponse(ApiModel):
    """Public view of a user (never includes the password hash)."""

    id: int
    username: str
    email: str
    created_at: datetime


class TokenResponse(ApiModel):
    """Access token plus the user it was issued for."""

    token: str
    user: UserResponse
