"""API error taxonomy and response helpers."""

from typing import Any, Dict

from fastapi import Request, status
from fastapi.responses import JSONResponse


class AppError(Exception):
    """Base application error."""

    def __init__(self, message: str, code: str, http_status: int = 400):
        """Initialize error."""
        self.message = message
        self.code = code
        self.http_status = http_status
        super().__init__(message)


class InvalidDateError(AppError):
    """A supplied date string or year does not denote a calendar date."""

    def __init__(self, message: str = "Invalid date"):
        super().__init__(message, "invalid_date", status.HTTP_400_BAD_REQUEST)


class InvalidWindowError(AppError):
    """Report window is inverted, or is not a full year where one is required."""

    def __init__(self, message: str = "Invalid date window"):
        super().__init__(message, "invalid_window", status.HTTP_400_BAD_REQUEST)


class NotFoundError(AppError):
    """Resource does not exist or is not owned by the requesting user."""

    def __init__(self, message: str = "Not found"):
        super().__init__(message, "not_found", status.HTTP_404_NOT_FOUND)


class DuplicateNameError(AppError):
    """A category or debtor with this name already exists on the property."""

    def __init__(self, message: str = "Name already exists"):
        super().__init__(message, "duplicate_name", status.HTTP_400_BAD_REQUEST)


class InvalidCredentialsError(AppError):
    """Username or password is wrong."""

    def __init__(self, message: str = "Invalid credentials"):
        super().__init__(message, "invalid_credentials", status.HTTP_401_UNAUTHORIZED)


class InvalidTokenError(AppError):
    """Access token is missing, malformed, forged or expired."""

    def __init__(self, message: str = "Invalid or expired token"):
        super().__init__(message, "invalid_token", status.HTTP_401_UNAUTHORIZED)


class RegistrationDisabledError(AppError):
    """Self-service registration is switched off."""

    def __init__(self, message: str = "Registration is disabled"):
        super().__init__(message, "registration_disabled", status.HTTP_403_FORBIDDEN)


class UserAlreadyExistsError(AppError):
    """Username or email is already taken."""

    def __init__(self, message: str = "User already exists"):
        super().__init__(message, "user_already_exists", status.HTTP_400_BAD_REQUEST)


class InvalidInputError(AppError):
    """Request data is well-formed but not acceptable (e.g. a blank username)."""

    def __init__(self, message: str = "Invalid input"):
        super().__init__(message, "invalid_input", status.HTTP_400_BAD_REQUEST)


class RateLimitedError(AppError):
    """Client sent too many requests in the current limit window."""

    def __init__(self, message: str = "Too many requests, please try again later"):
        super().__init__(message, "rate_limited", status.HTTP_429_TOO_MANY_REQUESTS)


class WeakPasswordError(AppError):
    """Password does not satisfy the strength rules."""

    def __init__(self, message: str = "Password is too weak"):
        super().__init__(message, "weak_password", status.HTTP_400_BAD_REQUEST)


def error_response(error: AppError) -> Dict[str, Any]:
    """Create a standardized error response."""
    return {
        "error": {
            "code": error.code,
            "message": error.message,
        }
    }


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Translate an AppError raised anywhere below a route into its HTTP response."""
    return JSONResponse(status_code=exc.http_status, content=error_response(exc))
