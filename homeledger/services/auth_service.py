"""Authentication and authorization helpers.

Provides:
- Password hashing and strength rules (bcrypt)
- Signed access tokens (HMAC-SHA256 over a small JSON payload)
- Ownership checks: every property, debtor and payment is reachable only by
  the user who owns the property it hangs off
"""

import base64
import hashlib
import hmac
import json
import logging
import re
import time

import bcrypt
from sqlalchemy import select
from sqlalchemy.orm import Session

from homeledger.api.errors import (
    InvalidCredentialsError,
    InvalidTokenError,
    NotFoundError,
    WeakPasswordError,
)
from homeledger.config import settings
from homeledger.models.debtor import Debtor
from homeledger.models.payment import Payment
from homeledger.models.property import Property
from homeledger.models.user import User

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 8
# bcrypt only looks at the first 72 bytes
MAX_PASSWORD_BYTES = 72
PASSWORD_SPECIAL_CHARS = "!@#$%^&*"

_PASSWORD_RULES = (
    (re.compile(r"[a-z]"), "Password must contain at least one lowercase letter"),
    (re.compile(r"[A-Z]"), "Password must contain at least one uppercase letter"),
    (re.compile(r"[0-9]"), "Password must contain at least one number"),
    (
        re.compile(f"[{re.escape(PASSWORD_SPECIAL_CHARS)}]"),
        f"Password must contain at least one special character ({PASSWORD_SPECIAL_CHARS})",
    ),
)


# --------------------------------------------------------------------------
# Passwords
# --------------------------------------------------------------------------


def validate_password_strength(password: str) -> None:
    """Check a new password against the strength rules.

    Raises:
        WeakPasswordError: With the first rule the password violates
    """
    if len(password) < MIN_PASSWORD_LENGTH:
        raise WeakPasswordError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")
    if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise WeakPasswordError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")
    for pattern, message in _PASSWORD_RULES:
        if not pattern.search(password):
            raise WeakPasswordError(message)


def hash_password(password: str) -> str:
    salt = bcrypt.gensalt(rounds=settings.bcrypt_rounds)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        # Malformed stored hash or over-long candidate
        return False


def authenticate(db: Session, username: str, password: str) -> User:
    """Return the user matching the credentials.

    Raises:
        InvalidCredentialsError: Unknown username or wrong password
    """
    user = db.scalar(select(User).where(User.username == username.strip()))
    if not user or not verify_password(password, user.password_hash):
        logger.warning("Failed login for username=%r", username)
        raise InvalidCredentialsError()
    logger.info("User %d logged in", user.id)
    return user


# --------------------------------------------------------------------------
# Tokens
# --------------------------------------------------------------------------


def _b64encode(raw: bytes) -> str:
    return base64.urlsafe_b64encode(raw).rstrip(b"=").decode("ascii")


def _b64decode(text: str) -> bytes:
    return base64.urlsafe_b64decode(text + "=" * (-len(text) % 4))


def _sign(body: str, secret: str) -> str:
    return hmac.new(secret.encode(), msg=body.encode(), digestmod=hashlib.sha256).hexdigest()


def issue_token(
    user_id: int,
    secret: str | None = None,
    ttl_seconds: int | None = None,
    now: int | None = None,
) -> str:
    """Create a signed access token for a user.

    Format: ``<base64url(json payload)>.<hex hmac-sha256>``, payload
    ``{"sub": user_id, "exp": unix_ts}``.
    """
    secret = secret or settings.secret_key
    ttl_seconds = settings.token_ttl_seconds if ttl_seconds is None else ttl_seconds
    issued_at = int(time.time()) if now is None else now

    payload = {"sub": user_id, "exp": issued_at + ttl_seconds}
    body = _b64encode(json.dumps(payload, separators=(",", ":")).encode())
    return f"{body}.{_sign(body, secret)}"


def verify_token(token: str, secret: str | None = None, now: int | None = None) -> int:
    """Verify a token's signature and expiry and return its user id.

    Raises:
        InvalidTokenError: If the token is malformed, forged or expired
    """
    secret = secret or settings.secret_key
    body, sep, signature = token.strip().partition(".")
    if not sep or not body or not signature:
        raise InvalidTokenError("Malformed token")

    # Constant-time comparison
    if not hmac.compare_digest(_sign(body, secret), signature):
        logger.warning("Token signature verification failed")
        raise InvalidTokenError("Invalid token signature")

    try:
        payload = json.loads(_b64decode(body))
        user_id = int(payload["sub"])
        expires_at = int(payload["exp"])
    except (ValueError, KeyError, TypeError):
        raise InvalidTokenError("Malformed token")

    current_time = int(time.time()) if now is None else now
    if current_time >= expires_at:
        logger.info("Expired token for user %d", user_id)
        raise InvalidTokenError("Token expired")

    return user_id


# --------------------------------------------------------------------------
# Ownership
# --------------------------------------------------------------------------


def ensure_owner(owner_id: int, requester: User, message: str) -> None:
    """Capability check: the resource's owning user must be the requester.

    Foreign resources are reported as missing rather than forbidden.

    Raises:
        NotFoundError: If ``owner_id`` is not the requester's id
    """
    if owner_id != requester.id:
        logger.warning("User %d denied access to a resource of user %d", requester.id, owner_id)
        raise NotFoundError(message)


def authorize_property_access(db: Session, property_id: int, user: User) -> Property:
    """Load a property owned by ``user``.

    Raises:
        NotFoundError: Property missing or owned by someone else
    """
    prop = db.get(Property, property_id)
    if prop is None:
        raise NotFoundError("Property not found")
    ensure_owner(prop.user_id, user, "Property not found")
    return prop


def authorize_debtor_access(db: Session, debtor_id: int, user: User) -> Debtor:
    """Load a debtor whose property is owned by ``user``.

    Raises:
        NotFoundError: Debtor missing or owned by someone else
    """
    debtor = db.get(Debtor, debtor_id)
    if debtor is None:
        raise NotFoundError("Debtor not found")
    ensure_owner(debtor.property.user_id, user, "Debtor not found")
    return debtor


def authorize_payment_access(db: Session, debtor_id: int, payment_id: int, user: User) -> Payment:
    """Load a payment of the given debtor, owned (via its property) by ``user``.

    Raises:
        NotFoundError: Payment missing, attached to another debtor, or foreign
    """
    payment = db.get(Payment, payment_id)
    if payment is None or payment.debtor_id != debtor_id:
        raise NotFoundError("Payment not found")
    ensure_owner(payment.debtor.property.user_id, user, "Payment not found")
    return payment


__all__ = [
    "MIN_PASSWORD_LENGTH",
    "PASSWORD_SPECIAL_CHARS",
    "validate_password_strength",
    "hash_password",
    "verify_password",
    "authenticate",
    "issue_token",
    "verify_token",
    "ensure_owner",
    "authorize_property_access",
    "authorize_debtor_access",
    "authorize_payment_access",
]
