"""
Password hashing and bearer tokens.

Credentials are decoded once at the API edge and handed to the trip store
explicitly; nothing here keeps per-user state.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import bcrypt
from jose import JWTError, jwt

from config import settings
from core.exceptions import AuthenticationError, ValidationFailure

logger = logging.getLogger(__name__)

# bcrypt only looks at the first 72 bytes and newer releases reject longer input
MAX_PASSWORD_BYTES = 72


@dataclass(frozen=True)
class Credentials:
    user_id: int
    email: str


def hash_password(password: str) -> str:
    raw = password.encode("utf-8")
    if len(raw) > MAX_PASSWORD_BYTES:
        raise ValidationFailure("Password is too long")
    return bcrypt.hashpw(raw, bcrypt.gensalt()).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    raw = plain_password.encode("utf-8")
    if len(raw) > MAX_PASSWORD_BYTES:
        return False
    try:
        return bcrypt.checkpw(raw, hashed_password.encode("utf-8"))
    except ValueError as e:
        # malformed stored hash
        logger.warning("password check failed: %s", e)
        return False


def create_access_token(
    credentials: Credentials, expires_delta: Optional[timedelta] = None
) -> str:
    """Signed JWT carrying the user id (``sub``) and email."""
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.JWT_EXPIRE_MINUTES)
    )
    payload: Dict[str, Any] = {
        "sub": str(credentials.user_id),
        "email": credentials.email,
        "exp": expire,
    }
    return jwt.encode(payload, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def decode_access_token(token: str) -> Credentials:
    """Validate signature and expiry; raise AuthenticationError otherwise."""
    try:
        payload = jwt.decode(
            token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM]
        )
    except JWTError as e:
        raise AuthenticationError("Token is not valid") from e

    sub = payload.get("sub")
    email = payload.get("email")
    if not sub or not email:
        raise AuthenticationError("Invalid token payload")
    try:
        user_id = int(sub)
    except (TypeError, ValueError) as e:
        raise AuthenticationError("Invalid token payload") from e
    return Credentials(user_id=user_id, email=email)
