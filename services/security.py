"""
Password hashing (bcrypt) and bearer token issuance/verification (PyJWT).
Token verification is pure computation: no database or network access.
"""
from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Optional

import bcrypt
import jwt

from config import settings
from schemas.auth import AuthSubject
from utils.exceptions import ForbiddenError, TokenExpiredError, UnauthorizedError


def hash_password(password: str) -> str:
    salt = bcrypt.gensalt(rounds=settings.bcrypt_rounds)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        # Stored hash is not a bcrypt hash
        return False


def create_access_token(account_id: int, role: str, expires_delta: Optional[timedelta] = None) -> str:
    """Issue a signed token carrying the subject id and role."""
    now = datetime.now(timezone.utc)
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.jwt_expires_minutes)
    payload = {
        "sub": str(account_id),
        "role": role,
        "iat": now,
        "exp": now + expires_delta,
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> AuthSubject:
    """
    Verify signature and expiry and return the normalized subject.
    Raises TokenExpiredError for expired tokens, UnauthorizedError for anything else invalid.
    """
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            options={"require": ["sub", "exp"]},
        )
    except jwt.ExpiredSignatureError as e:
        raise TokenExpiredError("Token has expired") from e
    except jwt.InvalidTokenError as e:
        raise UnauthorizedError("Invalid token") from e

    try:
        return AuthSubject(id=int(payload["sub"]), role=payload.get("role", "standard"))
    except (TypeError, ValueError) as e:
        raise UnauthorizedError("Invalid token payload") from e


def require_role(subject: AuthSubject, role: str) -> None:
    if subject.role != role:
        raise ForbiddenError("Admin privileges required" if role == "admin" else "Insufficient privileges")
