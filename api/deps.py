"""Request-scoped dependencies: bearer authentication and role gates."""
from typing import Optional

from fastapi import Depends, Header

from schemas.auth import AuthSubject
from services.security import decode_access_token, require_role
from utils.exceptions import UnauthorizedError


def _extract_bearer(authorization: Optional[str]) -> str:
    if not authorization:
        raise UnauthorizedError("Access token is missing")
    parts = authorization.split()
    if len(parts) != 2:
        raise UnauthorizedError("Token error: Invalid authorization header format")
    scheme, token = parts
    if scheme.lower() != "bearer":
        raise UnauthorizedError("Token error: Malformatted token")
    return token


async def get_current_subject(authorization: Optional[str] = Header(None)) -> AuthSubject:
    return decode_access_token(_extract_bearer(authorization))


async def get_optional_subject(authorization: Optional[str] = Header(None)) -> Optional[AuthSubject]:
    """Like get_current_subject, but anonymous callers get None instead of a 401."""
    if not authorization:
        return None
    return decode_access_token(_extract_bearer(authorization))


async def require_admin(subject: AuthSubject = Depends(get_current_subject)) -> AuthSubject:
    require_role(subject, "admin")
    return subject
