from __future__ import annotations

from typing import Optional

from sqlalchemy import or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from config import settings
from models import Account
from models.account import ROLE_ADMIN
from schemas.auth import AuthSubject, ProfileUpdate, RegisterRequest
from services.security import create_access_token, hash_password, verify_password
from utils.exceptions import ConflictError, ForbiddenError, InvalidInputError, NotFoundError, UnauthorizedError
from utils.logging import get_logger
from utils.validation import required_text

LOGGER = get_logger(__name__)

MSG_ACCOUNT_NOT_FOUND = "User not found"
MSG_ACCOUNT_EXISTS = "User already exists"


def _clean(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


async def _find_by_login(session: AsyncSession, contact: Optional[str], email: Optional[str]) -> Optional[Account]:
    clauses = []
    if contact:
        clauses.append(Account.contact == contact)
    if email:
        clauses.append(Account.email == email)
    if not clauses:
        return None
    result = await session.execute(select(Account).where(or_(*clauses)))
    return result.scalars().first()


async def register_account(
    session: AsyncSession, body: RegisterRequest, caller: Optional[AuthSubject] = None
) -> Account:
    """
    Create a policyholder account. Only an authenticated admin may create another admin.
    Raises ConflictError when the contact or email is already registered.
    """
    name = required_text(body.name, "name")
    contact, email = _clean(body.contact), _clean(body.email)
    if not contact and not email:
        raise InvalidInputError("Missing required fields: contact or email is required")
    if body.role == ROLE_ADMIN and not (caller and caller.is_admin):
        raise ForbiddenError("Admin privileges required to create an admin account")

    if await _find_by_login(session, contact, email) is not None:
        raise ConflictError(MSG_ACCOUNT_EXISTS)

    account = Account(
        name=name,
        contact=contact,
        email=email,
        password_hash=hash_password(body.password),
        role=body.role,
    )
    session.add(account)
    try:
        await session.commit()
    except IntegrityError as e:
        # Lost a race with a concurrent registration of the same contact/email
        await session.rollback()
        raise ConflictError(MSG_ACCOUNT_EXISTS) from e
    await session.refresh(account)
    LOGGER.info("Registered account id=%s role=%s", account.id, account.role)
    return account


async def authenticate(
    session: AsyncSession, contact: Optional[str], email: Optional[str], password: str
) -> tuple[Account, str]:
    """Check credentials and return the account with a freshly issued token."""
    contact, email = _clean(contact), _clean(email)
    if not contact and not email:
        raise InvalidInputError("Missing credentials")
    account = await _find_by_login(session, contact, email)
    if account is None or not verify_password(password, account.password_hash):
        LOGGER.warning("Rejected login for %s", contact or email)
        raise UnauthorizedError("Invalid credentials")
    return account, create_access_token(account.id, account.role)


async def get_account(session: AsyncSession, account_id: int) -> Account:
    account = await session.get(Account, account_id)
    if account is None:
        raise NotFoundError(MSG_ACCOUNT_NOT_FOUND)
    return account


async def update_profile(session: AsyncSession, subject: AuthSubject, body: ProfileUpdate) -> Account:
    account = await get_account(session, subject.id)
    contact, email = _clean(body.contact), _clean(body.email)

    clashes = []
    if contact and contact != account.contact:
        clashes.append(Account.contact == contact)
    if email and email != account.email:
        clashes.append(Account.email == email)
    if clashes:
        taken = await session.execute(select(Account.id).where(or_(*clashes), Account.id != account.id))
        if taken.first() is not None:
            raise ConflictError("Contact or email already in use")

    if body.name is not None and body.name.strip():
        account.name = body.name.strip()
    if contact:
        account.contact = contact
    if email:
        account.email = email
    try:
        await session.commit()
    except IntegrityError as e:
        await session.rollback()
        raise ConflictError("Contact or email already in use") from e
    return account


async def list_accounts(session: AsyncSession) -> list[Account]:
    result = await session.execute(select(Account).order_by(Account.id))
    return list(result.scalars().all())


async def set_role(session: AsyncSession, admin: AuthSubject, account_id: int, role: str) -> Account:
    account = await get_account(session, account_id)
    if account.id == admin.id and role != ROLE_ADMIN:
        raise InvalidInputError("Admins cannot revoke their own admin role")
    account.role = role
    await session.commit()
    LOGGER.info("Admin %s set role of account %s to %s", admin.id, account.id, role)
    return account


async def ensure_bootstrap_admin(session: AsyncSession) -> Optional[Account]:
    """Create the configured bootstrap admin at startup if it does not exist yet."""
    login = _clean(settings.bootstrap_admin_contact)
    if not login or not settings.bootstrap_admin_password:
        return None
    is_email = "@" in login
    existing = await _find_by_login(session, None if is_email else login, login if is_email else None)
    if existing is not None:
        return existing
    account = Account(
        name=settings.bootstrap_admin_name,
        contact=None if is_email else login,
        email=login if is_email else None,
        password_hash=hash_password(settings.bootstrap_admin_password),
        role=ROLE_ADMIN,
    )
    session.add(account)
    await session.commit()
    LOGGER.info("Created bootstrap admin account id=%s", account.id)
    return account

