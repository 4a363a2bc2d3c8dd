"""
Policy lifecycle: direct creation, product purchase, owner-scoped access and admin approval.

    pending -> approved
    pending -> denied

A repeated admin decision equal to the current one is a no-op; a contradicting
decision on an already decided policy is rejected with ConflictError.
"""
from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from models import Account, Approval, Policy, Product, Transaction
from models.policy import POLICY_APPROVED, POLICY_DENIED, POLICY_PENDING
from schemas.auth import AuthSubject
from schemas.policy import PolicyCreate
from utils.exceptions import ConflictError, ForbiddenError, InvalidInputError, NotFoundError
from utils.logging import get_logger
from utils.validation import required_text

LOGGER = get_logger(__name__)

MSG_POLICY_NOT_FOUND = "Policy not found"


@dataclass
class Decision:
    """Outcome of an admin decision; `changed` is False for a repeated identical decision."""

    policy: Policy
    changed: bool
    owner_email: Optional[str] = None


def parse_date(value: Optional[str], field: str) -> Optional[date]:
    """Parse an ISO date (or datetime) string; raise InvalidInputError naming the field."""
    if value is None or not str(value).strip():
        return None
    text = str(value).strip()
    try:
        return date.fromisoformat(text)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    except ValueError as e:
        raise InvalidInputError(f"Invalid {field} date format") from e


def _add_months(start: date, months: int) -> date:
    month_index = start.month - 1 + months
    year = start.year + month_index // 12
    month = month_index % 12 + 1
    day = min(start.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


def _check_period(start: date, end: Optional[date]) -> None:
    if end is not None and end < start:
        raise InvalidInputError("End date cannot be before start date")


async def create_policy(session: AsyncSession, subject: AuthSubject, body: PolicyCreate) -> Policy:
    """
    Create a policy directly (no product). Admins may create on behalf of another policyholder;
    everyone else may only name themselves.
    """
    policy_type = required_text(body.type, "type")
    if body.amount <= 0:
        raise InvalidInputError("Policy amount must be positive")
    start = parse_date(body.start_date, "start")
    if start is None:
        raise InvalidInputError("Missing required fields: startDate")
    end = parse_date(body.end_date, "end")
    _check_period(start, end)

    owner_id = body.policyholder_id if body.policyholder_id is not None else subject.id
    if owner_id != subject.id and not subject.is_admin:
        raise ForbiddenError("Cannot create a policy for another policyholder")
    if await session.get(Account, owner_id) is None:
        raise NotFoundError("Policyholder not found")

    policy = Policy(
        owner_id=owner_id,
        policy_type=policy_type,
        coverage_amount=body.amount,
        start_date=start,
        end_date=end,
        status=POLICY_PENDING,
        created_at=datetime.now(timezone.utc),
    )
    session.add(policy)
    await session.commit()
    LOGGER.info("Created policy id=%s for account %s", policy.id, owner_id)
    return policy


async def purchase_product(
    session: AsyncSession,
    subject: AuthSubject,
    product_id: int,
    start_date: Optional[str] = None,
    end_date: Optional[str] = None,
) -> tuple[Policy, Transaction]:
    """
    Buy an approved product: a pending policy plus its purchase transaction, committed together.
    Without an explicit end date the cover runs for the product's duration (open-ended for lifetime).
    """
    result = await session.execute(
        select(Product).where(Product.id == product_id, Product.is_approved.is_(True))
    )
    product = result.scalar_one_or_none()
    if product is None:
        raise NotFoundError("Product not found or not approved")

    start = parse_date(start_date, "start") or date.today()
    end = parse_date(end_date, "end")
    if end is None and product.duration:
        end = _add_months(start, product.duration)
    _check_period(start, end)

    now = datetime.now(timezone.utc)
    policy = Policy(
        owner_id=subject.id,
        product_id=product.id,
        coverage_amount=product.coverage_amount,
        start_date=start,
        end_date=end,
        status=POLICY_PENDING,
        created_at=now,
    )
    session.add(policy)
    await session.flush()
    transaction = Transaction(
        account_id=subject.id,
        product_id=product.id,
        policy_id=policy.id,
        amount=product.premium,
        transaction_type="purchase",
        status="completed",
        created_at=now,
    )
    session.add(transaction)
    await session.commit()
    LOGGER.info("Account %s purchased product %s as policy id=%s", subject.id, product.id, policy.id)
    return policy, transaction


async def list_policies(session: AsyncSession, subject: AuthSubject) -> list[Policy]:
    result = await session.execute(
        select(Policy).where(Policy.owner_id == subject.id).order_by(Policy.id)
    )
    return list(result.scalars().all())


async def get_policy(session: AsyncSession, subject: AuthSubject, policy_id: int) -> Policy:
    """Owner-scoped lookup; another account's policy is reported as not found."""
    result = await session.execute(
        select(Policy).where(Policy.id == policy_id, Policy.owner_id == subject.id)
    )
    policy = result.scalar_one_or_none()
    if policy is None:
        raise NotFoundError(MSG_POLICY_NOT_FOUND)
    return policy


async def delete_policy(session: AsyncSession, subject: AuthSubject, policy_id: int) -> None:
    policy = await session.get(Policy, policy_id)
    if policy is None:
        raise NotFoundError(MSG_POLICY_NOT_FOUND)
    if policy.owner_id != subject.id:
        raise ForbiddenError("Access denied")
    await session.delete(policy)
    await session.commit()
    LOGGER.info("Account %s deleted policy id=%s", subject.id, policy_id)


async def list_pending_policies(session: AsyncSession) -> list[Policy]:
    result = await session.execute(
        select(Policy).where(Policy.status == POLICY_PENDING).order_by(Policy.created_at, Policy.id)
    )
    return list(result.scalars().all())


async def approve_policy(session: AsyncSession, admin: AuthSubject, policy_id: int, decision: bool) -> Decision:
    result = await session.execute(select(Policy).where(Policy.id == policy_id).with_for_update())
    policy = result.scalar_one_or_none()
    if policy is None:
        raise NotFoundError(MSG_POLICY_NOT_FOUND)

    target = POLICY_APPROVED if decision else POLICY_DENIED
    if policy.status == target:
        return Decision(policy=policy, changed=False)
    if policy.status != POLICY_PENDING:
        raise ConflictError(f"Policy has already been {policy.status}")

    policy.status = target
    policy.approved_by = admin.id
    policy.approved_at = datetime.now(timezone.utc)
    session.add(
        Approval(
            entity_type="policy",
            entity_id=policy.id,
            admin_id=admin.id,
            decision=decision,
            created_at=policy.approved_at,
        )
    )
    owner = await session.get(Account, policy.owner_id)
    await session.commit()
    LOGGER.info("Admin %s %s policy id=%s", admin.id, target, policy.id)
    return Decision(policy=policy, changed=True, owner_email=owner.email if owner else None)
