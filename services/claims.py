"""
Claim lifecycle against an owned, approved policy.

    pending  -> approved | denied
    approved -> paid
    denied, paid: terminal

At most one claim exists per policy; the unique constraint on claims.policy_id backs
the in-transaction duplicate check.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from config import settings
from models import Account, Approval, Claim, Policy, Product
from models.claim import CLAIM_APPROVED, CLAIM_DENIED, CLAIM_PAID, CLAIM_PENDING
from models.policy import POLICY_APPROVED
from schemas.auth import AuthSubject
from utils.exceptions import ConflictError, ForbiddenError, InvalidInputError, NotFoundError
from utils.logging import get_logger

LOGGER = get_logger(__name__)

VALID_TRANSITIONS: dict[str, tuple[str, ...]] = {
    CLAIM_PENDING: (CLAIM_APPROVED, CLAIM_DENIED),
    CLAIM_APPROVED: (CLAIM_PAID,),
    CLAIM_DENIED: (),
    CLAIM_PAID: (),
}

MSG_CLAIM_NOT_FOUND = "Claim not found"
MSG_ADMIN_DECISION = "Only an admin can approve or deny a claim"
MSG_DUPLICATE_CLAIM = "A claim already exists for this policy"


@dataclass
class ClaimDecision:
    claim: Claim
    changed: bool
    owner_email: Optional[str] = None


def can_transition(current: str, target: str) -> bool:
    return target in VALID_TRANSITIONS.get(current, ())


def format_amount(value: Decimal) -> str:
    """Render an amount without trailing zeros: Decimal('5000.00') -> '5000'."""
    normalized = Decimal(value).normalize()
    return format(normalized, "f")


async def create_claim(
    session: AsyncSession,
    subject: AuthSubject,
    policy_id: int,
    amount: Decimal,
    description: Optional[str] = None,
) -> Claim:
    """
    File a claim. The policy row is locked for the duration of the duplicate check and insert,
    so two concurrent submissions for one policy cannot both pass.
    """
    if amount <= 0:
        raise InvalidInputError("Claim amount must be positive")

    result = await session.execute(
        select(Policy).where(Policy.id == policy_id, Policy.owner_id == subject.id).with_for_update()
    )
    policy = result.scalar_one_or_none()
    if policy is None:
        raise NotFoundError("Policy not found")
    if settings.claims_require_approved_policy and policy.status != POLICY_APPROVED:
        raise NotFoundError("Policy not found or not approved")

    limit = Decimal(policy.coverage_amount)
    if amount > limit:
        raise InvalidInputError(
            f"Claim amount ({format_amount(amount)}) exceeds policy limit ({format_amount(limit)})"
        )

    existing = await session.execute(select(Claim.id).where(Claim.policy_id == policy.id))
    if existing.first() is not None:
        raise ConflictError(MSG_DUPLICATE_CLAIM)

    claim = Claim(
        policy_id=policy.id,
        amount=amount,
        description=description,
        status=CLAIM_PENDING,
        created_at=datetime.now(timezone.utc),
    )
    session.add(claim)
    try:
        await session.commit()
    except IntegrityError as e:
        await session.rollback()
        raise ConflictError(MSG_DUPLICATE_CLAIM) from e
    LOGGER.info("Account %s filed claim id=%s on policy %s", subject.id, claim.id, policy.id)
    return claim


async def list_claims(session: AsyncSession, subject: AuthSubject) -> list[Claim]:
    result = await session.execute(
        select(Claim).join(Policy, Claim.policy_id == Policy.id).where(Policy.owner_id == subject.id).order_by(Claim.id)
    )
    return list(result.scalars().all())


async def get_claim(session: AsyncSession, subject: AuthSubject, claim_id: int) -> Claim:
    result = await session.execute(
        select(Claim)
        .join(Policy, Claim.policy_id == Policy.id)
        .where(Claim.id == claim_id, Policy.owner_id == subject.id)
    )
    claim = result.scalar_one_or_none()
    if claim is None:
        raise NotFoundError(MSG_CLAIM_NOT_FOUND)
    return claim


async def _load_with_owner(session: AsyncSession, claim_id: int, lock: bool = False) -> tuple[Claim, int]:
    stmt = select(Claim, Policy.owner_id).join(Policy, Claim.policy_id == Policy.id).where(Claim.id == claim_id)
    if lock:
        stmt = stmt.with_for_update(of=Claim)
    row = (await session.execute(stmt)).first()
    if row is None:
        raise NotFoundError(MSG_CLAIM_NOT_FOUND)
    return row[0], row[1]


async def update_claim_status(session: AsyncSession, subject: AuthSubject, claim_id: int, status: str) -> Claim:
    """
    Owner-driven status change, restricted to VALID_TRANSITIONS.
    Approval and denial belong to approve_claim, which records the approver and the reason.
    """
    if status not in VALID_TRANSITIONS:
        raise InvalidInputError(f"Unknown claim status: {status}")
    claim, owner_id = await _load_with_owner(session, claim_id, lock=True)
    if owner_id != subject.id:
        raise ForbiddenError("Access denied")
    if not can_transition(claim.status, status):
        raise InvalidInputError(f"Invalid status transition from {claim.status} to {status}")
    if status in (CLAIM_APPROVED, CLAIM_DENIED):
        raise ForbiddenError(MSG_ADMIN_DECISION)
    claim.status = status
    await session.commit()
    LOGGER.info("Account %s moved claim id=%s to %s", subject.id, claim.id, status)
    return claim


async def approve_claim(
    session: AsyncSession,
    admin: AuthSubject,
    claim_id: int,
    decision: bool,
    rejection_reason: Optional[str] = None,
) -> ClaimDecision:
    """
    Admin approval or denial of a pending claim; a denial must carry a reason.
    Repeating the current decision is a no-op, contradicting a decided claim is a conflict.
    """
    reason = (rejection_reason or "").strip() or None
    if not decision and reason is None:
        raise InvalidInputError("rejection_reason is required when denying a claim")

    claim, owner_id = await _load_with_owner(session, claim_id, lock=True)
    target = CLAIM_APPROVED if decision else CLAIM_DENIED
    if claim.status == target:
        return ClaimDecision(claim=claim, changed=False)
    if not can_transition(claim.status, target):
        raise ConflictError(f"Claim has already been {claim.status}")

    claim.status = target
    claim.rejection_reason = None if decision else reason
    claim.approved_by = admin.id
    claim.approved_at = datetime.now(timezone.utc)
    session.add(
        Approval(
            entity_type="claim",
            entity_id=claim.id,
            admin_id=admin.id,
            decision=decision,
            reason=claim.rejection_reason,
            created_at=claim.approved_at,
        )
    )
    owner = await session.get(Account, owner_id)
    await session.commit()
    LOGGER.info("Admin %s %s claim id=%s", admin.id, target, claim.id)
    return ClaimDecision(claim=claim, changed=True, owner_email=owner.email if owner else None)


async def delete_claim(session: AsyncSession, subject: AuthSubject, claim_id: int) -> None:
    """Only the owner may delete; anyone else sees the claim as missing."""
    claim = await get_claim(session, subject, claim_id)
    await session.delete(claim)
    await session.commit()
    LOGGER.info("Account %s deleted claim id=%s", subject.id, claim_id)


async def list_pending_claims(session: AsyncSession) -> list[dict[str, Any]]:
    """Pending claims with the owner and product context an admin needs for review."""
    result = await session.execute(
        select(Claim, Policy, Account, Product.title)
        .join(Policy, Claim.policy_id == Policy.id)
        .join(Account, Policy.owner_id == Account.id)
        .outerjoin(Product, Policy.product_id == Product.id)
        .where(Claim.status == CLAIM_PENDING)
        .order_by(Claim.created_at, Claim.id)
    )
    rows = []
    for claim, policy, owner, product_title in result.all():
        rows.append({
            "claim": claim,
            "owner_id": owner.id,
            "owner_name": owner.name,
            "owner_email": owner.email,
            "policy_type": policy.policy_type,
            "coverage_amount": policy.coverage_amount,
            "product_id": policy.product_id,
            "product_title": product_title,
        })
    return rows
