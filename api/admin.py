from datetime import date

from fastapi import APIRouter, BackgroundTasks, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from api.deps import require_admin
from api.serializers import account_to_response, claim_to_response, policy_to_response, product_to_response
from database import get_db
from schemas.admin import DecisionRequest
from schemas.auth import AuthSubject, RoleUpdate
from services.accounts import list_accounts, set_role
from services.claims import approve_claim, list_pending_claims
from services.notifications import Notifier, get_notifier
from services.policies import approve_policy, list_pending_policies
from services.products import approve_product, list_pending_products
from utils.case import serialize_record

router = APIRouter(prefix="/admin", tags=["admin"])


@router.get("/users")
async def users(admin: AuthSubject = Depends(require_admin), db: AsyncSession = Depends(get_db)):
    return [account_to_response(a) for a in await list_accounts(db)]


@router.put("/users/{account_id}/role")
async def change_role(
    account_id: int,
    body: RoleUpdate,
    admin: AuthSubject = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    account = await set_role(db, admin, account_id, body.role)
    return account_to_response(account)


@router.get("/pendingProducts")
async def pending_products(admin: AuthSubject = Depends(require_admin), db: AsyncSession = Depends(get_db)):
    return [product_to_response(p) for p in await list_pending_products(db)]


@router.post("/approveProduct/{product_id}")
async def decide_product(
    product_id: int,
    body: DecisionRequest,
    background_tasks: BackgroundTasks,
    admin: AuthSubject = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
    notifier: Notifier = Depends(get_notifier),
):
    product, creator_email = await approve_product(db, admin, product_id, body.decision, body.reason)
    background_tasks.add_task(
        notifier.notify,
        creator_email,
        "Product Approved" if body.decision else "Product Rejected",
        "product_approved" if body.decision else "product_rejected",
        {"title": product.title, "reason": body.reason or "N/A"},
    )
    return {
        "success": True,
        "message": f"Product {'approved' if body.decision else 'denied'}",
        "product": product_to_response(product),
    }


@router.get("/pendingPolicies")
async def pending_policies(admin: AuthSubject = Depends(require_admin), db: AsyncSession = Depends(get_db)):
    return [policy_to_response(p) for p in await list_pending_policies(db)]


@router.post("/approvePolicy/{policy_id}")
async def decide_policy(
    policy_id: int,
    body: DecisionRequest,
    background_tasks: BackgroundTasks,
    admin: AuthSubject = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
    notifier: Notifier = Depends(get_notifier),
):
    outcome = await approve_policy(db, admin, policy_id, body.decision)
    policy = outcome.policy
    if outcome.changed:
        background_tasks.add_task(
            notifier.notify,
            outcome.owner_email,
            "Policy Approved" if body.decision else "Policy Rejected",
            "policy_approved" if body.decision else "policy_rejected",
            {
                "policy_id": policy.id,
                "status": "approved" if body.decision else "rejected",
                "decision_date": date.today().isoformat(),
            },
        )
    return {
        "success": True,
        "message": f"Policy {policy.status}",
        "policy": policy_to_response(policy),
    }


@router.get("/pendingClaims")
async def pending_claims(admin: AuthSubject = Depends(require_admin), db: AsyncSession = Depends(get_db)):
    out = []
    for row in await list_pending_claims(db):
        item = claim_to_response(row.pop("claim"))
        item.update(serialize_record(row))
        out.append(item)
    return out


@router.post("/approveClaim/{claim_id}")
async def decide_claim(
    claim_id: int,
    body: DecisionRequest,
    background_tasks: BackgroundTasks,
    admin: AuthSubject = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
    notifier: Notifier = Depends(get_notifier),
):
    outcome = await approve_claim(db, admin, claim_id, body.decision, body.reason)
    claim = outcome.claim
    if outcome.changed:
        background_tasks.add_task(
            notifier.notify,
            outcome.owner_email,
            "Claim Approved" if body.decision else "Claim Rejected",
            "claim_approved" if body.decision else "claim_rejected",
            {"claim_id": claim.id, "rejection_reason": claim.rejection_reason or "N/A"},
        )
    return {
        "success": True,
        "message": f"Claim {claim.status}",
        "claim": claim_to_response(claim),
    }
