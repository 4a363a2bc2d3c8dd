"""Response shaping shared by the routers: ORM rows to camelCase JSON dicts."""
from typing import Any

from models import Account, Claim, Policy, Product, Transaction
from utils.case import serialize_record


def account_to_response(a: Account) -> dict[str, Any]:
    return serialize_record({
        "id": a.id,
        "name": a.name,
        "contact": a.contact,
        "email": a.email,
        "role": a.role,
        "created_at": a.created_at,
    })


def product_to_response(p: Product) -> dict[str, Any]:
    return serialize_record({
        "id": p.id,
        "title": p.title,
        "description": p.description,
        "coverage_amount": p.coverage_amount,
        "premium": p.premium,
        "duration": p.duration,
        "is_approved": p.is_approved,
        "created_by": p.created_by,
        "created_at": p.created_at,
    })


def policy_to_response(p: Policy) -> dict[str, Any]:
    return serialize_record({
        "id": p.id,
        "owner_id": p.owner_id,
        "product_id": p.product_id,
        "type": p.policy_type,
        "amount": p.coverage_amount,
        "start_date": p.start_date,
        "end_date": p.end_date,
        "status": p.status,
        "approved_by": p.approved_by,
        "approved_at": p.approved_at,
        "created_at": p.created_at,
    })


def claim_to_response(c: Claim) -> dict[str, Any]:
    return serialize_record({
        "id": c.id,
        "policy_id": c.policy_id,
        "amount": c.amount,
        "description": c.description,
        "status": c.status,
        "rejection_reason": c.rejection_reason,
        "approved_by": c.approved_by,
        "approved_at": c.approved_at,
        "created_at": c.created_at,
    })


def transaction_to_response(t: Transaction) -> dict[str, Any]:
    return serialize_record({
        "id": t.id,
        "amount": t.amount,
        "transaction_type": t.transaction_type,
        "transaction_date": t.created_at,
        "status": t.status,
        "policy_id": t.policy_id,
        "product_id": t.product_id,
    })
