from __future__ import annotations

from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from models import Product, Transaction
from schemas.auth import AuthSubject


async def list_transactions(session: AsyncSession, subject: AuthSubject) -> list[dict[str, Any]]:
    """The caller's transaction history, newest first, with the product title attached."""
    result = await session.execute(
        select(Transaction, Product.title)
        .outerjoin(Product, Transaction.product_id == Product.id)
        .where(Transaction.account_id == subject.id)
        .order_by(Transaction.created_at.desc(), Transaction.id.desc())
    )
    return [
        {
            "id": t.id,
            "amount": t.amount,
            "transaction_type": t.transaction_type,
            "transaction_date": t.created_at,
            "status": t.status,
            "policy_id": t.policy_id,
            "product_id": t.product_id,
            "product_name": title,
        }
        for t, title in result.all()
    ]
