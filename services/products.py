from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from models import Account, Approval, Product
from schemas.auth import AuthSubject
from schemas.product import ProductCreate
from utils.exceptions import ForbiddenError, InvalidInputError, NotFoundError
from utils.logging import get_logger
from utils.validation import required_text

LOGGER = get_logger(__name__)

MSG_PRODUCT_NOT_FOUND = "Product not found"


async def create_product(session: AsyncSession, subject: AuthSubject, body: ProductCreate) -> Product:
    """Submit a product; standard accounts submit for review, admins publish directly."""
    title = required_text(body.title, "title")
    description = required_text(body.description, "description")
    if body.coverage_amount <= 0 or body.premium <= 0:
        raise InvalidInputError("coverage_amount and premium must be positive")
    if body.duration < 0:
        raise InvalidInputError("duration must be zero (lifetime) or a positive number of months")
    product = Product(
        title=title,
        description=description,
        coverage_amount=body.coverage_amount,
        premium=body.premium,
        duration=body.duration,
        is_approved=subject.is_admin,
        created_by=subject.id,
        created_at=datetime.now(timezone.utc),
    )
    session.add(product)
    await session.commit()
    LOGGER.info("Account %s submitted product id=%s approved=%s", subject.id, product.id, product.is_approved)
    return product


async def list_approved_products(session: AsyncSession) -> list[Product]:
    result = await session.execute(
        select(Product).where(Product.is_approved.is_(True)).order_by(Product.created_at.desc(), Product.id.desc())
    )
    return list(result.scalars().all())


async def list_my_products(session: AsyncSession, subject: AuthSubject) -> list[Product]:
    result = await session.execute(
        select(Product).where(Product.created_by == subject.id).order_by(Product.created_at.desc(), Product.id.desc())
    )
    return list(result.scalars().all())


async def list_pending_products(session: AsyncSession) -> list[Product]:
    result = await session.execute(
        select(Product).where(Product.is_approved.is_(False)).order_by(Product.created_at, Product.id)
    )
    return list(result.scalars().all())


async def get_product(session: AsyncSession, subject: AuthSubject, product_id: int) -> Product:
    """Unapproved products are visible only to their creator and to admins."""
    product = await session.get(Product, product_id)
    if product is None:
        raise NotFoundError(MSG_PRODUCT_NOT_FOUND)
    if not product.is_approved and product.created_by != subject.id and not subject.is_admin:
        raise ForbiddenError("Access denied")
    return product


async def delete_product(session: AsyncSession, subject: AuthSubject, product_id: int) -> None:
    product = await session.get(Product, product_id)
    if product is None:
        raise NotFoundError(MSG_PRODUCT_NOT_FOUND)
    if product.created_by != subject.id and not subject.is_admin:
        raise ForbiddenError("Access denied")
    await session.delete(product)
    await session.commit()
    LOGGER.info("Account %s deleted product id=%s", subject.id, product_id)


async def approve_product(
    session: AsyncSession, admin: AuthSubject, product_id: int, decision: bool, reason: str | None = None
) -> tuple[Product, str | None]:
    """
    Record an admin decision on a product. Denied products stay unlisted.
    Returns the product and the creator's email for the follow-up notification.
    """
    result = await session.execute(select(Product).where(Product.id == product_id).with_for_update())
    product = result.scalar_one_or_none()
    if product is None:
        raise NotFoundError(MSG_PRODUCT_NOT_FOUND)

    product.is_approved = decision
    session.add(
        Approval(
            entity_type="product",
            entity_id=product.id,
            admin_id=admin.id,
            decision=decision,
            reason=reason,
            created_at=datetime.now(timezone.utc),
        )
    )
    creator = await session.get(Account, product.created_by) if product.created_by else None
    await session.commit()
    LOGGER.info("Admin %s %s product id=%s", admin.id, "approved" if decision else "denied", product.id)
    return product, creator.email if creator else None
