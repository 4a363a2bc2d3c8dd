"""
Seed the catalogue with pre-approved insurance products and create the bootstrap admin
(BOOTSTRAP_ADMIN_CONTACT / BOOTSTRAP_ADMIN_PASSWORD) when configured.
Run: python -m scripts.seed_products (from the project root, with DB reachable).
"""
import asyncio
import os
import sys
from datetime import datetime, timezone
from decimal import Decimal

# Add parent so we can import from the project root
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from sqlalchemy import select

from database import init_db, session_scope
from models import Product
from services.accounts import ensure_bootstrap_admin


PRODUCTS_DATA = [
    {
        "title": "Basic Health Cover",
        "description": "Hospitalisation and outpatient cover for individuals",
        "coverage_amount": Decimal("50000"),
        "premium": Decimal("600"),
        "duration": 12,
    },
    {
        "title": "Family Health Plus",
        "description": "Health cover for up to four family members",
        "coverage_amount": Decimal("150000"),
        "premium": Decimal("1800"),
        "duration": 12,
    },
    {
        "title": "Term Life 20",
        "description": "Twenty-year term life insurance",
        "coverage_amount": Decimal("500000"),
        "premium": Decimal("950"),
        "duration": 240,
    },
    {
        "title": "Home Contents",
        "description": "Theft, fire and water damage cover for household contents",
        "coverage_amount": Decimal("40000"),
        "premium": Decimal("320"),
        "duration": 12,
    },
    {
        "title": "Whole Life",
        "description": "Lifetime cover with no expiry",
        "coverage_amount": Decimal("250000"),
        "premium": Decimal("2400"),
        "duration": 0,
    },
]


async def seed():
    await init_db()
    async with session_scope() as session:
        admin = await ensure_bootstrap_admin(session)
        if admin is not None:
            print(f"Admin account ready: id={admin.id}")
        for data in PRODUCTS_DATA:
            existing = await session.execute(select(Product.id).where(Product.title == data["title"]))
            if existing.first() is not None:
                print(f"Product {data['title']!r} already exists, skipping")
                continue
            session.add(
                Product(
                    **data,
                    is_approved=True,
                    created_by=admin.id if admin is not None else None,
                    created_at=datetime.now(timezone.utc),
                )
            )
            print(f"Seeded product: {data['title']}")
        await session.commit()
    print("Seed complete.")


if __name__ == "__main__":
    asyncio.run(seed())
