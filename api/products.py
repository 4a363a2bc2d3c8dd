from typing import Optional

from fastapi import APIRouter, Body, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from api.deps import get_current_subject
from api.serializers import policy_to_response, product_to_response, transaction_to_response
from database import get_db
from schemas.auth import AuthSubject
from schemas.product import ProductCreate, PurchaseRequest
from services.policies import purchase_product
from services.products import create_product, delete_product, get_product, list_approved_products, list_my_products

router = APIRouter(prefix="/products", tags=["products"])


@router.get("")
async def list_products(db: AsyncSession = Depends(get_db)):
    """Approved products only; no authentication required."""
    return [product_to_response(p) for p in await list_approved_products(db)]


@router.post("", status_code=201)
async def submit_product(
    body: ProductCreate,
    subject: AuthSubject = Depends(get_current_subject),
    db: AsyncSession = Depends(get_db),
):
    product = await create_product(db, subject, body)
    return product_to_response(product)


@router.get("/mine")
async def my_products(subject: AuthSubject = Depends(get_current_subject), db: AsyncSession = Depends(get_db)):
    return [product_to_response(p) for p in await list_my_products(db, subject)]


@router.get("/{product_id}")
async def product_detail(
    product_id: int,
    subject: AuthSubject = Depends(get_current_subject),
    db: AsyncSession = Depends(get_db),
):
    product = await get_product(db, subject, product_id)
    return product_to_response(product)


@router.delete("/{product_id}", status_code=204)
async def remove_product(
    product_id: int,
    subject: AuthSubject = Depends(get_current_subject),
    db: AsyncSession = Depends(get_db),
):
    await delete_product(db, subject, product_id)
    return None


@router.post("/{product_id}/purchase", status_code=201)
async def buy_product(
    product_id: int,
    body: Optional[PurchaseRequest] = Body(None),
    subject: AuthSubject = Depends(get_current_subject),
    db: AsyncSession = Depends(get_db),
):
    body = body or PurchaseRequest()
    policy, transaction = await purchase_product(db, subject, product_id, body.start_date, body.end_date)
    return {
        "policy": policy_to_response(policy),
        "transaction": transaction_to_response(transaction),
    }
