from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from api.deps import get_current_subject
from api.serializers import claim_to_response
from database import get_db
from schemas.auth import AuthSubject
from schemas.claim import ClaimCreate, ClaimStatusUpdate
from services.claims import create_claim, delete_claim, get_claim, list_claims, update_claim_status

router = APIRouter(prefix="/claims", tags=["claims"])


@router.post("", status_code=201)
async def file_claim(
    body: ClaimCreate,
    subject: AuthSubject = Depends(get_current_subject),
    db: AsyncSession = Depends(get_db),
):
    claim = await create_claim(db, subject, body.policy_id, body.amount, body.description)
    return claim_to_response(claim)


@router.get("")
async def list_mine(subject: AuthSubject = Depends(get_current_subject), db: AsyncSession = Depends(get_db)):
    return [claim_to_response(c) for c in await list_claims(db, subject)]


@router.get("/{claim_id}")
async def detail(
    claim_id: int,
    subject: AuthSubject = Depends(get_current_subject),
    db: AsyncSession = Depends(get_db),
):
    claim = await get_claim(db, subject, claim_id)
    return claim_to_response(claim)


@router.put("/{claim_id}")
async def update_status(
    claim_id: int,
    body: ClaimStatusUpdate,
    subject: AuthSubject = Depends(get_current_subject),
    db: AsyncSession = Depends(get_db),
):
    claim = await update_claim_status(db, subject, claim_id, body.status)
    return claim_to_response(claim)


@router.delete("/{claim_id}", status_code=204)
async def remove(
    claim_id: int,
    subject: AuthSubject = Depends(get_current_subject),
    db: AsyncSession = Depends(get_db),
):
    await delete_claim(db, subject, claim_id)
    return None
