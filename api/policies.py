from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from api.deps import get_current_subject
from api.serializers import policy_to_response
from database import get_db
from schemas.auth import AuthSubject
from schemas.policy import PolicyCreate
from services.policies import create_policy, delete_policy, get_policy, list_policies

router = APIRouter(prefix="/policies", tags=["policies"])


@router.post("", status_code=201)
async def create(
    body: PolicyCreate,
    subject: AuthSubject = Depends(get_current_subject),
    db: AsyncSession = Depends(get_db),
):
    policy = await create_policy(db, subject, body)
    return policy_to_response(policy)


@router.get("")
async def list_mine(subject: AuthSubject = Depends(get_current_subject), db: AsyncSession = Depends(get_db)):
    return [policy_to_response(p) for p in await list_policies(db, subject)]


@router.get("/{policy_id}")
async def detail(
    policy_id: int,
    subject: AuthSubject = Depends(get_current_subject),
    db: AsyncSession = Depends(get_db),
):
    policy = await get_policy(db, subject, policy_id)
    return policy_to_response(policy)


@router.delete("/{policy_id}", status_code=204)
async def remove(
    policy_id: int,
    subject: AuthSubject = Depends(get_current_subject),
    db: AsyncSession = Depends(get_db),
):
    await delete_policy(db, subject, policy_id)
    return None
