from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from api.deps import get_current_subject, get_optional_subject
from api.serializers import account_to_response
from database import get_db
from schemas.auth import AuthSubject, LoginRequest, ProfileUpdate, RegisterRequest
from services.accounts import authenticate, get_account, register_account, update_profile

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", status_code=201)
async def register(
    body: RegisterRequest,
    caller: Optional[AuthSubject] = Depends(get_optional_subject),
    db: AsyncSession = Depends(get_db),
):
    account = await register_account(db, body, caller)
    return account_to_response(account)


@router.post("/login")
async def login(body: LoginRequest, db: AsyncSession = Depends(get_db)):
    account, token = await authenticate(db, body.contact, body.email, body.password)
    return {"token": token, "user": account_to_response(account)}


@router.get("/me")
async def me(subject: AuthSubject = Depends(get_current_subject), db: AsyncSession = Depends(get_db)):
    account = await get_account(db, subject.id)
    return account_to_response(account)


@router.put("/me")
async def update_me(
    body: ProfileUpdate,
    subject: AuthSubject = Depends(get_current_subject),
    db: AsyncSession = Depends(get_db),
):
    account = await update_profile(db, subject, body)
    return account_to_response(account)
