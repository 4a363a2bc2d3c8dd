from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from api.deps import get_current_subject
from database import get_db
from schemas.auth import AuthSubject
from services.transactions import list_transactions
from utils.case import serialize_record

router = APIRouter(prefix="/transactions", tags=["transactions"])


@router.get("")
async def history(subject: AuthSubject = Depends(get_current_subject), db: AsyncSession = Depends(get_db)):
    return [serialize_record(row) for row in await list_transactions(db, subject)]
