from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from news_api.database import get_db
from news_api.schemas import UserCreate, UserEnvelope, UserListEnvelope
from news_api.services import user_service

router = APIRouter(prefix="/api/users", tags=["users"])


@router.get("", response_model=UserListEnvelope)
async def list_users(db: AsyncSession = Depends(get_db)):
    return {"users": await user_service.list_users(db)}


@router.get("/{username}", response_model=UserEnvelope)
async def get_user(username: str, db: AsyncSession = Depends(get_db)):
    return {"user": await user_service.get_user(db, username)}


# Duplicate usernames surface as IntegrityError and are rendered as 400
# by the handlers registered in news_api.errors.
@router.post("", status_code=201, response_model=UserEnvelope)
async def create_user(data: UserCreate, db: AsyncSession = Depends(get_db)):
    return {"user": await user_service.create_user(db, data)}
