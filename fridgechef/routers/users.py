"""User account endpoints."""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from fridgechef.database import get_db
from fridgechef.deps import get_current_user_id
from fridgechef.schemas.user import UserCreate, UserResponse
from fridgechef.services import user_service

router = APIRouter()


@router.post("/", response_model=UserResponse, status_code=201)
async def create_user(data: UserCreate, db: AsyncSession = Depends(get_db)):
    existing = await user_service.get_user_by_email(db, data.email)
    if existing:
        raise HTTPException(status_code=409, detail="Email already in use")
    return await user_service.create_user(db, data)


@router.get("/me", response_model=UserResponse)
async def get_me(
    user_id: str = Depends(get_current_user_id), db: AsyncSession = Depends(get_db)
):
    user = await user_service.get_user(db, user_id)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return user
