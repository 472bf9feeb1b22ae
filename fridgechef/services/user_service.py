"""User service — account records. AI credential fields start at their defaults."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from fridgechef.models.user import User
from fridgechef.schemas.user import UserCreate


async def get_user(db: AsyncSession, user_id: str) -> User | None:
    return await db.get(User, user_id)


async def get_user_by_email(db: AsyncSession, email: str) -> User | None:
    result = await db.execute(select(User).where(User.email == email.lower()))
    return result.scalar_one_or_none()


async def create_user(db: AsyncSession, data: UserCreate) -> User:
    user = User(name=data.name.strip(), email=data.email.lower())
    db.add(user)
    await db.commit()
    await db.refresh(user)
    return user
