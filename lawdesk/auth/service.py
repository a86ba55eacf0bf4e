from typing import Optional
from uuid import UUID

from fastapi import HTTPException, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from lawdesk.auth import models, schemas, security


class AuthService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_user(self, user_id: UUID) -> Optional[models.User]:
        return await self.db.get(models.User, user_id)

    async def get_user_by_email(self, email: str) -> Optional[models.User]:
        result = await self.db.execute(select(models.User).where(models.User.email == email))
        return result.scalars().first()

    async def authenticate_user(self, email: str, password: str) -> Optional[models.User]:
        user = await self.get_user_by_email(email)
        if not user:
            return None
        if not security.verify_password(password, user.hashed_password):
            return None
        return user

    async def register_user(self, register_data: schemas.UserRegister) -> models.User:
        if await self.get_user_by_email(register_data.email):
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="User already exists")

        user = models.User(
            email=register_data.email,
            hashed_password=security.get_password_hash(register_data.password),
            role=models.UserRole.ADMIN.value,
        )
        self.db.add(user)
        await self.db.commit()
        await self.db.refresh(user)
        return user

    async def update_profile(self, user: models.User, profile_in: schemas.ProfileUpdate) -> models.User:
        for field, value in profile_in.model_dump(exclude_unset=True).items():
            setattr(user, field, value)
        await self.db.commit()
        await self.db.refresh(user)
        return user

    @staticmethod
    def issue_token(user: models.User) -> dict:
        access_token = security.create_access_token(
            data={"sub": str(user.id), "email": user.email, "role": user.role}
        )
        return {"token": access_token, "user": user}
