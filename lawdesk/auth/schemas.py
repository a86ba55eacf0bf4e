from typing import Optional
from datetime import datetime
from pydantic import BaseModel, EmailStr, ConfigDict, Field
from uuid import UUID
from lawdesk.shared.schemas import APIModel


class UserLogin(BaseModel):
    email: EmailStr
    password: str


class UserRegister(BaseModel):
    email: EmailStr
    password: str = Field(min_length=8)


class UserSummary(BaseModel):
    id: UUID
    email: str
    role: str

    model_config = ConfigDict(from_attributes=True)


class Token(BaseModel):
    token: str
    user: UserSummary


class TokenPayload(BaseModel):
    sub: UUID
    email: str
    role: str


class UserProfile(UserSummary):
    profile_photo: Optional[str] = None
    created_at: datetime


class ProfileUpdate(APIModel):
    profile_photo: Optional[str] = None
