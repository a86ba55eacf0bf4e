from enum import Enum
from sqlalchemy import Column, String, Text
from lawdesk.database import Base
from lawdesk.shared.models import EntityMixin


class UserRole(str, Enum):
    ADMIN = "admin"


class User(Base, EntityMixin):
    """Administrative staff account."""
    __tablename__ = "users"

    email = Column(String, unique=True, index=True, nullable=False)
    hashed_password = Column(String, nullable=False)
    role = Column(String, nullable=False, default=UserRole.ADMIN.value)
    profile_photo = Column(Text, nullable=True)
