from datetime import datetime
from uuid import UUID
from typing import Any, Dict, Optional
from pydantic import BaseModel, ConfigDict, EmailStr, field_validator
from lawdesk.shared.schemas import APIModel, reject_null

class ClientBase(APIModel):
    first_name: str
    last_name: str
    email: EmailStr
    phone: Optional[str] = None
    address: Optional[str] = None
    date_of_birth: Optional[datetime] = None
    emergency_contact: Optional[Dict[str, Any]] = None
    notes: Optional[str] = None

class ClientCreate(ClientBase):
    pass

class ClientUpdate(ClientBase):
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[EmailStr] = None

    @field_validator("first_name", "last_name", "email")
    @classmethod
    def required_columns(cls, v):
        return reject_null(v)

class ClientResponse(ClientBase):
    email: str
    id: UUID
    created_at: datetime
    updated_at: datetime
    
    model_config = ConfigDict(from_attributes=True)

class PortalClient(BaseModel):
    """Subset of the client record shown in the client portal."""
    first_name: str
    last_name: str
    email: str
    phone: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)
