from datetime import datetime, timezone
from decimal import Decimal
from uuid import UUID
from typing import Optional
from pydantic import ConfigDict, EmailStr, field_validator, model_validator

from lawdesk.consultations.models import ConsultationStatus, ConsultationType
from lawdesk.shared.schemas import APIModel, reject_null


def naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    if value is not None and value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


class ConsultationBase(APIModel):
    type: ConsultationType
    case_type: Optional[str] = None
    scheduled_at: datetime
    duration: int = 60
    rate: Optional[Decimal] = None
    description: Optional[str] = None
    notes: Optional[str] = None

    @field_validator("scheduled_at")
    @classmethod
    def store_utc(cls, v):
        return naive_utc(v)


class ConsultationCreate(ConsultationBase):
    """Booking form payload.

    Either names an existing client, or carries the contact details used to
    find or create one by email.
    """
    client_id: Optional[UUID] = None
    client_email: Optional[EmailStr] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    phone: Optional[str] = None

    @model_validator(mode="after")
    def contact_complete(self):
        if self.client_email and self.client_id is None and not (self.first_name and self.last_name):
            raise ValueError("first_name and last_name are required with client_email")
        return self


class ConsultationUpdate(APIModel):
    type: Optional[ConsultationType] = None
    case_type: Optional[str] = None
    scheduled_at: Optional[datetime] = None
    duration: Optional[int] = None
    status: Optional[ConsultationStatus] = None
    rate: Optional[Decimal] = None
    description: Optional[str] = None
    notes: Optional[str] = None

    @field_validator("scheduled_at")
    @classmethod
    def store_utc(cls, v):
        return naive_utc(v)

    @field_validator("type", "scheduled_at", "duration", "status")
    @classmethod
    def required_columns(cls, v):
        return reject_null(v)


class ConsultationResponse(ConsultationBase):
    id: UUID
    client_id: Optional[UUID] = None
    status: ConsultationStatus
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
