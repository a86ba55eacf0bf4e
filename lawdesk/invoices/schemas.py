from datetime import datetime
from decimal import Decimal
from uuid import UUID
from typing import List, Optional
from pydantic import ConfigDict, Field, field_validator

from lawdesk.consultations.schemas import naive_utc
from lawdesk.invoices.models import InvoiceStatus
from lawdesk.shared.schemas import APIModel, reject_null


class LineItem(APIModel):
    description: str
    quantity: Decimal = Decimal("1")
    rate: Decimal
    amount: Optional[Decimal] = None


class InvoiceBase(APIModel):
    invoice_number: str
    amount: Decimal
    tax: Decimal = Decimal("0")
    status: InvoiceStatus = InvoiceStatus.DRAFT
    due_date: datetime
    paid_at: Optional[datetime] = None
    line_items: List[LineItem] = Field(default_factory=list)

    @field_validator("due_date", "paid_at")
    @classmethod
    def store_utc(cls, v):
        return naive_utc(v)


class InvoiceCreate(InvoiceBase):
    client_id: UUID
    case_id: Optional[UUID] = None
    total_amount: Optional[Decimal] = None


class InvoiceUpdate(APIModel):
    status: Optional[InvoiceStatus] = None
    due_date: Optional[datetime] = None
    paid_at: Optional[datetime] = None

    @field_validator("due_date", "paid_at")
    @classmethod
    def store_utc(cls, v):
        return naive_utc(v)

    @field_validator("status", "due_date")
    @classmethod
    def required_columns(cls, v):
        return reject_null(v)


class InvoiceResponse(InvoiceBase):
    id: UUID
    client_id: UUID
    case_id: Optional[UUID] = None
    total_amount: Decimal
    line_items: Optional[List[LineItem]] = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
