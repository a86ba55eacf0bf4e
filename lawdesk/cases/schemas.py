from datetime import datetime
from decimal import Decimal
from uuid import UUID
from typing import Any, Dict, Optional
from pydantic import ConfigDict, field_validator

from lawdesk.cases.models import CaseStatus, LEGACY_CASE_STATUS
from lawdesk.shared.schemas import APIModel, reject_null


def normalize_status(value: Any) -> Any:
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in LEGACY_CASE_STATUS:
            return LEGACY_CASE_STATUS[lowered]
        return lowered
    return value


class CaseBase(APIModel):
    title: str
    case_type: str
    status: CaseStatus = CaseStatus.ACTIVE
    description: Optional[str] = None
    court_details: Optional[Dict[str, Any]] = None
    important_dates: Optional[Dict[str, Any]] = None
    billable_hours: Decimal = Decimal("0")
    total_fees: Decimal = Decimal("0")

    @field_validator("status", mode="before")
    @classmethod
    def legacy_status(cls, v):
        return normalize_status(v)


class CaseCreate(CaseBase):
    client_id: UUID


class CaseUpdate(CaseBase):
    title: Optional[str] = None
    case_type: Optional[str] = None
    status: Optional[CaseStatus] = None
    billable_hours: Optional[Decimal] = None
    total_fees: Optional[Decimal] = None

    @field_validator("title", "case_type", "status", "billable_hours", "total_fees")
    @classmethod
    def required_columns(cls, v):
        return reject_null(v)


class CaseResponse(CaseBase):
    id: UUID
    client_id: UUID
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
