from uuid import UUID
from typing import Optional
from datetime import datetime
from pydantic import ConfigDict, field_validator

from lawdesk.documents.models import DocumentCategory
from lawdesk.shared.schemas import APIModel, reject_null


class DocumentResponse(APIModel):
    id: UUID
    filename: str
    original_name: str
    size: int
    mime_type: str
    client_id: Optional[UUID] = None
    case_id: Optional[UUID] = None
    category: DocumentCategory
    description: Optional[str] = None
    uploaded_by: Optional[UUID] = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class DocumentUpdate(APIModel):
    category: Optional[DocumentCategory] = None
    description: Optional[str] = None

    @field_validator("category")
    @classmethod
    def required_columns(cls, v):
        return reject_null(v)
