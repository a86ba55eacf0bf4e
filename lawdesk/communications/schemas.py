from datetime import datetime
from uuid import UUID
from typing import Any, List, Optional
from pydantic import ConfigDict

from lawdesk.communications.models import CommunicationType, Direction
from lawdesk.shared.schemas import APIModel


class CommunicationCreate(APIModel):
    client_id: UUID
    case_id: Optional[UUID] = None
    type: CommunicationType
    direction: Direction
    subject: Optional[str] = None
    content: str
    attachments: Optional[List[Any]] = None


class CommunicationResponse(CommunicationCreate):
    id: UUID
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
