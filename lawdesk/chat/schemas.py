from datetime import datetime
from typing import List, Optional
from pydantic import ConfigDict, Field
from lawdesk.shared.schemas import APIModel


class ChatMessage(APIModel):
    role: str  # "user" or "assistant"
    content: str
    timestamp: Optional[datetime] = None


class ChatRequest(APIModel):
    message: str = Field(min_length=1)
    session_id: str = Field(min_length=1)
    client_email: Optional[str] = None


class ChatResponse(APIModel):
    response: str
    session_id: str


class ChatSessionResponse(APIModel):
    session_id: str
    client_email: Optional[str] = None
    status: str
    messages: List[ChatMessage]
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
