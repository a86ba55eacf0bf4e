from sqlalchemy import Column, String
from lawdesk.database import Base
from lawdesk.shared.models import EntityMixin, JSONType


class AiChatSession(Base, EntityMixin):
    __tablename__ = "ai_chats"

    session_id = Column(String, unique=True, nullable=False, index=True)
    client_email = Column(String, nullable=True)
    # [{"role": "user" | "assistant", "content": str, "timestamp": iso str}]
    # replaced wholesale on every turn, never mutated in place
    messages = Column(JSONType, nullable=False, default=list)
    status = Column(String, nullable=False, default="active")
