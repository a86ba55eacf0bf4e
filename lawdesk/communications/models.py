from enum import Enum
from sqlalchemy import Column, String, Text, ForeignKey, Uuid
from lawdesk.database import Base
from lawdesk.shared.models import RecordMixin, JSONType


class CommunicationType(str, Enum):
    EMAIL = "email"
    CALL = "call"
    MEETING = "meeting"
    LETTER = "letter"


class Direction(str, Enum):
    INBOUND = "inbound"
    OUTBOUND = "outbound"


class Communication(Base, RecordMixin):
    """Log entry for a contact with a client."""
    __tablename__ = "communications"

    client_id = Column(Uuid(as_uuid=True), ForeignKey("clients.id"), nullable=False, index=True)
    case_id = Column(Uuid(as_uuid=True), ForeignKey("cases.id"), nullable=True, index=True)
    type = Column(String, nullable=False)
    direction = Column(String, nullable=False)
    subject = Column(String, nullable=True)
    content = Column(Text, nullable=False)
    attachments = Column(JSONType, nullable=True)
