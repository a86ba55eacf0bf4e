from sqlalchemy import Column, String, DateTime, ForeignKey, Uuid
from sqlalchemy.orm import relationship
from lawdesk.database import Base
from lawdesk.shared.models import RecordMixin


class ClientToken(Base, RecordMixin):
    """Short-lived bearer secret granting read access to one client's records."""
    __tablename__ = "client_tokens"

    client_id = Column(Uuid(as_uuid=True), ForeignKey("clients.id", ondelete="CASCADE"), nullable=False, index=True)
    token = Column(String(64), unique=True, nullable=False, index=True)
    expires_at = Column(DateTime, nullable=False, index=True)

    client = relationship("lawdesk.clients.models.Client")
