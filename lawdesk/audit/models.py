from sqlalchemy import Column, String, Uuid
from lawdesk.database import Base
from lawdesk.shared.models import RecordMixin, JSONType


class AuditLog(Base, RecordMixin):
    """Append-only record of an action. Rows are never updated."""
    __tablename__ = "audit_logs"

    user_id = Column(Uuid(as_uuid=True), nullable=True, index=True)  # None for unauthenticated actors
    action = Column(String, nullable=False)
    resource_type = Column(String, nullable=False)
    resource_id = Column(String, nullable=True)
    status = Column(String, nullable=False, default="success")
    ip = Column(String, nullable=True)
    user_agent = Column(String, nullable=True)
    details = Column(JSONType, nullable=False, default=dict)
