from enum import Enum
from sqlalchemy import Column, String, Text, Numeric, ForeignKey, Uuid
from sqlalchemy.orm import relationship
from lawdesk.database import Base
from lawdesk.shared.models import EntityMixin, JSONType


class CaseStatus(str, Enum):
    ACTIVE = "active"
    ON_HOLD = "on-hold"
    CLOSED = "closed"


# Older admin screens used a different vocabulary; map it onto the stored one.
LEGACY_CASE_STATUS = {
    "open": CaseStatus.ACTIVE,
    "in-progress": CaseStatus.ACTIVE,
    "settled": CaseStatus.CLOSED,
    "dismissed": CaseStatus.CLOSED,
}


class Case(Base, EntityMixin):
    """A legal matter owned by a client."""
    __tablename__ = "cases"

    client_id = Column(Uuid(as_uuid=True), ForeignKey("clients.id"), nullable=False, index=True)
    title = Column(String, nullable=False)
    case_type = Column(String, nullable=False)
    status = Column(String, nullable=False, default=CaseStatus.ACTIVE.value)
    description = Column(Text, nullable=True)
    court_details = Column(JSONType, nullable=True)
    important_dates = Column(JSONType, nullable=True)
    billable_hours = Column(Numeric(10, 2), nullable=False, default=0)
    total_fees = Column(Numeric(10, 2), nullable=False, default=0)

    client = relationship("lawdesk.clients.models.Client", back_populates="cases")
