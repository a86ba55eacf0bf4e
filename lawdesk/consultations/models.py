from decimal import Decimal
from enum import Enum
from sqlalchemy import Column, String, Text, Integer, Numeric, DateTime, ForeignKey, Uuid
from sqlalchemy.orm import relationship
from lawdesk.database import Base
from lawdesk.shared.models import EntityMixin


class ConsultationType(str, Enum):
    PHONE = "phone"
    VIRTUAL = "virtual"
    IN_PERSON = "in-person"


class ConsultationStatus(str, Enum):
    SCHEDULED = "scheduled"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    NO_SHOW = "no-show"


# Hourly rate charged when the booking does not name one
DEFAULT_RATES = {
    ConsultationType.PHONE: Decimal("0"),
    ConsultationType.VIRTUAL: Decimal("200"),
    ConsultationType.IN_PERSON: Decimal("250"),
}


class Consultation(Base, EntityMixin):
    __tablename__ = "consultations"

    client_id = Column(Uuid(as_uuid=True), ForeignKey("clients.id"), nullable=True, index=True)
    type = Column(String, nullable=False)
    case_type = Column(String, nullable=True)
    scheduled_at = Column(DateTime, nullable=False)
    duration = Column(Integer, nullable=False, default=60)  # minutes
    status = Column(String, nullable=False, default=ConsultationStatus.SCHEDULED.value)
    rate = Column(Numeric(10, 2), nullable=True)
    description = Column(Text, nullable=True)
    notes = Column(Text, nullable=True)

    client = relationship("lawdesk.clients.models.Client", back_populates="consultations")
