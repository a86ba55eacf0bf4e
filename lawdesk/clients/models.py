from sqlalchemy import Column, String, Text, DateTime
from sqlalchemy.orm import relationship
from lawdesk.database import Base
from lawdesk.shared.models import EntityMixin, JSONType


class Client(Base, EntityMixin):
    """A person represented by the firm."""
    __tablename__ = "clients"

    first_name = Column(String, nullable=False)
    last_name = Column(String, nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)
    phone = Column(String, nullable=True)
    address = Column(Text, nullable=True)
    date_of_birth = Column(DateTime, nullable=True)
    emergency_contact = Column(JSONType, nullable=True)
    notes = Column(Text, nullable=True)

    cases = relationship("lawdesk.cases.models.Case", back_populates="client")
    consultations = relationship("lawdesk.consultations.models.Consultation", back_populates="client")
    invoices = relationship("lawdesk.invoices.models.Invoice", back_populates="client")

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"
