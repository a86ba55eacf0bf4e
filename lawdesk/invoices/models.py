from enum import Enum
from sqlalchemy import Column, String, Numeric, DateTime, ForeignKey, Uuid
from sqlalchemy.orm import relationship
from lawdesk.database import Base
from lawdesk.shared.models import EntityMixin, JSONType


class InvoiceStatus(str, Enum):
    DRAFT = "draft"
    SENT = "sent"
    PAID = "paid"
    OVERDUE = "overdue"


class Invoice(Base, EntityMixin):
    __tablename__ = "invoices"

    client_id = Column(Uuid(as_uuid=True), ForeignKey("clients.id"), nullable=False, index=True)
    case_id = Column(Uuid(as_uuid=True), ForeignKey("cases.id"), nullable=True)
    invoice_number = Column(String, unique=True, nullable=False)
    amount = Column(Numeric(10, 2), nullable=False)
    tax = Column(Numeric(10, 2), nullable=False, default=0)
    total_amount = Column(Numeric(10, 2), nullable=False)
    status = Column(String, nullable=False, default=InvoiceStatus.DRAFT.value)
    due_date = Column(DateTime, nullable=False)
    paid_at = Column(DateTime, nullable=True)
    line_items = Column(JSONType, nullable=True)  # ordered [{description, quantity, rate, amount}]

    client = relationship("lawdesk.clients.models.Client", back_populates="invoices")
