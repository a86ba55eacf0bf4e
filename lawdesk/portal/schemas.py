from typing import List
from pydantic import BaseModel, EmailStr

from lawdesk.cases.schemas import CaseResponse
from lawdesk.clients.schemas import PortalClient
from lawdesk.consultations.schemas import ConsultationResponse
from lawdesk.invoices.schemas import InvoiceResponse


class AccessRequest(BaseModel):
    email: EmailStr


class AccessGranted(BaseModel):
    message: str


class PortalView(BaseModel):
    client: PortalClient
    cases: List[CaseResponse]
    consultations: List[ConsultationResponse]
    invoices: List[InvoiceResponse]


class SweepResult(BaseModel):
    message: str
    deleted: int
