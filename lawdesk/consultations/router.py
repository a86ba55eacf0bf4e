from typing import List
from uuid import UUID
from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession
from lawdesk.database import get_db
from lawdesk.auth.schemas import TokenPayload
from lawdesk.auth.dependencies import get_current_identity
from lawdesk.audit.service import AuditService
from lawdesk.consultations.schemas import ConsultationCreate, ConsultationUpdate, ConsultationResponse
from lawdesk.consultations.service import ConsultationService
from lawdesk.notifications.email import EmailSender, get_email_sender

router = APIRouter(prefix="/consultations", tags=["consultations"])


@router.post("", response_model=ConsultationResponse, status_code=status.HTTP_201_CREATED)
async def book_consultation(
    booking: ConsultationCreate,
    request: Request,
    db: AsyncSession = Depends(get_db),
    sender: EmailSender = Depends(get_email_sender),
):
    """Public booking form. Creates the client on first contact."""
    service = ConsultationService(db)
    consultation = await service.book(booking)
    result = await service.send_confirmation(consultation, booking, sender)
    await AuditService(db).record(
        request, None, "create", "consultation", consultation.id,
        {
            "client_id": str(consultation.client_id) if consultation.client_id else None,
            "email_outcome": result.outcome.value if result else None,
        },
    )
    return consultation


@router.get("", response_model=List[ConsultationResponse])
async def list_consultations(
    identity: TokenPayload = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db),
):
    return await ConsultationService(db).list_consultations()


@router.get("/{consultation_id}", response_model=ConsultationResponse)
async def get_consultation(
    consultation_id: UUID,
    identity: TokenPayload = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db),
):
    return await ConsultationService(db).get_consultation(consultation_id)


@router.put("/{consultation_id}", response_model=ConsultationResponse)
async def update_consultation(
    consultation_id: UUID,
    consultation: ConsultationUpdate,
    request: Request,
    identity: TokenPayload = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db),
):
    updated = await ConsultationService(db).update_consultation(consultation_id, consultation)
    await AuditService(db).record(
        request, identity.sub, "update", "consultation", consultation_id,
        consultation.model_dump(mode="json", exclude_unset=True),
    )
    return updated
