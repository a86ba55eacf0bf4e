import logging
from typing import List, Optional
from uuid import UUID
from sqlalchemy import select, desc, or_
from sqlalchemy.ext.asyncio import AsyncSession
from fastapi import HTTPException

from lawdesk.clients.models import Client
from lawdesk.clients.service import ClientService
from lawdesk.consultations.models import Consultation, ConsultationStatus, DEFAULT_RATES
from lawdesk.consultations.schemas import ConsultationCreate, ConsultationUpdate
from lawdesk.notifications import templates
from lawdesk.notifications.email import DeliveryResult, EmailSender

logger = logging.getLogger(__name__)

_CONTACT_FIELDS = {"client_email", "first_name", "last_name", "phone"}


class ConsultationService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def _resolve_client(self, booking: ConsultationCreate) -> Optional[Client]:
        clients = ClientService(self.db)
        if booking.client_id is not None:
            return await clients.get_client(booking.client_id)
        if booking.client_email:
            return await clients.find_or_create(
                email=booking.client_email,
                first_name=booking.first_name,
                last_name=booking.last_name,
                phone=booking.phone,
            )
        return None

    async def book(self, booking: ConsultationCreate) -> Consultation:
        client = await self._resolve_client(booking)
        data = booking.model_dump(exclude=_CONTACT_FIELDS | {"client_id"})
        data["type"] = booking.type.value
        if data.get("rate") is None:
            data["rate"] = DEFAULT_RATES[booking.type]

        consultation = Consultation(
            **data,
            client_id=client.id if client else None,
            status=ConsultationStatus.SCHEDULED.value,
        )
        self.db.add(consultation)
        await self.db.commit()
        await self.db.refresh(consultation)
        return consultation

    async def send_confirmation(
        self, consultation: Consultation, booking: ConsultationCreate, sender: EmailSender
    ) -> Optional[DeliveryResult]:
        """Confirmation mail is best effort; a failure never fails the booking."""
        recipient = booking.client_email
        name = f"{booking.first_name or ''} {booking.last_name or ''}".strip()
        if consultation.client_id is not None and (not recipient or not name):
            client = await self.db.get(Client, consultation.client_id)
            recipient = recipient or client.email
            name = name or client.full_name
        if not recipient:
            return None

        message = templates.consultation_confirmation(
            to=recipient,
            client_name=name,
            consultation_type=consultation.type,
            scheduled_at=consultation.scheduled_at,
            case_type=consultation.case_type,
        )
        result = await sender.send(message)
        if not result.delivered:
            logger.warning(f"Consultation {consultation.id} confirmation not delivered: {result.error}")
        return result

    async def list_consultations(self) -> List[Consultation]:
        result = await self.db.execute(select(Consultation).order_by(desc(Consultation.scheduled_at)))
        return list(result.scalars().all())

    async def list_for_client(self, client_id: UUID) -> List[Consultation]:
        result = await self.db.execute(
            select(Consultation)
            .where(Consultation.client_id == client_id)
            .order_by(desc(Consultation.scheduled_at))
        )
        return list(result.scalars().all())

    async def get_consultation(self, consultation_id: UUID) -> Consultation:
        consultation = await self.db.get(Consultation, consultation_id)
        if not consultation:
            raise HTTPException(status_code=404, detail="Consultation not found")
        return consultation

    async def update_consultation(self, consultation_id: UUID, consultation_in: ConsultationUpdate) -> Consultation:
        consultation = await self.get_consultation(consultation_id)
        for field, value in consultation_in.model_dump(exclude_unset=True).items():
            if hasattr(value, "value"):
                value = value.value
            setattr(consultation, field, value)
        await self.db.commit()
        await self.db.refresh(consultation)
        return consultation

    async def search_consultations(self, q: str) -> List[Consultation]:
        pattern = f"%{q}%"
        result = await self.db.execute(
            select(Consultation)
            .where(or_(
                Consultation.type.ilike(pattern),
                Consultation.case_type.ilike(pattern),
                Consultation.description.ilike(pattern),
            ))
            .order_by(desc(Consultation.updated_at))
        )
        return list(result.scalars().all())
