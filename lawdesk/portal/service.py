import logging
import secrets
from datetime import timedelta

from fastapi import HTTPException, status
from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from lawdesk.cases.service import CaseService
from lawdesk.clients.models import Client
from lawdesk.clients.service import ClientService
from lawdesk.config import settings
from lawdesk.consultations.service import ConsultationService
from lawdesk.invoices.service import InvoiceService
from lawdesk.notifications import templates
from lawdesk.notifications.email import DeliveryResult, EmailSender
from lawdesk.portal.models import ClientToken
from lawdesk.portal.schemas import PortalView
from lawdesk.shared.models import utcnow

logger = logging.getLogger(__name__)

TOKEN_BYTES = 32
DELIVERY_FAILED_DETAIL = "Unable to deliver access token. Please try again later or contact our office."
INVALID_TOKEN_DETAIL = "Invalid or expired token"


class PortalService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def request_access(self, email: str, sender: EmailSender) -> tuple[Client, DeliveryResult]:
        """Issue a fresh token for the client and mail it.

        The token is only ever handed to the email channel. When delivery
        fails the caller gets a 503 and nothing about the token.
        """
        client = await ClientService(self.db).get_client_by_email(email)
        if not client:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Client not found")

        expires_at = utcnow() + timedelta(hours=settings.CLIENT_TOKEN_TTL_HOURS)
        access = ClientToken(client_id=client.id, token=secrets.token_hex(TOKEN_BYTES), expires_at=expires_at)
        self.db.add(access)
        await self.db.commit()

        message = templates.portal_access(
            to=client.email,
            client_name=client.full_name,
            access_token=access.token,
            expires_at=expires_at,
        )
        result = await sender.send(message, critical=True)
        if not result.delivered:
            logger.error(f"Portal access email for client {client.id} not delivered: {result.error}")
            # an undelivered token is never usable
            await self.db.delete(access)
            await self.db.commit()
        return client, result

    async def resolve_access(self, token: str) -> PortalView:
        result = await self.db.execute(
            select(ClientToken).where(ClientToken.token == token, ClientToken.expires_at > utcnow())
        )
        access = result.scalars().first()
        if not access:
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=INVALID_TOKEN_DETAIL)

        client = await ClientService(self.db).get_client(access.client_id)
        return PortalView.model_validate(
            {
                "client": client,
                "cases": await CaseService(self.db).list_for_client(client.id),
                "consultations": await ConsultationService(self.db).list_for_client(client.id),
                "invoices": await InvoiceService(self.db).list_for_client(client.id),
            },
            from_attributes=True,
        )

    async def sweep_expired(self) -> int:
        result = await self.db.execute(delete(ClientToken).where(ClientToken.expires_at < utcnow()))
        await self.db.commit()
        deleted = result.rowcount or 0
        if deleted:
            logger.info(f"Removed {deleted} expired client tokens")
        return deleted
