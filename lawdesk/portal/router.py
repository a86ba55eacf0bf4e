from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from lawdesk.audit.service import AuditService
from lawdesk.database import get_db
from lawdesk.notifications.email import EmailSender, get_email_sender
from lawdesk.portal.schemas import AccessGranted, AccessRequest, PortalView
from lawdesk.portal.service import DELIVERY_FAILED_DETAIL, PortalService

router = APIRouter(prefix="/client-portal", tags=["client-portal"])


@router.post("/access", response_model=AccessGranted)
async def request_access(
    access_in: AccessRequest,
    request: Request,
    db: AsyncSession = Depends(get_db),
    sender: EmailSender = Depends(get_email_sender),
):
    client, result = await PortalService(db).request_access(access_in.email, sender)
    audit = AuditService(db)
    if not result.delivered:
        await audit.record(
            request, None, "portal_access_delivery_failed", "client", client.id,
            {"outcome": result.outcome.value, "provider": result.provider},
        )
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=DELIVERY_FAILED_DETAIL)

    await audit.record(request, None, "portal_access_requested", "client", client.id, {"provider": result.provider})
    return AccessGranted(message="Access token sent to your email address")


@router.get("/{token}", response_model=PortalView)
async def read_portal(token: str, db: AsyncSession = Depends(get_db)):
    return await PortalService(db).resolve_access(token)
