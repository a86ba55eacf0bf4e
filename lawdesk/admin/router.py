import logging
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from lawdesk.audit.schemas import AuditLogResponse
from lawdesk.audit.service import AuditService
from lawdesk.auth.dependencies import require_admin
from lawdesk.auth.schemas import TokenPayload
from lawdesk.database import get_db
from lawdesk.portal.schemas import SweepResult
from lawdesk.portal.service import PortalService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["admin"])


@router.post("/cleanup-tokens", response_model=SweepResult)
async def cleanup_tokens(
    request: Request,
    identity: TokenPayload = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    deleted = await PortalService(db).sweep_expired()
    logger.info(f"Manual token sweep by {identity.email}: {deleted} removed")
    await AuditService(db).record(request, identity.sub, "cleanup_tokens", "client_token", None, {"deleted": deleted})
    return SweepResult(message="Expired tokens cleaned up", deleted=deleted)


@router.get("/audit-logs", response_model=List[AuditLogResponse])
async def list_audit_logs(
    user_id: Optional[UUID] = None,
    resource_type: Optional[str] = None,
    resource_id: Optional[str] = None,
    limit: int = Query(50, ge=1, le=500),
    identity: TokenPayload = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    audit = AuditService(db)
    if user_id is not None:
        return await audit.by_user(user_id, limit=limit)
    if resource_type and resource_id:
        return await audit.by_resource(resource_type, resource_id, limit=limit)
    return await audit.recent(limit=limit)
