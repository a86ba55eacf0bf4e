from typing import List
from uuid import UUID
from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession
from lawdesk.database import get_db
from lawdesk.auth.schemas import TokenPayload
from lawdesk.auth.dependencies import get_current_identity
from lawdesk.audit.service import AuditService
from lawdesk.communications.schemas import CommunicationCreate, CommunicationResponse
from lawdesk.communications.service import CommunicationService

router = APIRouter(tags=["communications"])


@router.post("/communications", response_model=CommunicationResponse, status_code=status.HTTP_201_CREATED)
async def create_communication(
    communication: CommunicationCreate,
    request: Request,
    identity: TokenPayload = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db),
):
    created = await CommunicationService(db).create_communication(communication)
    await AuditService(db).record(
        request, identity.sub, "create", "communication", created.id,
        {"client_id": str(created.client_id), "type": created.type, "direction": created.direction},
    )
    return created


@router.get("/clients/{client_id}/communications", response_model=List[CommunicationResponse])
async def list_client_communications(
    client_id: UUID,
    identity: TokenPayload = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db),
):
    return await CommunicationService(db).list_for_client(client_id)


@router.get("/cases/{case_id}/communications", response_model=List[CommunicationResponse])
async def list_case_communications(
    case_id: UUID,
    identity: TokenPayload = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db),
):
    return await CommunicationService(db).list_for_case(case_id)
