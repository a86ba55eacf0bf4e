from typing import List
from uuid import UUID
from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession
from lawdesk.database import get_db
from lawdesk.auth.schemas import TokenPayload
from lawdesk.auth.dependencies import get_current_identity
from lawdesk.audit.service import AuditService
from lawdesk.clients.schemas import ClientCreate, ClientUpdate, ClientResponse
from lawdesk.clients.service import ClientService

router = APIRouter(prefix="/clients", tags=["clients"])


@router.post("", response_model=ClientResponse, status_code=status.HTTP_201_CREATED)
async def create_client(
    client: ClientCreate,
    request: Request,
    db: AsyncSession = Depends(get_db),
):
    """Public: the booking and contact forms create clients without a login."""
    service = ClientService(db)
    created = await service.create_client(client)
    await AuditService(db).record(request, None, "create", "client", created.id, {"email": created.email})
    return created


@router.get("", response_model=List[ClientResponse])
async def list_clients(
    identity: TokenPayload = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db),
):
    service = ClientService(db)
    return await service.list_clients()


@router.get("/{client_id}", response_model=ClientResponse)
async def get_client(
    client_id: UUID,
    identity: TokenPayload = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db),
):
    service = ClientService(db)
    return await service.get_client(client_id)


@router.put("/{client_id}", response_model=ClientResponse)
async def update_client(
    client_id: UUID,
    client: ClientUpdate,
    request: Request,
    identity: TokenPayload = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db),
):
    service = ClientService(db)
    updated = await service.update_client(client_id, client)
    await AuditService(db).record(
        request, identity.sub, "update", "client", client_id,
        client.model_dump(mode="json", exclude_unset=True),
    )
    return updated
