from typing import List
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from lawdesk.auth.dependencies import get_current_identity
from lawdesk.auth.schemas import TokenPayload
from lawdesk.cases.schemas import CaseResponse
from lawdesk.cases.service import CaseService
from lawdesk.clients.schemas import ClientResponse
from lawdesk.clients.service import ClientService
from lawdesk.consultations.schemas import ConsultationResponse
from lawdesk.consultations.service import ConsultationService
from lawdesk.database import get_db

router = APIRouter(prefix="/search", tags=["search"])


@router.get("/clients", response_model=List[ClientResponse])
async def search_clients(
    q: str = Query(..., min_length=1),
    identity: TokenPayload = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db),
):
    return await ClientService(db).search_clients(q)


@router.get("/cases", response_model=List[CaseResponse])
async def search_cases(
    q: str = Query(..., min_length=1),
    identity: TokenPayload = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db),
):
    return await CaseService(db).search_cases(q)


@router.get("/consultations", response_model=List[ConsultationResponse])
async def search_consultations(
    q: str = Query(..., min_length=1),
    identity: TokenPayload = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db),
):
    return await ConsultationService(db).search_consultations(q)
