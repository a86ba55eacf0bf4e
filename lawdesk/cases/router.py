from typing import List
from uuid import UUID
from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession
from lawdesk.database import get_db
from lawdesk.auth.schemas import TokenPayload
from lawdesk.auth.dependencies import get_current_identity
from lawdesk.audit.service import AuditService
from lawdesk.cases.schemas import CaseCreate, CaseUpdate, CaseResponse
from lawdesk.cases.service import CaseService

router = APIRouter(prefix="/cases", tags=["cases"])


@router.post("", response_model=CaseResponse, status_code=status.HTTP_201_CREATED)
async def create_case(
    case: CaseCreate,
    request: Request,
    identity: TokenPayload = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db),
):
    created = await CaseService(db).create_case(case)
    await AuditService(db).record(
        request, identity.sub, "create", "case", created.id,
        {"client_id": str(created.client_id), "title": created.title},
    )
    return created


@router.get("", response_model=List[CaseResponse])
async def list_cases(
    identity: TokenPayload = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db),
):
    return await CaseService(db).list_cases()


@router.get("/{case_id}", response_model=CaseResponse)
async def get_case(
    case_id: UUID,
    identity: TokenPayload = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db),
):
    return await CaseService(db).get_case(case_id)


@router.put("/{case_id}", response_model=CaseResponse)
async def update_case(
    case_id: UUID,
    case: CaseUpdate,
    request: Request,
    identity: TokenPayload = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db),
):
    updated = await CaseService(db).update_case(case_id, case)
    await AuditService(db).record(
        request, identity.sub, "update", "case", case_id,
        case.model_dump(mode="json", exclude_unset=True),
    )
    return updated
