from typing import List
from uuid import UUID
from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession
from lawdesk.database import get_db
from lawdesk.auth.schemas import TokenPayload
from lawdesk.auth.dependencies import get_current_identity
from lawdesk.audit.service import AuditService
from lawdesk.invoices.schemas import InvoiceCreate, InvoiceUpdate, InvoiceResponse
from lawdesk.invoices.service import InvoiceService

router = APIRouter(prefix="/invoices", tags=["invoices"])


@router.post("", response_model=InvoiceResponse, status_code=status.HTTP_201_CREATED)
async def create_invoice(
    invoice: InvoiceCreate,
    request: Request,
    identity: TokenPayload = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db),
):
    created = await InvoiceService(db).create_invoice(invoice)
    await AuditService(db).record(
        request, identity.sub, "create", "invoice", created.id,
        {"invoice_number": created.invoice_number, "total_amount": str(created.total_amount)},
    )
    return created


@router.get("", response_model=List[InvoiceResponse])
async def list_invoices(
    identity: TokenPayload = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db),
):
    return await InvoiceService(db).list_invoices()


@router.get("/{invoice_id}", response_model=InvoiceResponse)
async def get_invoice(
    invoice_id: UUID,
    identity: TokenPayload = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db),
):
    return await InvoiceService(db).get_invoice(invoice_id)


@router.put("/{invoice_id}", response_model=InvoiceResponse)
async def update_invoice(
    invoice_id: UUID,
    invoice: InvoiceUpdate,
    request: Request,
    identity: TokenPayload = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db),
):
    updated = await InvoiceService(db).update_invoice(invoice_id, invoice)
    await AuditService(db).record(
        request, identity.sub, "update", "invoice", invoice_id,
        invoice.model_dump(mode="json", exclude_unset=True),
    )
    return updated
