from typing import List
from uuid import UUID
from sqlalchemy import select, desc
from sqlalchemy.ext.asyncio import AsyncSession
from fastapi import HTTPException

from lawdesk.cases.service import CaseService
from lawdesk.clients.service import ClientService
from lawdesk.invoices.models import Invoice, InvoiceStatus
from lawdesk.invoices.schemas import InvoiceCreate, InvoiceUpdate
from lawdesk.shared.models import utcnow


class InvoiceService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def create_invoice(self, invoice_in: InvoiceCreate) -> Invoice:
        await ClientService(self.db).get_client(invoice_in.client_id)
        if invoice_in.case_id is not None:
            await CaseService(self.db).get_case(invoice_in.case_id)

        existing = await self.db.execute(
            select(Invoice).where(Invoice.invoice_number == invoice_in.invoice_number)
        )
        if existing.scalars().first():
            raise HTTPException(status_code=409, detail="Invoice number already exists")

        line_items = []
        for item in invoice_in.line_items:
            amount = item.amount if item.amount is not None else item.quantity * item.rate
            line_items.append({
                "description": item.description,
                "quantity": str(item.quantity),
                "rate": str(item.rate),
                "amount": str(amount),
            })

        # Computed once here; later edits do not revisit it
        total = invoice_in.total_amount
        if total is None:
            total = invoice_in.amount + invoice_in.tax

        invoice = Invoice(
            client_id=invoice_in.client_id,
            case_id=invoice_in.case_id,
            invoice_number=invoice_in.invoice_number,
            amount=invoice_in.amount,
            tax=invoice_in.tax,
            total_amount=total,
            status=invoice_in.status.value,
            due_date=invoice_in.due_date,
            paid_at=invoice_in.paid_at,
            line_items=line_items,
        )
        self.db.add(invoice)
        await self.db.commit()
        await self.db.refresh(invoice)
        return invoice

    async def list_invoices(self) -> List[Invoice]:
        result = await self.db.execute(select(Invoice).order_by(desc(Invoice.created_at)))
        return list(result.scalars().all())

    async def list_for_client(self, client_id: UUID) -> List[Invoice]:
        result = await self.db.execute(
            select(Invoice).where(Invoice.client_id == client_id).order_by(desc(Invoice.created_at))
        )
        return list(result.scalars().all())

    async def get_invoice(self, invoice_id: UUID) -> Invoice:
        invoice = await self.db.get(Invoice, invoice_id)
        if not invoice:
            raise HTTPException(status_code=404, detail="Invoice not found")
        return invoice

    async def update_invoice(self, invoice_id: UUID, invoice_in: InvoiceUpdate) -> Invoice:
        invoice = await self.get_invoice(invoice_id)
        update_data = invoice_in.model_dump(exclude_unset=True)
        if update_data.get("status") is not None:
            update_data["status"] = update_data["status"].value
            if update_data["status"] == InvoiceStatus.PAID.value and "paid_at" not in update_data and invoice.paid_at is None:
                update_data["paid_at"] = utcnow()
        for field, value in update_data.items():
            setattr(invoice, field, value)
        await self.db.commit()
        await self.db.refresh(invoice)
        return invoice
