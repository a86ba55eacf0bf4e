from typing import List
from uuid import UUID
from sqlalchemy import select, desc, or_
from sqlalchemy.ext.asyncio import AsyncSession
from fastapi import HTTPException

from lawdesk.cases.models import Case
from lawdesk.cases.schemas import CaseCreate, CaseUpdate
from lawdesk.clients.service import ClientService


class CaseService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def create_case(self, case_in: CaseCreate) -> Case:
        # 404 if the owning client does not exist
        await ClientService(self.db).get_client(case_in.client_id)
        case = Case(**case_in.model_dump(mode="python"))
        case.status = case_in.status.value
        self.db.add(case)
        await self.db.commit()
        await self.db.refresh(case)
        return case

    async def list_cases(self) -> List[Case]:
        result = await self.db.execute(select(Case).order_by(desc(Case.created_at)))
        return list(result.scalars().all())

    async def list_for_client(self, client_id: UUID) -> List[Case]:
        result = await self.db.execute(
            select(Case).where(Case.client_id == client_id).order_by(desc(Case.created_at))
        )
        return list(result.scalars().all())

    async def get_case(self, case_id: UUID) -> Case:
        case = await self.db.get(Case, case_id)
        if not case:
            raise HTTPException(status_code=404, detail="Case not found")
        return case

    async def update_case(self, case_id: UUID, case_in: CaseUpdate) -> Case:
        case = await self.get_case(case_id)
        update_data = case_in.model_dump(exclude_unset=True)
        if update_data.get("status") is not None:
            update_data["status"] = update_data["status"].value
        for field, value in update_data.items():
            setattr(case, field, value)
        await self.db.commit()
        await self.db.refresh(case)
        return case

    async def search_cases(self, q: str) -> List[Case]:
        pattern = f"%{q}%"
        result = await self.db.execute(
            select(Case)
            .where(or_(
                Case.title.ilike(pattern),
                Case.case_type.ilike(pattern),
                Case.description.ilike(pattern),
            ))
            .order_by(desc(Case.updated_at))
        )
        return list(result.scalars().all())
