from typing import List
from uuid import UUID
from sqlalchemy import select, desc
from sqlalchemy.ext.asyncio import AsyncSession

from lawdesk.cases.service import CaseService
from lawdesk.clients.service import ClientService
from lawdesk.communications.models import Communication
from lawdesk.communications.schemas import CommunicationCreate


class CommunicationService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def create_communication(self, communication_in: CommunicationCreate) -> Communication:
        await ClientService(self.db).get_client(communication_in.client_id)
        if communication_in.case_id is not None:
            await CaseService(self.db).get_case(communication_in.case_id)

        communication = Communication(**communication_in.model_dump(mode="json", exclude={"client_id", "case_id"}))
        communication.client_id = communication_in.client_id
        communication.case_id = communication_in.case_id
        self.db.add(communication)
        await self.db.commit()
        await self.db.refresh(communication)
        return communication

    async def list_for_client(self, client_id: UUID) -> List[Communication]:
        result = await self.db.execute(
            select(Communication)
            .where(Communication.client_id == client_id)
            .order_by(desc(Communication.created_at))
        )
        return list(result.scalars().all())

    async def list_for_case(self, case_id: UUID) -> List[Communication]:
        result = await self.db.execute(
            select(Communication)
            .where(Communication.case_id == case_id)
            .order_by(desc(Communication.created_at))
        )
        return list(result.scalars().all())
