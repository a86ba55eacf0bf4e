from typing import List, Optional
from uuid import UUID
from sqlalchemy import select, desc, or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from fastapi import HTTPException

from lawdesk.clients.models import Client
from lawdesk.clients.schemas import ClientCreate, ClientUpdate

DUPLICATE_EMAIL_DETAIL = "A client with this email already exists"

class ClientService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def _ensure_email_free(self, email: str, exclude_id: Optional[UUID] = None) -> None:
        existing = await self.get_client_by_email(email)
        if existing and existing.id != exclude_id:
            raise HTTPException(status_code=409, detail=DUPLICATE_EMAIL_DETAIL)

    async def create_client(self, client_in: ClientCreate) -> Client:
        await self._ensure_email_free(client_in.email)
        db_client = Client(**client_in.model_dump())
        self.db.add(db_client)
        try:
            await self.db.commit()
        except IntegrityError:
            # lost a race with a concurrent insert of the same email
            await self.db.rollback()
            raise HTTPException(status_code=409, detail=DUPLICATE_EMAIL_DETAIL)
        await self.db.refresh(db_client)
        return db_client

    async def list_clients(self) -> List[Client]:
        query = select(Client).order_by(desc(Client.created_at), desc(Client.id))
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def get_client(self, client_id: UUID) -> Client:
        client = await self.db.get(Client, client_id)
        if not client:
            raise HTTPException(status_code=404, detail="Client not found")
        return client

    async def get_client_by_email(self, email: str) -> Optional[Client]:
        result = await self.db.execute(select(Client).where(Client.email == email))
        return result.scalar_one_or_none()

    async def find_or_create(
        self, email: str, first_name: str, last_name: str, phone: Optional[str] = None
    ) -> Client:
        client = await self.get_client_by_email(email)
        if client:
            return client
        try:
            return await self.create_client(
                ClientCreate(first_name=first_name, last_name=last_name, email=email, phone=phone)
            )
        except HTTPException as e:
            if e.status_code != 409:
                raise
            # created concurrently, use that row
            client = await self.get_client_by_email(email)
            if client is None:
                raise
            return client

    async def update_client(self, client_id: UUID, client_in: ClientUpdate) -> Client:
        client = await self.get_client(client_id)
        
        update_data = client_in.model_dump(exclude_unset=True)
        if update_data.get("email") and update_data["email"] != client.email:
            await self._ensure_email_free(update_data["email"], exclude_id=client.id)
        for field, value in update_data.items():
            setattr(client, field, value)

        try:
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            raise HTTPException(status_code=409, detail=DUPLICATE_EMAIL_DETAIL)
        await self.db.refresh(client)
        return client

    async def search_clients(self, q: str) -> List[Client]:
        pattern = f"%{q}%"
        query = (
            select(Client)
            .where(or_(
                Client.first_name.ilike(pattern),
                Client.last_name.ilike(pattern),
                Client.email.ilike(pattern),
            ))
            .order_by(desc(Client.updated_at))
        )
        result = await self.db.execute(query)
        return list(result.scalars().all())
