import asyncio
from lawdesk.database import engine, Base

# Import all models to ensure they are registered in Base.metadata
from lawdesk.auth.models import User
from lawdesk.clients.models import Client
from lawdesk.cases.models import Case
from lawdesk.consultations.models import Consultation
from lawdesk.invoices.models import Invoice
from lawdesk.communications.models import Communication
from lawdesk.documents.models import Document, PendingFileDeletion
from lawdesk.audit.models import AuditLog
from lawdesk.portal.models import ClientToken
from lawdesk.chat.models import AiChatSession

async def init_models():
    async with engine.begin() as conn:
        # await conn.run_sync(Base.metadata.drop_all) # Optional: Reset DB
        await conn.run_sync(Base.metadata.create_all)
    print("Database tables created.")

if __name__ == "__main__":
    asyncio.run(init_models())
