import asyncio
from logging.config import fileConfig

from alembic import context
from sqlalchemy.ext.asyncio import create_async_engine

from lawdesk.config import settings
from lawdesk.database import Base

# Import all models so they are registered in Base.metadata
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

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata


def run_migrations_offline() -> None:
    context.configure(
        url=settings.DATABASE_URL,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )
    with context.begin_transaction():
        context.run_migrations()


def do_run_migrations(connection) -> None:
    context.configure(connection=connection, target_metadata=target_metadata)
    with context.begin_transaction():
        context.run_migrations()


async def run_migrations_online() -> None:
    engine = create_async_engine(settings.DATABASE_URL)
    async with engine.connect() as connection:
        await connection.run_sync(do_run_migrations)
    await engine.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    asyncio.run(run_migrations_online())
