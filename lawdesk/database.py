from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession
from sqlalchemy.orm import sessionmaker, declarative_base
from sqlalchemy.pool import StaticPool
from lawdesk.config import settings


def engine_options(url: str) -> dict:
    """Driver specific engine arguments.

    An in-memory SQLite database only lives as long as its connection, so
    every session shares one.
    """
    if url.startswith("sqlite"):
        options = {"connect_args": {"check_same_thread": False}}
        if url.endswith("://") or ":memory:" in url:
            options["poolclass"] = StaticPool
        return options
    return {"pool_pre_ping": True}


engine = create_async_engine(settings.DATABASE_URL, echo=settings.SQL_ECHO, **engine_options(settings.DATABASE_URL))
AsyncSessionLocal = sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autocommit=False,
    autoflush=False,
)

Base = declarative_base()


async def get_db():
    """Request scoped session; uncommitted work is discarded when the request fails."""
    async with AsyncSessionLocal() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
