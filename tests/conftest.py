import os

# Settings are read at import time, so the environment must be ready first
os.environ["JWT_SECRET"] = "test-secret-key-that-is-long-enough-for-hs256"
os.environ["XAI_API_KEY"] = "test-xai-key"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["ENABLE_TOKEN_SWEEP"] = "false"
os.environ.pop("SENDGRID_API_KEY", None)

from typing import AsyncGenerator, List
from uuid import uuid4

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from langchain_core.language_models import FakeListChatModel
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker

from lawdesk.main import app
from lawdesk.database import get_db, engine_options, Base
from lawdesk.auth.models import User, UserRole
from lawdesk.auth.security import get_password_hash
from lawdesk.auth.service import AuthService
from lawdesk.clients.models import Client
from lawdesk.config import settings
from lawdesk.documents.storage import DocumentStore, get_document_store
from lawdesk.llm import get_chat_llm
from lawdesk.notifications.email import (
    DeliveryOutcome,
    DeliveryResult,
    EmailMessage,
    get_email_sender,
)

ADMIN_PASSWORD = "password123"


class FakeEmailSender:
    """Records every message and answers with a fixed outcome."""

    def __init__(self):
        self.sent: List[EmailMessage] = []
        self.critical: List[bool] = []
        self.outcome = DeliveryOutcome.DELIVERED

    async def send(self, message: EmailMessage, critical: bool = False) -> DeliveryResult:
        self.sent.append(message)
        self.critical.append(critical)
        if self.outcome is DeliveryOutcome.DELIVERED:
            return DeliveryResult(outcome=self.outcome, provider="fake")
        outcome = DeliveryOutcome.FAILED_FATAL if critical else DeliveryOutcome.FAILED_NON_FATAL
        return DeliveryResult(outcome=outcome, provider="fake", error="provider unavailable")


@pytest_asyncio.fixture(scope="function")
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """Fresh in-memory database per test."""
    test_engine = create_async_engine("sqlite+aiosqlite://", **engine_options("sqlite+aiosqlite://"))
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    TestingSessionLocal = sessionmaker(
        bind=test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autocommit=False,
        autoflush=False,
    )
    async with TestingSessionLocal() as session:
        yield session

    await test_engine.dispose()


@pytest.fixture
def email_sender() -> FakeEmailSender:
    return FakeEmailSender()


@pytest.fixture
def document_store(tmp_path) -> DocumentStore:
    return DocumentStore(str(tmp_path / "uploads"), settings.MAX_UPLOAD_BYTES)


@pytest.fixture
def chat_llm():
    return FakeListChatModel(responses=["Happy to help with your question."])


@pytest_asyncio.fixture(scope="function")
async def async_client(
    db_session: AsyncSession,
    email_sender: FakeEmailSender,
    document_store: DocumentStore,
    chat_llm,
) -> AsyncGenerator[AsyncClient, None]:
    """Client for testing API endpoints."""
    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_email_sender] = lambda: email_sender
    app.dependency_overrides[get_document_store] = lambda: document_store
    app.dependency_overrides[get_chat_llm] = lambda: chat_llm

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def admin_user(db_session: AsyncSession) -> User:
    user = User(
        email=f"admin_{uuid4().hex[:8]}@masonmartinlaw.com",
        hashed_password=get_password_hash(ADMIN_PASSWORD),
        role=UserRole.ADMIN.value,
    )
    db_session.add(user)
    await db_session.commit()
    await db_session.refresh(user)
    return user


@pytest.fixture
def admin_headers(admin_user: User) -> dict:
    token = AuthService.issue_token(admin_user)["token"]
    return {"Authorization": f"Bearer {token}"}


@pytest_asyncio.fixture
async def client_record(db_session: AsyncSession) -> Client:
    client = Client(
        first_name="Leilani",
        last_name="Kahale",
        email="leilani@example.com",
        phone="808-555-0100",
    )
    db_session.add(client)
    await db_session.commit()
    await db_session.refresh(client)
    return client
