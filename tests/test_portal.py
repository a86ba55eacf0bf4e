import pytest
from datetime import timedelta
from httpx import AsyncClient
from sqlalchemy import select

from lawdesk.audit.models import AuditLog
from lawdesk.cases.models import Case
from lawdesk.notifications.email import DeliveryOutcome
from lawdesk.portal.models import ClientToken
from lawdesk.portal.service import PortalService
from lawdesk.shared.models import utcnow


@pytest.mark.asyncio
async def test_request_access_delivers_token_by_email(async_client: AsyncClient, client_record, email_sender, db_session):
    response = await async_client.post("/api/client-portal/access", json={"email": client_record.email})
    assert response.status_code == 200
    assert response.json() == {"message": "Access token sent to your email address"}

    access = (await db_session.execute(select(ClientToken))).scalars().one()
    assert len(access.token) == 64
    assert access.token not in response.text
    assert email_sender.critical == [True]
    assert access.token in email_sender.sent[0].text

    ttl = access.expires_at - utcnow()
    assert timedelta(hours=23, minutes=59) < ttl <= timedelta(hours=24)


@pytest.mark.asyncio
async def test_delivery_failure_never_leaks_token(async_client: AsyncClient, client_record, email_sender, db_session):
    email_sender.outcome = DeliveryOutcome.FAILED_FATAL
    response = await async_client.post("/api/client-portal/access", json={"email": client_record.email})
    assert response.status_code == 503
    assert response.json() == {
        "detail": "Unable to deliver access token. Please try again later or contact our office."
    }

    issued = email_sender.sent[0].text
    token = issued.split("/client-portal/")[1].split()[0]
    assert token not in response.text
    assert (await db_session.execute(select(ClientToken))).scalars().all() == []

    result = await db_session.execute(select(AuditLog).where(AuditLog.action == "portal_access_delivery_failed"))
    entry = result.scalars().one()
    assert token not in str(entry.details)


@pytest.mark.asyncio
async def test_unknown_email(async_client: AsyncClient):
    response = await async_client.post("/api/client-portal/access", json={"email": "nobody@example.com"})
    assert response.status_code == 404
    assert response.json()["detail"] == "Client not found"


@pytest.mark.asyncio
async def test_resolve_returns_client_records(async_client: AsyncClient, client_record, db_session):
    db_session.add(Case(client_id=client_record.id, title="Appeal", case_type="Appellate"))
    db_session.add(ClientToken(client_id=client_record.id, token="a" * 64, expires_at=utcnow() + timedelta(hours=1)))
    await db_session.commit()

    response = await async_client.get(f"/api/client-portal/{'a' * 64}")
    assert response.status_code == 200
    data = response.json()
    assert data["client"] == {
        "first_name": "Leilani",
        "last_name": "Kahale",
        "email": "leilani@example.com",
        "phone": "808-555-0100",
    }
    assert [c["title"] for c in data["cases"]] == ["Appeal"]
    assert data["consultations"] == []
    assert data["invoices"] == []


@pytest.mark.asyncio
async def test_expired_token_rejected(async_client: AsyncClient, client_record, db_session):
    db_session.add(ClientToken(client_id=client_record.id, token="b" * 64, expires_at=utcnow() - timedelta(seconds=1)))
    await db_session.commit()

    response = await async_client.get(f"/api/client-portal/{'b' * 64}")
    assert response.status_code == 401
    assert response.json()["detail"] == "Invalid or expired token"

    response = await async_client.get(f"/api/client-portal/{'c' * 64}")
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_sweep_removes_only_expired(db_session, client_record):
    now = utcnow()
    db_session.add(ClientToken(client_id=client_record.id, token="d" * 64, expires_at=now - timedelta(hours=1)))
    db_session.add(ClientToken(client_id=client_record.id, token="e" * 64, expires_at=now + timedelta(hours=1)))
    await db_session.commit()

    assert await PortalService(db_session).sweep_expired() == 1
    remaining = (await db_session.execute(select(ClientToken.token))).scalars().all()
    assert remaining == ["e" * 64]


@pytest.mark.asyncio
async def test_admin_cleanup_endpoint(async_client: AsyncClient, admin_headers, client_record, db_session):
    db_session.add(ClientToken(client_id=client_record.id, token="f" * 64, expires_at=utcnow() - timedelta(minutes=5)))
    await db_session.commit()

    response = await async_client.post("/api/admin/cleanup-tokens")
    assert response.status_code == 401

    response = await async_client.post("/api/admin/cleanup-tokens", headers=admin_headers)
    assert response.status_code == 200
    assert response.json()["deleted"] == 1
