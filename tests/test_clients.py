import pytest
from httpx import AsyncClient
from sqlalchemy import select

from lawdesk.audit.models import AuditLog
from lawdesk.clients.service import DUPLICATE_EMAIL_DETAIL, ClientService


CLIENT_PAYLOAD = {
    "firstName": "Kai",
    "lastName": "Nakamura",
    "email": "kai@example.com",
    "phone": "808-555-0111",
}


async def skip_email_check(self, email, exclude_id=None):
    return None


@pytest.mark.asyncio
async def test_create_client_is_public_and_audited(async_client: AsyncClient, db_session):
    response = await async_client.post("/api/clients", json=CLIENT_PAYLOAD)
    assert response.status_code == 201
    data = response.json()
    assert data["first_name"] == "Kai"
    assert data["email"] == "kai@example.com"

    result = await db_session.execute(select(AuditLog).where(AuditLog.resource_type == "client"))
    entry = result.scalars().one()
    assert entry.action == "create"
    assert entry.user_id is None
    assert entry.resource_id == data["id"]


@pytest.mark.asyncio
async def test_duplicate_email_conflicts(async_client: AsyncClient):
    await async_client.post("/api/clients", json=CLIENT_PAYLOAD)
    response = await async_client.post("/api/clients", json=CLIENT_PAYLOAD)
    assert response.status_code == 409


@pytest.mark.asyncio
async def test_invalid_client_data(async_client: AsyncClient):
    response = await async_client.post("/api/clients", json={"firstName": "Kai"})
    assert response.status_code == 400
    assert response.json() == {"detail": "Invalid client data"}


@pytest.mark.asyncio
async def test_listing_is_idempotent(async_client: AsyncClient, admin_headers, client_record):
    first = await async_client.get("/api/clients", headers=admin_headers)
    second = await async_client.get("/api/clients", headers=admin_headers)
    assert first.status_code == 200
    assert first.json() == second.json()
    assert [c["email"] for c in first.json()] == ["leilani@example.com"]


@pytest.mark.asyncio
async def test_get_update_and_missing(async_client: AsyncClient, admin_headers, client_record):
    response = await async_client.put(
        f"/api/clients/{client_record.id}",
        json={"notes": "Prefers morning calls"},
        headers=admin_headers,
    )
    assert response.status_code == 200
    assert response.json()["notes"] == "Prefers morning calls"

    response = await async_client.get(f"/api/clients/{client_record.id}", headers=admin_headers)
    assert response.json()["notes"] == "Prefers morning calls"

    response = await async_client.get(
        "/api/clients/00000000-0000-0000-0000-000000000000", headers=admin_headers
    )
    assert response.status_code == 404
    assert response.json()["detail"] == "Client not found"


@pytest.mark.asyncio
async def test_emergency_contact_is_stored_and_audited(async_client: AsyncClient, db_session, admin_headers):
    contact = {"name": "Malia Nakamura", "relationship": "spouse", "phone": "808-555-0112"}
    response = await async_client.post(
        "/api/clients", json={**CLIENT_PAYLOAD, "emergencyContact": contact}
    )
    assert response.status_code == 201
    assert response.json()["emergency_contact"] == contact

    response = await async_client.get(f"/api/clients/{response.json()['id']}", headers=admin_headers)
    assert response.status_code == 200
    assert response.json()["emergency_contact"] == contact

    result = await db_session.execute(
        select(AuditLog).where(AuditLog.resource_type == "client", AuditLog.action == "create")
    )
    assert result.scalars().one().resource_id == response.json()["id"]


@pytest.mark.asyncio
async def test_update_rejects_null_required_fields(async_client: AsyncClient, admin_headers, client_record):
    for payload in ({"firstName": None}, {"lastName": None}, {"email": None}):
        response = await async_client.put(
            f"/api/clients/{client_record.id}", json=payload, headers=admin_headers
        )
        assert response.status_code == 400
        assert response.json() == {"detail": "Invalid client data"}

    # nullable columns can still be cleared
    response = await async_client.put(
        f"/api/clients/{client_record.id}", json={"phone": None}, headers=admin_headers
    )
    assert response.status_code == 200
    assert response.json()["phone"] is None
    assert response.json()["first_name"] == "Leilani"


@pytest.mark.asyncio
async def test_concurrent_duplicate_insert_conflicts(async_client: AsyncClient, monkeypatch):
    monkeypatch.setattr(ClientService, "_ensure_email_free", skip_email_check)
    first = await async_client.post("/api/clients", json=CLIENT_PAYLOAD)
    assert first.status_code == 201
    second = await async_client.post("/api/clients", json=CLIENT_PAYLOAD)
    assert second.status_code == 409
    assert second.json()["detail"] == DUPLICATE_EMAIL_DETAIL


@pytest.mark.asyncio
async def test_concurrent_email_change_conflicts(async_client: AsyncClient, admin_headers, client_record, monkeypatch):
    other = (await async_client.post("/api/clients", json=CLIENT_PAYLOAD)).json()

    monkeypatch.setattr(ClientService, "_ensure_email_free", skip_email_check)
    response = await async_client.put(
        f"/api/clients/{other['id']}", json={"email": client_record.email}, headers=admin_headers
    )
    assert response.status_code == 409


@pytest.mark.asyncio
async def test_find_or_create_uses_concurrently_created_row(db_session, client_record, monkeypatch):
    lookup = ClientService.get_client_by_email
    calls = []

    async def stale_first_lookup(self, email):
        calls.append(email)
        if len(calls) == 1:
            return None
        return await lookup(self, email)

    monkeypatch.setattr(ClientService, "get_client_by_email", stale_first_lookup)
    monkeypatch.setattr(ClientService, "_ensure_email_free", skip_email_check)

    existing_id, email = client_record.id, client_record.email
    client = await ClientService(db_session).find_or_create(email, "Leilani", "Kahale")
    assert client.id == existing_id
