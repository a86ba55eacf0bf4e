import pytest
from httpx import AsyncClient
from sqlalchemy import select

from lawdesk.audit.models import AuditLog
from lawdesk.audit.service import REDACTED, AuditService, sanitize_details


def test_sanitize_nested_and_arrays():
    details = {
        "email": "kai@example.com",
        "password": "hunter22",
        "profile": {"apiKey": "abc", "name": "Kai", "refresh_token": "r"},
        "cards": [{"creditCard": "4111111111111111", "last4": "1111"}, "plain"],
    }
    cleaned = sanitize_details(details)
    assert cleaned["email"] == "kai@example.com"
    assert cleaned["password"] == REDACTED
    assert cleaned["profile"] == {"apiKey": REDACTED, "name": "Kai", "refresh_token": REDACTED}
    assert cleaned["cards"][0] == {"creditCard": REDACTED, "last4": "1111"}
    assert cleaned["cards"][1] == "plain"
    # input is left untouched
    assert details["password"] == "hunter22"
    assert details["profile"]["apiKey"] == "abc"


def test_sensitive_match_is_case_insensitive():
    cleaned = sanitize_details({"Authorization": "Bearer x", "X-CSRF-TOKEN": "t", "SSN": "123"})
    assert set(cleaned.values()) == {REDACTED}


@pytest.mark.asyncio
async def test_log_action_stores_redacted_details(db_session):
    entry = await AuditService(db_session).log_action(
        None, "login", "user", "abc", {"email": "a@b.com", "accessToken": "secret"},
        ip="10.0.0.1", user_agent="pytest",
    )
    assert entry.details == {"email": "a@b.com", "accessToken": REDACTED}
    assert entry.status == "success"
    assert entry.ip == "10.0.0.1"


@pytest.mark.asyncio
async def test_audit_log_endpoint(async_client: AsyncClient, admin_headers, admin_user):
    await async_client.post(
        "/api/clients",
        json={"firstName": "Ana", "lastName": "Silva", "email": "ana@example.com"},
        headers={"X-Forwarded-For": "203.0.113.9, 10.0.0.1", "User-Agent": "intake-form"},
    )
    await async_client.put("/api/auth/profile", json={"profilePhoto": None}, headers=admin_headers)

    response = await async_client.get("/api/admin/audit-logs", headers=admin_headers)
    assert response.status_code == 200
    entries = response.json()
    client_entry = next(e for e in entries if e["resource_type"] == "client")
    assert client_entry["ip"] == "203.0.113.9"
    assert client_entry["user_agent"] == "intake-form"

    response = await async_client.get(
        "/api/admin/audit-logs", params={"user_id": str(admin_user.id)}, headers=admin_headers
    )
    assert [e["action"] for e in response.json()] == ["update_profile"]


@pytest.mark.asyncio
async def test_audit_failure_does_not_fail_request(async_client: AsyncClient, monkeypatch):
    async def broken(self, *args, **kwargs):
        raise RuntimeError("audit table locked")

    monkeypatch.setattr(AuditService, "log_action", broken)
    response = await async_client.post(
        "/api/clients",
        json={"firstName": "Ana", "lastName": "Silva", "email": "ana@example.com"},
    )
    assert response.status_code == 201


@pytest.mark.asyncio
async def test_routed_case_create_writes_audit_row(async_client: AsyncClient, admin_headers, client_record, db_session):
    response = await async_client.post(
        "/api/cases",
        json={
            "clientId": str(client_record.id),
            "title": "Kahale v. Pacific Holdings",
            "caseType": "Civil Litigation",
            "courtDetails": {"court": "First Circuit Court"},
        },
        headers=admin_headers,
    )
    assert response.status_code == 201
    case_id = response.json()["id"]

    result = await db_session.execute(
        select(AuditLog).where(AuditLog.resource_type == "case", AuditLog.resource_id == case_id)
    )
    entry = result.scalars().one()
    assert entry.action == "create"
    assert entry.status == "success"
    assert isinstance(entry.details, dict)
