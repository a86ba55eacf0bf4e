import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_case_lifecycle(async_client: AsyncClient, admin_headers, client_record):
    response = await async_client.post(
        "/api/cases",
        json={
            "clientId": str(client_record.id),
            "title": "Kahale v. Pacific Holdings",
            "caseType": "Civil Litigation",
            "status": "open",
            "courtDetails": {"court": "First Circuit Court", "docket": "1CCV-26-0001"},
        },
        headers=admin_headers,
    )
    assert response.status_code == 201
    case = response.json()
    # legacy vocabulary is normalised
    assert case["status"] == "active"
    assert case["court_details"]["court"] == "First Circuit Court"

    response = await async_client.put(
        f"/api/cases/{case['id']}", json={"status": "settled"}, headers=admin_headers
    )
    assert response.status_code == 200
    assert response.json()["status"] == "closed"

    response = await async_client.put(
        f"/api/cases/{case['id']}", json={"status": "on-hold"}, headers=admin_headers
    )
    assert response.json()["status"] == "on-hold"


@pytest.mark.asyncio
async def test_case_for_unknown_client(async_client: AsyncClient, admin_headers):
    response = await async_client.post(
        "/api/cases",
        json={
            "clientId": "00000000-0000-0000-0000-000000000000",
            "title": "Orphan",
            "caseType": "Appellate",
        },
        headers=admin_headers,
    )
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_invalid_case_status(async_client: AsyncClient, admin_headers, client_record):
    response = await async_client.post(
        "/api/cases",
        json={"clientId": str(client_record.id), "title": "X", "caseType": "Y", "status": "archived"},
        headers=admin_headers,
    )
    assert response.status_code == 400
    assert response.json()["detail"] == "Invalid case data"


@pytest.mark.asyncio
async def test_invoice_total_and_payment(async_client: AsyncClient, admin_headers, client_record):
    response = await async_client.post(
        "/api/invoices",
        json={
            "clientId": str(client_record.id),
            "invoiceNumber": "INV-2026-001",
            "amount": "500.00",
            "tax": "23.56",
            "dueDate": "2026-12-01T00:00:00",
            "lineItems": [{"description": "Virtual consultation", "quantity": "2.5", "rate": "200"}],
        },
        headers=admin_headers,
    )
    assert response.status_code == 201
    invoice = response.json()
    assert float(invoice["total_amount"]) == pytest.approx(523.56)
    assert float(invoice["line_items"][0]["amount"]) == 500
    assert invoice["status"] == "draft"
    assert invoice["paid_at"] is None

    response = await async_client.put(
        f"/api/invoices/{invoice['id']}", json={"status": "paid"}, headers=admin_headers
    )
    assert response.status_code == 200
    assert response.json()["paid_at"] is not None


@pytest.mark.asyncio
async def test_duplicate_invoice_number(async_client: AsyncClient, admin_headers, client_record):
    payload = {
        "clientId": str(client_record.id),
        "invoiceNumber": "INV-2026-002",
        "amount": "100",
        "dueDate": "2026-12-01T00:00:00",
    }
    first = await async_client.post("/api/invoices", json=payload, headers=admin_headers)
    assert first.status_code == 201
    second = await async_client.post("/api/invoices", json=payload, headers=admin_headers)
    assert second.status_code == 409


@pytest.mark.asyncio
async def test_communications_log(async_client: AsyncClient, admin_headers, client_record):
    response = await async_client.post(
        "/api/communications",
        json={
            "clientId": str(client_record.id),
            "type": "call",
            "direction": "inbound",
            "subject": "Scheduling",
            "content": "Client called to move the hearing prep meeting.",
        },
        headers=admin_headers,
    )
    assert response.status_code == 201

    response = await async_client.get(
        f"/api/clients/{client_record.id}/communications", headers=admin_headers
    )
    assert response.status_code == 200
    assert [c["subject"] for c in response.json()] == ["Scheduling"]


@pytest.mark.asyncio
async def test_case_update_rejects_null_required_fields(async_client: AsyncClient, admin_headers, client_record):
    case = (
        await async_client.post(
            "/api/cases",
            json={"clientId": str(client_record.id), "title": "Kahale estate", "caseType": "Probate"},
            headers=admin_headers,
        )
    ).json()

    for payload in ({"status": None}, {"title": None}, {"caseType": None}, {"billableHours": None}):
        response = await async_client.put(f"/api/cases/{case['id']}", json=payload, headers=admin_headers)
        assert response.status_code == 400
        assert response.json() == {"detail": "Invalid case data"}

    response = await async_client.put(
        f"/api/cases/{case['id']}", json={"description": None}, headers=admin_headers
    )
    assert response.status_code == 200
    assert response.json()["status"] == "active"


@pytest.mark.asyncio
async def test_invoice_update_rejects_null_status(async_client: AsyncClient, admin_headers, client_record):
    invoice = (
        await async_client.post(
            "/api/invoices",
            json={
                "clientId": str(client_record.id),
                "invoiceNumber": "INV-2026-009",
                "amount": "250.00",
                "dueDate": "2026-12-01T00:00:00",
            },
            headers=admin_headers,
        )
    ).json()
    for payload in ({"status": None}, {"dueDate": None}):
        response = await async_client.put(f"/api/invoices/{invoice['id']}", json=payload, headers=admin_headers)
        assert response.status_code == 400
        assert response.json() == {"detail": "Invalid invoice data"}
