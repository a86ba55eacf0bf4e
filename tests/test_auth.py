import pytest
from datetime import timedelta
from uuid import uuid4
from httpx import AsyncClient

from lawdesk.auth.security import create_access_token



@pytest.mark.asyncio
async def test_register_then_login(async_client: AsyncClient):
    response = await async_client.post(
        "/api/auth/register",
        json={"email": "mason@masonmartinlaw.com", "password": "s3cure-pass"},
    )
    assert response.status_code == 200
    assert response.json()["user"]["role"] == "admin"

    response = await async_client.post(
        "/api/auth/login",
        json={"email": "mason@masonmartinlaw.com", "password": "s3cure-pass"},
    )
    assert response.status_code == 200
    data = response.json()
    assert data["token"]
    assert data["user"]["email"] == "mason@masonmartinlaw.com"
    assert "hashed_password" not in data["user"]


@pytest.mark.asyncio
async def test_register_existing_email(async_client: AsyncClient, admin_user):
    response = await async_client.post(
        "/api/auth/register",
        json={"email": admin_user.email, "password": "another-pass"},
    )
    assert response.status_code == 400
    assert response.json()["detail"] == "User already exists"


@pytest.mark.asyncio
async def test_login_failure(async_client: AsyncClient, admin_user):
    response = await async_client.post(
        "/api/auth/login",
        json={"email": admin_user.email, "password": "wrongpassword"},
    )
    assert response.status_code == 401
    assert response.json()["detail"] == "Invalid credentials"


@pytest.mark.asyncio
async def test_login_success(async_client: AsyncClient, admin_user):
    response = await async_client.post(
        "/api/auth/login",
        json={"email": admin_user.email, "password": "password123"},
    )
    assert response.status_code == 200


@pytest.mark.asyncio
async def test_missing_credential(async_client: AsyncClient):
    response = await async_client.get("/api/clients")
    assert response.status_code == 401
    assert response.json()["detail"] == "Authentication required"


@pytest.mark.asyncio
async def test_bad_signature(async_client: AsyncClient):
    response = await async_client.get("/api/clients", headers={"Authorization": "Bearer not-a-jwt"})
    assert response.status_code == 401
    assert response.json()["detail"] == "Invalid token"


@pytest.mark.asyncio
async def test_expired_credential(async_client: AsyncClient, admin_user):
    token = create_access_token(
        {"sub": str(admin_user.id), "email": admin_user.email, "role": "admin"},
        expires_delta=timedelta(seconds=-10),
    )
    response = await async_client.get("/api/clients", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401
    assert response.json()["detail"] == "Invalid token"


@pytest.mark.asyncio
async def test_non_admin_role_is_forbidden_from_documents(async_client: AsyncClient):
    token = create_access_token({"sub": str(uuid4()), "email": "clerk@example.com", "role": "staff"})
    headers = {"Authorization": f"Bearer {token}"}

    # authenticated routes accept any valid identity
    response = await async_client.get("/api/clients", headers=headers)
    assert response.status_code == 200

    response = await async_client.get("/api/documents", headers=headers)
    assert response.status_code == 403
    assert response.json()["detail"] == "Admin access required"


@pytest.mark.asyncio
async def test_profile_roundtrip(async_client: AsyncClient, admin_headers):
    response = await async_client.get("/api/auth/user", headers=admin_headers)
    assert response.status_code == 200
    assert response.json()["profile_photo"] is None

    response = await async_client.put(
        "/api/auth/profile",
        json={"profilePhoto": "https://cdn.example.com/me.png"},
        headers=admin_headers,
    )
    assert response.status_code == 200
    assert response.json()["profile_photo"] == "https://cdn.example.com/me.png"
