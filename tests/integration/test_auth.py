"""Integration tests: Auth endpoints."""

import pytest
from tests.conftest import requires_db

pytestmark = requires_db
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_signup_then_login(db_ready, async_client: AsyncClient, api_base: str, unique_suffix: str):
    email = f"signup_{unique_suffix}@test.example.com"
    resp = await async_client.post(
        f"{api_base}/auth/signup",
        json={"email": email, "password": "SecurePass123!", "name": "Asha"},
    )
    assert resp.status_code == 200
    assert "user_id" in resp.json()["data"]

    resp = await async_client.post(
        f"{api_base}/auth/login",
        json={"email": email, "password": "SecurePass123!"},
    )
    assert resp.status_code == 200
    data = resp.json()["data"]
    assert data["token_type"] == "bearer"
    assert data["is_admin"] is False


@pytest.mark.asyncio
async def test_signup_duplicate_email(db_ready, async_client: AsyncClient, api_base: str, unique_suffix: str):
    email = f"dup_{unique_suffix}@test.example.com"
    await async_client.post(f"{api_base}/auth/signup", json={"email": email, "password": "Pass123!"})
    resp = await async_client.post(f"{api_base}/auth/signup", json={"email": email, "password": "Pass123!"})
    assert resp.status_code == 400
    assert "already registered" in resp.json()["error"]["message"].lower()


@pytest.mark.asyncio
async def test_login_wrong_password(db_ready, async_client: AsyncClient, api_base: str, unique_suffix: str):
    email = f"wrong_{unique_suffix}@test.example.com"
    await async_client.post(f"{api_base}/auth/signup", json={"email": email, "password": "RightPass123!"})
    resp = await async_client.post(
        f"{api_base}/auth/login", json={"email": email, "password": "WrongPass123!"}
    )
    assert resp.status_code == 401
    assert resp.json()["error"]["message"] == "Invalid email or password"


@pytest.mark.asyncio
async def test_client_cannot_claim_admin_at_login(
    db_ready, async_client: AsyncClient, api_base: str, unique_suffix: str
):
    email = f"claim_{unique_suffix}@test.example.com"
    await async_client.post(f"{api_base}/auth/signup", json={"email": email, "password": "Pass1234!"})
    resp = await async_client.post(
        f"{api_base}/auth/login",
        json={"email": email, "password": "Pass1234!", "isAdmin": True, "is_admin": True},
    )
    assert resp.status_code == 200
    assert resp.json()["data"]["is_admin"] is False


@pytest.mark.asyncio
async def test_member_is_sent_back_to_login(async_client: AsyncClient, api_base: str, member_headers: dict):
    resp = await async_client.get(f"{api_base}/admin/dashboard", headers=member_headers)
    assert resp.status_code == 403
    body = resp.json()
    assert body["error"]["message"] == "not-admin"
    assert body["redirect_to"] == "/login?error=not-admin"


@pytest.mark.asyncio
async def test_me_reports_admin_flag(async_client: AsyncClient, api_base: str, admin_headers: dict):
    resp = await async_client.get(f"{api_base}/auth/me", headers=admin_headers)
    assert resp.status_code == 200
    assert resp.json()["data"]["is_admin"] is True

    resp = await async_client.get(f"{api_base}/admin/session", headers=admin_headers)
    assert resp.status_code == 200


@pytest.mark.asyncio
async def test_admin_flag_survives_later_logins(
    async_client: AsyncClient, api_base: str, admin_headers: dict, unique_suffix: str
):
    resp = await async_client.post(
        f"{api_base}/auth/login",
        json={"email": f"admin_{unique_suffix}@test.example.com", "password": "TestPassword123!"},
    )
    assert resp.status_code == 200
    assert resp.json()["data"]["is_admin"] is True


@pytest.mark.asyncio
async def test_forgot_password_requires_admin(async_client: AsyncClient, api_base: str, member_headers: dict, unique_suffix: str):
    resp = await async_client.post(
        f"{api_base}/auth/password/forgot",
        json={"email": f"member_{unique_suffix}@test.example.com"},
    )
    assert resp.status_code == 404
    assert resp.json()["error"]["message"] == "No admin account found with this email address."


@pytest.mark.asyncio
async def test_forgot_password_for_admin(async_client: AsyncClient, api_base: str, admin_headers: dict, unique_suffix: str):
    resp = await async_client.post(
        f"{api_base}/auth/password/forgot",
        json={"email": f"admin_{unique_suffix}@test.example.com"},
    )
    assert resp.status_code == 200


@pytest.mark.asyncio
async def test_users_list_is_admin_only(
    async_client: AsyncClient, api_base: str, admin_headers: dict, unique_suffix: str
):
    resp = await async_client.get(f"{api_base}/users", headers=admin_headers)
    assert resp.status_code == 200
    emails = [u["email"] for u in resp.json()["data"]]
    assert f"admin_{unique_suffix}@test.example.com" in emails
