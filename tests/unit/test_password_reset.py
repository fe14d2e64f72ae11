"""Unit tests for the forgot-password flow and the reset email sender."""

import pytest
from unittest.mock import AsyncMock, patch
from uuid import uuid4
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from app.api import deps
from app.api.v1.endpoints.auth import RESET_EMAIL_FAILED
from app.config import settings
from app.core.security import generate_password_reset_token
from app.main import app
from app.models.user import Identity
from app.services.email_service import send_password_reset


@pytest.fixture
def admin_identity() -> Identity:
    session = AsyncMock(spec=AsyncSession)

    async def _override():
        yield session

    app.dependency_overrides[deps.get_db] = _override
    return Identity(id=uuid4(), email="office@a2institutions.com", is_active=True)


def _patch_admin_lookups(identity):
    is_admin = patch(
        "app.api.v1.endpoints.auth.UserService.is_admin_email", new_callable=AsyncMock, return_value=True
    )
    by_email = patch(
        "app.api.v1.endpoints.auth.IdentityService.get_identity_by_email",
        new_callable=AsyncMock,
        return_value=identity,
    )
    return is_admin, by_email


@pytest.mark.asyncio
async def test_forgot_password_reports_failed_send(
    async_client: AsyncClient, api_base: str, admin_identity: Identity
):
    is_admin, by_email = _patch_admin_lookups(admin_identity)
    with is_admin, by_email, \
            patch("app.api.v1.endpoints.auth.send_password_reset", return_value=False) as send:
        resp = await async_client.post(
            f"{api_base}/auth/password/forgot", json={"email": admin_identity.email}
        )

    assert send.called
    assert resp.status_code == 503
    body = resp.json()
    assert body["success"] is False
    assert body["error"]["message"] == RESET_EMAIL_FAILED


@pytest.mark.asyncio
async def test_forgot_password_confirms_sent_email(
    async_client: AsyncClient, api_base: str, admin_identity: Identity
):
    is_admin, by_email = _patch_admin_lookups(admin_identity)
    with is_admin, by_email, \
            patch("app.api.v1.endpoints.auth.send_password_reset", return_value=True):
        resp = await async_client.post(
            f"{api_base}/auth/password/forgot", json={"email": admin_identity.email}
        )

    assert resp.status_code == 200
    assert resp.json()["message"] == "Password reset email sent. Please check your inbox."


@pytest.mark.asyncio
async def test_forgot_password_unknown_admin_sends_nothing(
    async_client: AsyncClient, api_base: str, admin_identity: Identity
):
    with patch("app.api.v1.endpoints.auth.UserService.is_admin_email", new_callable=AsyncMock, return_value=False), \
            patch("app.api.v1.endpoints.auth.send_password_reset") as send:
        resp = await async_client.post(
            f"{api_base}/auth/password/forgot", json={"email": "nobody@example.com"}
        )

    assert resp.status_code == 404
    assert not send.called


def test_reset_email_skipped_in_test_env():
    with patch.object(settings, "ENVIRONMENT", "test"), patch.object(settings, "RESEND_API_KEY", ""):
        assert send_password_reset("office@a2institutions.com", "token") is True


def test_reset_email_fails_without_api_key():
    with patch.object(settings, "ENVIRONMENT", "production"), patch.object(settings, "RESEND_API_KEY", ""):
        assert send_password_reset("office@a2institutions.com", "token") is False


def test_reset_email_fails_when_provider_errors():
    with patch.object(settings, "ENVIRONMENT", "production"), \
            patch.object(settings, "RESEND_API_KEY", "re_test_key"), \
            patch("resend.Emails.send", side_effect=RuntimeError("provider down")) as send:
        assert send_password_reset("office@a2institutions.com", "token") is False
    assert send.called


def test_reset_email_sends_link_with_token():
    with patch.object(settings, "ENVIRONMENT", "production"), \
            patch.object(settings, "RESEND_API_KEY", "re_test_key"), \
            patch("resend.Emails.send") as send:
        assert send_password_reset("office@a2institutions.com", "abc123") is True

    params = send.call_args.args[0]
    assert params["to"] == ["office@a2institutions.com"]
    assert "token=abc123" in params["html"]


@pytest.mark.asyncio
async def test_reset_password_updates_identity(
    async_client: AsyncClient, api_base: str, admin_identity: Identity
):
    token = generate_password_reset_token(str(admin_identity.id))
    with patch(
        "app.api.v1.endpoints.auth.IdentityService.update_password", new_callable=AsyncMock, return_value=True
    ) as update:
        resp = await async_client.post(
            f"{api_base}/auth/password/reset", json={"token": token, "new_password": "NewPass123!"}
        )

    assert resp.status_code == 200
    assert update.call_args.args[1] == admin_identity.id


@pytest.mark.asyncio
@pytest.mark.parametrize("subject", ["not-a-uuid", None])
async def test_reset_password_rejects_token_without_identity_id(
    async_client: AsyncClient, api_base: str, admin_identity: Identity, subject
):
    token = "garbage" if subject is None else generate_password_reset_token(subject)
    with patch(
        "app.api.v1.endpoints.auth.IdentityService.update_password", new_callable=AsyncMock
    ) as update:
        resp = await async_client.post(
            f"{api_base}/auth/password/reset", json={"token": token, "new_password": "NewPass123!"}
        )

    assert resp.status_code == 400
    assert resp.json()["error"]["message"] == "Invalid or expired token"
    assert not update.called
