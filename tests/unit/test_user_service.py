"""Unit tests for UserService: sign-in account sync and admin checks."""

import pytest
from unittest.mock import AsyncMock, MagicMock, patch
from uuid import uuid4
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.user import Identity, UserAccount
from app.services.user_service import UserService


def _identity(**overrides) -> Identity:
    fields = dict(id=uuid4(), email="person@example.com", display_name="Person", is_active=True)
    fields.update(overrides)
    return Identity(**fields)


@pytest.mark.asyncio
async def test_first_sign_in_creates_non_admin_account():
    db = AsyncMock(spec=AsyncSession)
    identity = _identity()

    with patch("app.services.user_service.UserService.get_account", new_callable=AsyncMock) as mock_get:
        mock_get.return_value = None
        account = await UserService.create_or_update_user(db, identity)

    assert account.id == identity.id
    assert account.email == "person@example.com"
    assert account.name == "Person"
    assert account.is_admin is False
    db.add.assert_called_once_with(account)
    assert db.commit.called


@pytest.mark.asyncio
@pytest.mark.parametrize("stored_flag", [True, False])
async def test_sign_in_update_preserves_admin_flag(stored_flag):
    db = AsyncMock(spec=AsyncSession)
    identity = _identity(email="new@example.com", display_name="New Name")
    existing = UserAccount(id=identity.id, email="old@example.com", name="Old", is_admin=stored_flag)

    with patch("app.services.user_service.UserService.get_account", new_callable=AsyncMock) as mock_get:
        mock_get.return_value = existing
        account = await UserService.create_or_update_user(db, identity)

    assert account is existing
    assert account.is_admin is stored_flag
    assert account.email == "new@example.com"
    assert account.name == "New Name"
    assert not db.add.called


@pytest.mark.asyncio
async def test_sign_in_update_keeps_stored_values_when_identity_lacks_them():
    db = AsyncMock(spec=AsyncSession)
    identity = _identity(email="", display_name=None)
    existing = UserAccount(id=identity.id, email="kept@example.com", name="Kept", is_admin=True)

    with patch("app.services.user_service.UserService.get_account", new_callable=AsyncMock) as mock_get:
        mock_get.return_value = existing
        account = await UserService.create_or_update_user(db, identity)

    assert account.email == "kept@example.com"
    assert account.name == "Kept"
    assert account.is_admin is True


@pytest.mark.asyncio
async def test_create_or_update_without_identity_is_noop():
    db = AsyncMock(spec=AsyncSession)
    assert await UserService.create_or_update_user(db, None) is None
    assert not db.commit.called


@pytest.mark.asyncio
async def test_check_admin_status():
    db = AsyncMock(spec=AsyncSession)
    identity = _identity()

    with patch("app.services.user_service.UserService.get_account", new_callable=AsyncMock) as mock_get:
        mock_get.return_value = UserAccount(id=identity.id, email=identity.email, is_admin=True)
        assert await UserService.check_admin_status(db, identity) is True

        mock_get.return_value = UserAccount(id=identity.id, email=identity.email, is_admin=False)
        assert await UserService.check_admin_status(db, identity) is False

        mock_get.return_value = None
        assert await UserService.check_admin_status(db, identity) is False

    assert await UserService.check_admin_status(db, None) is False


@pytest.mark.asyncio
async def test_check_admin_status_swallows_lookup_failure():
    db = AsyncMock(spec=AsyncSession)
    with patch("app.services.user_service.UserService.get_account", new_callable=AsyncMock) as mock_get:
        mock_get.side_effect = OperationalError("SELECT", {}, Exception("connection refused"))
        assert await UserService.check_admin_status(db, _identity()) is False


@pytest.mark.asyncio
async def test_is_admin_email():
    db = AsyncMock(spec=AsyncSession)
    result = MagicMock()
    result.scalars.return_value.all.return_value = [
        UserAccount(email="a@example.com", is_admin=False),
        UserAccount(email="a@example.com", is_admin=True),
    ]
    db.execute.return_value = result

    assert await UserService.is_admin_email(db, "A@example.com") is True
    assert await UserService.is_admin_email(db, "") is False
