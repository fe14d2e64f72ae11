"""User Service - application accounts and the admin flag"""

import logging
from typing import List, Optional
from uuid import UUID

from sqlalchemy import select, func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.user import Identity, UserAccount

logger = logging.getLogger(__name__)


class UserService:
    """Service layer for user-account operations"""

    @staticmethod
    async def get_account(db: AsyncSession, user_id: UUID) -> Optional[UserAccount]:
        result = await db.execute(select(UserAccount).where(UserAccount.id == user_id))
        return result.scalar_one_or_none()

    @staticmethod
    async def check_admin_status(db: AsyncSession, identity: Optional[Identity]) -> bool:
        """
        True only when the identity has an account whose is_admin is True.

        Lookup failures are logged and treated as "not an admin".
        """
        if identity is None:
            return False
        try:
            account = await UserService.get_account(db, identity.id)
        except SQLAlchemyError:
            logger.exception("Error checking admin status", extra={"identity_id": str(identity.id)})
            return False
        return account is not None and account.is_admin is True

    @staticmethod
    async def create_or_update_user(db: AsyncSession, identity: Optional[Identity]) -> Optional[UserAccount]:
        """
        Create or refresh the account for a signed-in identity.

        Existing accounts get email and name merged from the identity and keep
        their stored is_admin value. New accounts always start as non-admin.

        Args:
            db: Database session
            identity: The identity that just signed in

        Returns:
            The account, or None when no identity was given
        """
        if identity is None:
            return None

        account = await UserService.get_account(db, identity.id)
        if account:
            account.email = identity.email or account.email or ""
            account.name = identity.display_name or account.name
        else:
            account = UserAccount(
                id=identity.id,
                email=identity.email or "",
                name=identity.display_name,
                is_admin=False,
            )
            db.add(account)
            logger.info("User account created", extra={"user_id": str(identity.id)})

        await db.commit()
        await db.refresh(account)
        return account

    @staticmethod
    async def is_admin_email(db: AsyncSession, email: str) -> bool:
        """Whether any account registered with this email is an admin."""
        if not email:
            return False
        result = await db.execute(
            select(UserAccount).where(func.lower(UserAccount.email) == email.strip().lower())
        )
        return any(account.is_admin is True for account in result.scalars().all())

    @staticmethod
    async def list_accounts(db: AsyncSession) -> List[UserAccount]:
        """All accounts, newest first."""
        result = await db.execute(select(UserAccount).order_by(UserAccount.created_at.desc()))
        return list(result.scalars().all())

    @staticmethod
    async def set_admin(db: AsyncSession, email: str, is_admin: bool) -> Optional[UserAccount]:
        """
        Out-of-band admin provisioning (used by scripts/grant_admin.py only).

        Creates the account from the identity when the person has never signed in.
        """
        result = await db.execute(
            select(Identity).where(func.lower(Identity.email) == email.strip().lower())
        )
        identity = result.scalar_one_or_none()
        if not identity:
            return None

        account = await UserService.get_account(db, identity.id)
        if not account:
            account = UserAccount(id=identity.id, email=identity.email, name=identity.display_name)
            db.add(account)
        account.is_admin = is_admin
        await db.commit()
        await db.refresh(account)
        logger.warning(
            "Admin flag changed",
            extra={"user_id": str(identity.id), "is_admin": is_admin},
        )
        return account
