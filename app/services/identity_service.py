"""Identity Service - credentials and sign-in"""

import logging
from typing import Optional
from uuid import UUID

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.security import get_password_hash, verify_password
from app.models.user import Identity
from app.utils.time import get_utc_now

logger = logging.getLogger(__name__)


def _normalize_email(email: str) -> str:
    return email.strip().lower()


class IdentityService:
    """Service layer standing in for the identity provider"""

    @staticmethod
    async def get_identity_by_id(db: AsyncSession, identity_id: UUID) -> Optional[Identity]:
        result = await db.execute(select(Identity).where(Identity.id == identity_id))
        return result.scalar_one_or_none()

    @staticmethod
    async def get_identity_by_email(db: AsyncSession, email: str) -> Optional[Identity]:
        """
        Get identity by email (case-insensitive).

        Args:
            db: Database session
            email: Email address as typed by the user

        Returns:
            Identity or None if not found
        """
        result = await db.execute(
            select(Identity).where(func.lower(Identity.email) == _normalize_email(email))
        )
        return result.scalar_one_or_none()

    @staticmethod
    async def create_identity(
        db: AsyncSession,
        email: str,
        password: str,
        display_name: Optional[str] = None,
    ) -> Identity:
        """
        Register new credentials.

        Raises:
            ValueError: If the email is already registered
        """
        if await IdentityService.get_identity_by_email(db, email):
            raise ValueError("Email already registered")

        identity = Identity(
            email=_normalize_email(email),
            hashed_password=get_password_hash(password),
            display_name=(display_name or "").strip() or None,
            is_active=True,
        )
        db.add(identity)
        await db.commit()
        await db.refresh(identity)
        logger.info("Identity created", extra={"identity_id": str(identity.id)})
        return identity

    @staticmethod
    async def authenticate(db: AsyncSession, email: str, password: str) -> Optional[Identity]:
        """
        Check email/password and stamp the sign-in time.

        Returns:
            Identity if the credentials match an active identity, None otherwise
        """
        identity = await IdentityService.get_identity_by_email(db, email)
        if not identity:
            return None
        if not verify_password(password, identity.hashed_password):
            return None
        if not identity.is_active:
            return None

        identity.last_sign_in_at = get_utc_now()
        await db.commit()
        return identity

    @staticmethod
    async def update_password(db: AsyncSession, identity_id: UUID, new_password: str) -> bool:
        """Replace the password hash. False when the identity does not exist."""
        identity = await IdentityService.get_identity_by_id(db, identity_id)
        if not identity:
            return False
        identity.hashed_password = get_password_hash(new_password)
        await db.commit()
        logger.info("Password updated", extra={"identity_id": str(identity_id)})
        return True
