"""API Dependencies"""

from typing import Optional
from uuid import UUID
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.core.logging import get_logger
from app.core.security import decode_token
from app.models.user import Identity, UserAccount
from app.services.identity_service import IdentityService
from app.services.user_service import UserService

logger = get_logger(__name__)

# auto_error=False so a missing header reads as 401 rather than 403
security = HTTPBearer(auto_error=False)

NOT_ADMIN = "not-admin"


def _unauthenticated(detail: str = "Not authenticated") -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_identity(
    db: AsyncSession = Depends(get_db),
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> Identity:
    """
    Resolve the bearer token to a signed-in identity.

    Raises:
        HTTPException: 401 if there is no token, it is invalid or expired,
            or the identity no longer exists or is disabled
    """
    if credentials is None:
        raise _unauthenticated()

    payload = decode_token(credentials.credentials)
    if not payload or payload.get("type") != "access":
        raise _unauthenticated("Could not validate credentials")

    try:
        identity_id = UUID(str(payload.get("sub")))
    except ValueError:
        raise _unauthenticated("Could not validate credentials")

    identity = await IdentityService.get_identity_by_id(db, identity_id)
    if not identity or not identity.is_active:
        raise _unauthenticated("Could not validate credentials")
    return identity


async def require_admin(
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
) -> UserAccount:
    """
    Gate for every dashboard route.

    Raises:
        HTTPException: 403 "not-admin" unless the identity's account has is_admin True
    """
    account = await UserService.get_account(db, identity.id)
    if account is None or account.is_admin is not True:
        logger.warning("Dashboard access refused", extra={"identity_id": str(identity.id)})
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=NOT_ADMIN)
    return account
