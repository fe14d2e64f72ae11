from datetime import timedelta
from typing import Any
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api import deps
from app.config import settings
from app.core import security
from app.core.logging import get_logger
from app.core.rate_limit import limiter
from app.models.user import Identity
from app.schemas.auth import (
    LoginRequest, Token, SignUpRequest, SessionInfo,
    PasswordResetEmailRequest, PasswordResetRequest,
)
from app.schemas.responses import SuccessResponse
from app.services.email_service import send_password_reset
from app.services.identity_service import IdentityService
from app.services.user_service import UserService

logger = get_logger(__name__)

router = APIRouter()

RESET_EMAIL_FAILED = "We could not send the reset email right now. Please try again later."


@router.post("/signup", response_model=SuccessResponse)
async def sign_up(
    signup_in: SignUpRequest,
    db: AsyncSession = Depends(deps.get_db)
) -> Any:
    """
    Create sign-in credentials. The account record is created on first login
    and never starts out as an admin.
    """
    try:
        identity = await IdentityService.create_identity(
            db, email=signup_in.email, password=signup_in.password, display_name=signup_in.name
        )
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    return SuccessResponse(
        data={"user_id": str(identity.id)},
        message="Account created. You can now sign in."
    )


@router.post("/login", response_model=SuccessResponse[Token])
@limiter.limit(settings.LOGIN_RATE_LIMIT)
async def login(
    request: Request,
    login_data: LoginRequest,
    db: AsyncSession = Depends(deps.get_db)
) -> Any:
    """
    Email/password sign-in.
    Refreshes the user's account record and reports whether they are an admin.
    """
    identity = await IdentityService.authenticate(db, email=login_data.email, password=login_data.password)
    if not identity:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password",
        )

    account = await UserService.create_or_update_user(db, identity)

    if login_data.remember_me:
        expires = timedelta(days=settings.REMEMBER_ME_EXPIRE_DAYS)
    else:
        expires = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    access_token = security.create_access_token(data={"sub": str(identity.id)}, expires_delta=expires)

    return SuccessResponse(
        data=Token(
            access_token=access_token,
            expires_in=int(expires.total_seconds()),
            user_id=str(identity.id),
            email=identity.email,
            is_admin=account.is_admin is True,
        ),
        message="Login successful"
    )


@router.post("/logout", response_model=SuccessResponse)
async def logout(identity: Identity = Depends(deps.get_current_identity)) -> Any:
    """Tokens are stateless; the client discards its copy."""
    logger.info("Signed out", extra={"identity_id": str(identity.id)})
    return SuccessResponse(message="Signed out")


@router.get("/me", response_model=SuccessResponse[SessionInfo])
async def read_session(
    identity: Identity = Depends(deps.get_current_identity),
    db: AsyncSession = Depends(deps.get_db)
) -> Any:
    """Who is signed in, and whether they may open the dashboard."""
    account = await UserService.get_account(db, identity.id)
    return SuccessResponse(
        data=SessionInfo(
            user_id=identity.id,
            email=identity.email,
            name=(account.name if account else None) or identity.display_name,
            is_admin=bool(account and account.is_admin is True),
        )
    )


@router.post("/password/forgot", response_model=SuccessResponse)
@limiter.limit(settings.LOGIN_RATE_LIMIT)
async def forgot_password(
    request: Request,
    forgot_in: PasswordResetEmailRequest,
    db: AsyncSession = Depends(deps.get_db)
) -> Any:
    """
    Email a reset link. Only admin accounts can reset from here.
    """
    if not await UserService.is_admin_email(db, forgot_in.email):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="No admin account found with this email address.",
        )

    identity = await IdentityService.get_identity_by_email(db, forgot_in.email)
    if not identity:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="No admin account found with this email address.",
        )

    token = security.generate_password_reset_token(str(identity.id))
    if not send_password_reset(identity.email, token):
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=RESET_EMAIL_FAILED,
        )
    return SuccessResponse(message="Password reset email sent. Please check your inbox.")


@router.post("/password/reset", response_model=SuccessResponse)
async def reset_password(
    reset_in: PasswordResetRequest,
    db: AsyncSession = Depends(deps.get_db)
) -> Any:
    """
    Complete password reset flow.
    """
    identity_id_str = security.verify_password_reset_token(reset_in.token)
    if not identity_id_str:
        raise HTTPException(status_code=400, detail="Invalid or expired token")

    try:
        identity_id = UUID(identity_id_str)
    except ValueError:
        raise HTTPException(status_code=400, detail="Invalid or expired token")

    if not await IdentityService.update_password(db, identity_id, reset_in.new_password):
        raise HTTPException(status_code=404, detail="User not found")

    return SuccessResponse(message="Password updated successfully")
