"""User Account Endpoints"""

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_db, require_admin
from app.models.user import UserAccount
from app.schemas.responses import SuccessResponse
from app.schemas.user import UserAccountResponse
from app.services.user_service import UserService

router = APIRouter()


@router.get("", response_model=SuccessResponse[List[UserAccountResponse]])
async def list_users(
    db: AsyncSession = Depends(get_db),
    current_user: UserAccount = Depends(require_admin)
) -> SuccessResponse[List[UserAccountResponse]]:
    """
    Every account that has ever signed in, newest first.
    """
    accounts = await UserService.list_accounts(db)
    return SuccessResponse(data=[UserAccountResponse.model_validate(a) for a in accounts])
