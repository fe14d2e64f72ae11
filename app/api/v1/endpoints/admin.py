from typing import Any

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api import deps
from app.models.user import UserAccount
from app.schemas.admin import DashboardData
from app.schemas.contact import ContactSubmissionResponse
from app.schemas.responses import SuccessResponse
from app.schemas.student import StudentResponse
from app.schemas.user import UserAccountResponse
from app.services.contact_service import ContactService
from app.services.student_service import StudentService

router = APIRouter()


@router.get("/session", response_model=SuccessResponse[UserAccountResponse])
async def admin_session(
    current_user: UserAccount = Depends(deps.require_admin),
) -> Any:
    """Succeeds only for admins; the front end uses it to guard the dashboard."""
    return SuccessResponse(data=UserAccountResponse.model_validate(current_user))


@router.get("/dashboard", response_model=SuccessResponse[DashboardData])
async def dashboard(
    current_user: UserAccount = Depends(deps.require_admin),
    db: AsyncSession = Depends(deps.get_db)
) -> Any:
    """
    Everything the dashboard shows on load: submissions and students, newest first.
    """
    submissions = await ContactService.list_submissions(db)
    students = await StudentService.list_students(db)

    outstanding = sum(s.balance for s in students if s.balance > 0)
    return SuccessResponse(
        data=DashboardData(
            submissions=[ContactSubmissionResponse.model_validate(s) for s in submissions],
            students=[StudentResponse.model_validate(s) for s in students],
            total_students=len(students),
            paid_students=sum(1 for s in students if s.paid),
            outstanding_balance=float(outstanding),
        )
    )
