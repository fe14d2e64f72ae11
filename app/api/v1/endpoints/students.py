from typing import Any, List
from urllib.parse import quote
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api import deps
from app.config import settings
from app.core.logging import get_logger
from app.models.user import UserAccount
from app.schemas.responses import SuccessResponse
from app.schemas.student import (
    StudentCreate, StudentResponse, PaymentUpdate, PaymentRecordResponse,
)
from app.services.invoice_service import InstituteDetails, render_invoice
from app.services.student_service import StudentService
from app.utils.time import get_utc_now

logger = get_logger(__name__)

router = APIRouter()


@router.get("", response_model=SuccessResponse[List[StudentResponse]])
async def list_students(
    current_user: UserAccount = Depends(deps.require_admin),
    db: AsyncSession = Depends(deps.get_db)
) -> Any:
    """
    List all students, newest first, each with its current balance.
    """
    students = await StudentService.list_students(db)
    return SuccessResponse(data=[StudentResponse.model_validate(s) for s in students])


@router.post("", response_model=SuccessResponse[StudentResponse])
async def create_student(
    student_in: StudentCreate,
    current_user: UserAccount = Depends(deps.require_admin),
    db: AsyncSession = Depends(deps.get_db)
) -> Any:
    """
    Create single student.
    """
    student = await StudentService.create_student(db, student_in)
    return SuccessResponse(
        data=StudentResponse.model_validate(student),
        message="Student created successfully!"
    )


@router.get("/{student_id}", response_model=SuccessResponse[StudentResponse])
async def get_student(
    student_id: UUID,
    current_user: UserAccount = Depends(deps.require_admin),
    db: AsyncSession = Depends(deps.get_db)
) -> Any:
    student = await StudentService.get_student(db, student_id)
    if not student:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Student not found")
    return SuccessResponse(data=StudentResponse.model_validate(student))


@router.delete("/{student_id}", response_model=SuccessResponse)
async def delete_student(
    student_id: UUID,
    current_user: UserAccount = Depends(deps.require_admin),
    db: AsyncSession = Depends(deps.get_db)
) -> Any:
    """
    Permanently delete a student. There is no undo.
    """
    if not await StudentService.delete_student(db, student_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Student not found")
    return SuccessResponse(message="Student deleted")


@router.patch("/{student_id}/payment", response_model=SuccessResponse[StudentResponse])
async def update_payment(
    student_id: UUID,
    payment_in: PaymentUpdate,
    current_user: UserAccount = Depends(deps.require_admin),
    db: AsyncSession = Depends(deps.get_db)
) -> Any:
    """
    Overwrite amount paid and the paid flag. The prior value is kept in the ledger.
    """
    try:
        student = await StudentService.update_payment(
            db,
            student_id,
            paid=payment_in.paid,
            amount_paid=payment_in.amount_paid,
            recorded_by=current_user.id,
        )
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    if not student:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Student not found")
    return SuccessResponse(
        data=StudentResponse.model_validate(student),
        message="Payment status updated"
    )


@router.get("/{student_id}/payments", response_model=SuccessResponse[List[PaymentRecordResponse]])
async def list_payments(
    student_id: UUID,
    current_user: UserAccount = Depends(deps.require_admin),
    db: AsyncSession = Depends(deps.get_db)
) -> Any:
    """Payment history for one student, newest first."""
    if not await StudentService.get_student(db, student_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Student not found")
    records = await StudentService.list_payments(db, student_id)
    return SuccessResponse(data=[PaymentRecordResponse.model_validate(r) for r in records])


@router.get(
    "/{student_id}/invoice",
    response_class=Response,
    responses={200: {"content": {"application/pdf": {}}}},
)
async def download_invoice(
    student_id: UUID,
    current_user: UserAccount = Depends(deps.require_admin),
    db: AsyncSession = Depends(deps.get_db)
) -> Response:
    """
    Render a PDF invoice from the student's current record and send it as a download.
    """
    student = await StudentService.get_student(db, student_id)
    if not student:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Student not found")

    try:
        invoice = render_invoice(student, get_utc_now(), InstituteDetails.from_settings(settings))
    except Exception:
        logger.exception("Error generating invoice", extra={"student_id": str(student_id)})
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to generate invoice. Please try again.",
        )

    ascii_name = invoice.filename.encode("ascii", "ignore").decode("ascii")
    return Response(
        content=invoice.content,
        media_type=invoice.media_type,
        headers={
            "Content-Disposition": (
                f"attachment; filename=\"{ascii_name}\"; filename*=UTF-8''{quote(invoice.filename)}"
            ),
            "X-Invoice-Number": invoice.invoice_number,
        },
    )
