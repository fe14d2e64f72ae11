from typing import Any, List
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.api import deps
from app.core.logging import get_logger
from app.models.user import UserAccount
from app.schemas.contact import (
    ContactSubmissionCreate, ContactSubmissionResponse, ContactDeleteRequest,
)
from app.schemas.responses import SuccessResponse
from app.services.contact_service import ContactService

logger = get_logger(__name__)

router = APIRouter()

SUBMIT_FAILED = "We could not submit your inquiry right now. Please contact us directly via phone or email."


@router.post("", response_model=SuccessResponse)
async def submit_contact_form(
    submission_in: ContactSubmissionCreate,
    db: AsyncSession = Depends(deps.get_db)
) -> Any:
    """
    Public contact form. Appends one submission; no dedup, no retry.
    """
    try:
        submission = await ContactService.create_submission(db, submission_in)
    except SQLAlchemyError:
        logger.exception("Error submitting contact form")
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=SUBMIT_FAILED)

    return SuccessResponse(
        data={"id": str(submission.id), "created_at": submission.created_at.isoformat()},
        message="Thank you! We will get back to you soon."
    )


@router.get("", response_model=SuccessResponse[List[ContactSubmissionResponse]])
async def list_contact_submissions(
    current_user: UserAccount = Depends(deps.require_admin),
    db: AsyncSession = Depends(deps.get_db)
) -> Any:
    """All submissions, newest first."""
    submissions = await ContactService.list_submissions(db)
    return SuccessResponse(
        data=[ContactSubmissionResponse.model_validate(s) for s in submissions]
    )


@router.delete("/{submission_id}", response_model=SuccessResponse)
async def delete_contact_submission(
    submission_id: UUID,
    delete_in: ContactDeleteRequest,
    current_user: UserAccount = Depends(deps.require_admin),
    db: AsyncSession = Depends(deps.get_db)
) -> Any:
    """
    Permanently delete a submission. The body must carry confirmation "delete".
    """
    try:
        deleted = await ContactService.delete_submission(db, submission_id, delete_in.confirmation)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    if not deleted:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Submission not found")
    return SuccessResponse(message="Submission deleted")
