"""Contact Service - public inquiries"""

import logging
from typing import List, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.contact import ContactSubmission
from app.schemas.contact import ContactSubmissionCreate

logger = logging.getLogger(__name__)

DELETE_CONFIRMATION_TEXT = "delete"


def is_delete_confirmed(confirmation: Optional[str]) -> bool:
    """The literal word "delete", any case."""
    return (confirmation or "").lower() == DELETE_CONFIRMATION_TEXT


class ContactService:
    """Service layer for contact submissions"""

    @staticmethod
    async def create_submission(db: AsyncSession, submission_in: ContactSubmissionCreate) -> ContactSubmission:
        """
        Store one contact form submission.

        No dedup and no spam filtering; every call appends a row.
        """
        submission = ContactSubmission(
            name=submission_in.name,
            email=submission_in.email,
            phone=submission_in.phone,
            student_class=submission_in.student_class or None,
            subject=submission_in.subject,
            message=submission_in.message,
        )
        db.add(submission)
        await db.commit()
        await db.refresh(submission)
        logger.info("Contact submission received", extra={"submission_id": str(submission.id)})
        return submission

    @staticmethod
    async def list_submissions(db: AsyncSession) -> List[ContactSubmission]:
        result = await db.execute(
            select(ContactSubmission).order_by(ContactSubmission.created_at.desc())
        )
        return list(result.scalars().all())

    @staticmethod
    async def get_submission(db: AsyncSession, submission_id: UUID) -> Optional[ContactSubmission]:
        result = await db.execute(
            select(ContactSubmission).where(ContactSubmission.id == submission_id)
        )
        return result.scalar_one_or_none()

    @staticmethod
    async def delete_submission(db: AsyncSession, submission_id: UUID, confirmation: Optional[str]) -> bool:
        """
        Permanently delete a submission.

        Args:
            db: Database session
            submission_id: Submission ID
            confirmation: Text typed by the admin; must be "delete"

        Returns:
            True if deleted, False if not found

        Raises:
            ValueError: If the confirmation text does not match
        """
        if not is_delete_confirmed(confirmation):
            raise ValueError("The confirmation text doesn't match")

        submission = await ContactService.get_submission(db, submission_id)
        if not submission:
            return False

        await db.delete(submission)
        await db.commit()
        logger.info("Contact submission deleted", extra={"submission_id": str(submission_id)})
        return True
