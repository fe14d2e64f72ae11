"""Student Service - registry and payments"""

import logging
from typing import Any, List, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.student import Student, PaymentRecord
from app.schemas.student import StudentCreate
from app.utils.money import parse_amount

logger = logging.getLogger(__name__)


class StudentService:
    """Service layer for student records and tuition payments"""

    @staticmethod
    async def create_student(db: AsyncSession, student_in: StudentCreate) -> Student:
        """
        Create a student record.

        Args:
            db: Database session
            student_in: Validated form data (amounts already coerced)

        Returns:
            The stored student
        """
        student = Student(
            name=student_in.name,
            email=student_in.email,
            phone=student_in.phone,
            student_class=student_in.student_class,
            tuition_fee=student_in.tuition_fee,
            amount_paid=student_in.amount_paid,
            paid=student_in.paid,
        )
        db.add(student)
        await db.commit()
        await db.refresh(student)
        logger.info("Student created", extra={"student_id": str(student.id)})
        return student

    @staticmethod
    async def list_students(db: AsyncSession) -> List[Student]:
        """All students, newest first. No pagination."""
        result = await db.execute(select(Student).order_by(Student.created_at.desc()))
        return list(result.scalars().all())

    @staticmethod
    async def get_student(db: AsyncSession, student_id: UUID) -> Optional[Student]:
        result = await db.execute(select(Student).where(Student.id == student_id))
        return result.scalar_one_or_none()

    @staticmethod
    async def delete_student(db: AsyncSession, student_id: UUID) -> bool:
        """Hard delete (ledger rows go with it). False if not found."""
        student = await StudentService.get_student(db, student_id)
        if not student:
            return False
        await db.delete(student)
        await db.commit()
        logger.info("Student deleted", extra={"student_id": str(student_id)})
        return True

    @staticmethod
    async def update_payment(
        db: AsyncSession,
        student_id: UUID,
        paid: bool,
        amount_paid: Any,
        recorded_by: Optional[UUID] = None,
    ) -> Optional[Student]:
        """
        Overwrite a student's amount paid and paid flag.

        The previous value is kept in the payment ledger. Concurrent updates
        are not coordinated; the last write wins.

        Args:
            db: Database session
            student_id: Student ID
            paid: New paid flag
            amount_paid: User-entered amount (number or numeric string)
            recorded_by: Account ID of the admin making the change

        Returns:
            Updated student or None if not found

        Raises:
            ValueError: If the amount is not a non-negative number or exceeds the fee
        """
        amount = parse_amount(amount_paid)
        if amount is None or amount < 0:
            raise ValueError("Please enter a valid amount.")

        student = await StudentService.get_student(db, student_id)
        if not student:
            return None

        if amount > student.tuition_fee:
            raise ValueError("Amount paid cannot exceed the tuition fee.")

        db.add(PaymentRecord(
            student_id=student.id,
            previous_amount_paid=student.amount_paid,
            amount_paid=amount,
            paid=paid,
            recorded_by=recorded_by,
        ))
        student.amount_paid = amount
        student.paid = paid

        await db.commit()
        await db.refresh(student)
        logger.info(
            "Payment updated",
            extra={"student_id": str(student_id), "paid": paid, "amount_paid": str(amount)},
        )
        return student

    @staticmethod
    async def list_payments(db: AsyncSession, student_id: UUID) -> List[PaymentRecord]:
        """Ledger entries for a student, newest first."""
        result = await db.execute(
            select(PaymentRecord)
            .where(PaymentRecord.student_id == student_id)
            .order_by(PaymentRecord.created_at.desc())
        )
        return list(result.scalars().all())
