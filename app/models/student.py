"""Student Registry & Payment Ledger Models"""

from decimal import Decimal

from sqlalchemy import Column, String, Boolean, Numeric, ForeignKey
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship

from app.models.base import BaseModel


class Student(BaseModel):
    """
    Enrolled student with tuition tracking.
    Balance is derived on read and never stored.
    """
    __tablename__ = "students"

    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False)
    phone = Column(String(50), nullable=False)
    student_class = Column(String(100), nullable=False)

    tuition_fee = Column(Numeric(12, 2), default=0, nullable=False)
    amount_paid = Column(Numeric(12, 2), default=0, nullable=False)
    paid = Column(Boolean, default=False, nullable=False, index=True)

    payments = relationship(
        "PaymentRecord",
        back_populates="student",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="PaymentRecord.created_at.desc()",
    )

    @property
    def balance(self) -> Decimal:
        """Tuition fee minus amount paid"""
        return Decimal(self.tuition_fee or 0) - Decimal(self.amount_paid or 0)

    def __repr__(self) -> str:
        return f"<Student {self.name} ({self.student_class})>"


class PaymentRecord(BaseModel):
    """
    Append-only ledger entry written on every payment update.
    """
    __tablename__ = "payment_records"

    student_id = Column(
        UUID(as_uuid=True),
        ForeignKey("students.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    previous_amount_paid = Column(Numeric(12, 2), nullable=False)
    amount_paid = Column(Numeric(12, 2), nullable=False)
    paid = Column(Boolean, nullable=False)
    recorded_by = Column(
        UUID(as_uuid=True),
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
    )

    student = relationship("Student", back_populates="payments")

    def __repr__(self) -> str:
        return f"<PaymentRecord student={self.student_id} {self.previous_amount_paid}->{self.amount_paid}>"
