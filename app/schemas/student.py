from typing import Any, Optional
from datetime import datetime
from decimal import Decimal
from uuid import UUID
from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator, model_validator

from app.utils.money import coerce_amount


class StudentCreate(BaseModel):
    """
    New student from the admin form.
    Fee and amount paid may arrive as strings; unreadable values become 0.
    Amount paid may not exceed the fee, same as on a payment update.
    """
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    phone: str = Field(..., min_length=1, max_length=50)
    student_class: str = Field(..., min_length=1, max_length=100)
    tuition_fee: Decimal = Decimal("0")
    amount_paid: Decimal = Decimal("0")
    paid: bool = False

    @field_validator("tuition_fee", "amount_paid", mode="before")
    @classmethod
    def coerce_money(cls, v: Any) -> Decimal:
        return coerce_amount(v)

    @model_validator(mode="after")
    def check_amount_within_fee(self) -> "StudentCreate":
        if self.amount_paid > self.tuition_fee:
            raise ValueError("Amount paid cannot exceed the tuition fee.")
        return self


class PaymentUpdate(BaseModel):
    """amount_paid is checked by the service so a bad value reads as a 400"""
    paid: bool
    amount_paid: Any = None


class StudentResponse(BaseModel):
    id: UUID
    name: str
    email: str
    phone: str
    student_class: str
    tuition_fee: float
    amount_paid: float
    paid: bool
    balance: float
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class PaymentRecordResponse(BaseModel):
    id: UUID
    student_id: UUID
    previous_amount_paid: float
    amount_paid: float
    paid: bool
    recorded_by: Optional[UUID] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
