from typing import Optional
from datetime import datetime
from uuid import UUID
from pydantic import BaseModel, ConfigDict, EmailStr, Field


class ContactSubmissionCreate(BaseModel):
    """Public contact form. Every field except student_class is required."""
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    phone: str = Field(..., min_length=1, max_length=50)
    student_class: Optional[str] = Field(None, max_length=100)
    subject: str = Field(..., min_length=1, max_length=255)
    message: str = Field(..., min_length=1)


class ContactSubmissionResponse(BaseModel):
    id: UUID
    name: str
    email: str
    phone: str
    student_class: Optional[str] = None
    subject: str
    message: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ContactDeleteRequest(BaseModel):
    confirmation: str = ""
