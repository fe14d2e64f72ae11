from typing import List
from pydantic import BaseModel

from app.schemas.contact import ContactSubmissionResponse
from app.schemas.student import StudentResponse


class DashboardData(BaseModel):
    """Dashboard payload"""
    submissions: List[ContactSubmissionResponse]
    students: List[StudentResponse]
    total_students: int
    paid_students: int
    outstanding_balance: float
