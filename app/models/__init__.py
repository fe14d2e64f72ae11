"""Models Package - Export all models for easy imports"""

from app.models.base import BaseModel, StatusMixin
from app.models.user import Identity, UserAccount
from app.models.contact import ContactSubmission
from app.models.student import Student, PaymentRecord


__all__ = [
    # Base classes
    "BaseModel",
    "StatusMixin",
    # Auth
    "Identity",
    "UserAccount",
    # Public intake
    "ContactSubmission",
    # Registry
    "Student",
    "PaymentRecord",
]
