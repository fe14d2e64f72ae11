"""Public Contact Form Submissions"""

from sqlalchemy import Column, String, Text

from app.models.base import BaseModel


class ContactSubmission(BaseModel):
    """
    Inquiry submitted through the public contact form.
    Immutable once stored; admins may only delete it.
    """
    __tablename__ = "contacts"

    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False)
    phone = Column(String(50), nullable=False)
    student_class = Column(String(100), nullable=True)
    subject = Column(String(255), nullable=False)
    message = Column(Text, nullable=False)

    def __repr__(self) -> str:
        return f"<ContactSubmission {self.email} - {self.subject}>"
