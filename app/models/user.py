"""Identity & User Account Models"""

from sqlalchemy import Column, String, Boolean, DateTime, ForeignKey
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship

from app.models.base import BaseModel, StatusMixin


class Identity(BaseModel, StatusMixin):
    """
    Sign-in credentials for a person.
    Owns authentication only; authorization lives on UserAccount.
    """
    __tablename__ = "identities"

    email = Column(String(255), unique=True, nullable=False, index=True)
    hashed_password = Column(String(255), nullable=False)
    display_name = Column(String(255), nullable=True)
    last_sign_in_at = Column(DateTime, nullable=True)

    account = relationship(
        "UserAccount",
        back_populates="identity",
        uselist=False,
        cascade="all, delete-orphan",
    )

    def __repr__(self) -> str:
        return f"<Identity {self.email}>"


class UserAccount(BaseModel):
    """
    Application-side user record, created on first sign-in.

    is_admin is provisioned out-of-band (scripts/grant_admin.py) and is never
    written by the sign-in path.
    """
    __tablename__ = "users"

    id = Column(
        UUID(as_uuid=True),
        ForeignKey("identities.id", ondelete="CASCADE"),
        primary_key=True,
    )
    email = Column(String(255), nullable=False, default="", index=True)
    name = Column(String(255), nullable=True)
    is_admin = Column(Boolean, default=False, nullable=False)

    identity = relationship("Identity", back_populates="account")

    def __repr__(self) -> str:
        return f"<UserAccount {self.email} admin={self.is_admin}>"
