from typing import Optional
from uuid import UUID
from pydantic import BaseModel, EmailStr, Field


class SignUpRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=6)
    name: Optional[str] = Field(None, max_length=255)


class LoginRequest(BaseModel):
    """Unknown fields (e.g. a client-sent isAdmin) are ignored."""
    email: EmailStr
    password: str
    remember_me: bool = False


class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"
    expires_in: int
    user_id: str
    email: str
    is_admin: bool


class SessionInfo(BaseModel):
    user_id: UUID
    email: str
    name: Optional[str] = None
    is_admin: bool


class PasswordResetEmailRequest(BaseModel):
    email: EmailStr


class PasswordResetRequest(BaseModel):
    token: str
    new_password: str = Field(..., min_length=6)
