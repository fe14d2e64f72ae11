"""Standardized API Response Schemas"""

from typing import Generic, TypeVar, Optional
from pydantic import BaseModel


T = TypeVar('T')


class SuccessResponse(BaseModel, Generic[T]):
    """
    Standard success response envelope.

    Example:
        {
            "success": true,
            "data": {...},
            "message": "Operation successful"
        }
    """
    success: bool = True
    data: Optional[T] = None
    message: str = "Operation successful"


class ErrorDetail(BaseModel):
    """Error details structure"""
    code: str
    message: str


class ErrorResponse(BaseModel):
    """
    Standard error response envelope.

    Example:
        {
            "success": false,
            "error": {
                "code": "NOT_ADMIN",
                "message": "not-admin"
            },
            "redirect_to": "/"
        }
    """
    success: bool = False
    error: ErrorDetail
    redirect_to: Optional[str] = None
