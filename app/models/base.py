"""Base Models and Mixins for DRY principles"""

import uuid
from sqlalchemy import Column, DateTime, Boolean
from sqlalchemy.dialects.postgresql import UUID

from app.database import Base
from app.utils.time import get_utc_now


class BaseModel(Base):
    """
    Base model class with common fields for all models.

    Provides:
    - UUID primary key
    - created_at timestamp (server-assigned)
    - updated_at timestamp (bumped on every update)
    """
    __abstract__ = True

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)
    created_at = Column(DateTime, default=get_utc_now, nullable=False, index=True)
    updated_at = Column(DateTime, default=get_utc_now, onupdate=get_utc_now, nullable=False)


class StatusMixin:
    """
    Mixin for models with active/inactive status.

    Provides:
    - is_active boolean flag
    """
    is_active = Column(Boolean, default=True, nullable=False, index=True)
