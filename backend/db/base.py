"""Base model class for all SQLAlchemy models."""

from datetime import datetime
from uuid import uuid4

from sqlalchemy import func, DateTime
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base model class with common fields for all models."""

    pass


class BaseModel(Base):
    """Abstract base model with common timestamp fields.

    All store models inherit from this. Provides:
    - id: UUID primary key
    - created_at / updated_at: automatic timestamps
    """

    __abstract__ = True

    id: Mapped[str] = mapped_column(primary_key=True, default=lambda: str(uuid4()))
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=func.now(), onupdate=func.now()
    )
