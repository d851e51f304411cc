"""
PostgreSQL Database Models - SQLAlchemy ORM
Tables for the Organization Message Service
"""
from datetime import datetime

from sqlalchemy import Boolean, DateTime, Index, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column
import uuid as uuid_lib

from .connection import Base


# ==================== MESSAGE MODEL ====================

class Message(Base):
    """Messages - short texts scoped to an organization"""
    __tablename__ = "messages"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid_lib.uuid4()))
    organization_id: Mapped[str] = mapped_column(String(36), nullable=False, index=True)
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)

    __table_args__ = (
        # Title uniqueness covers inactive messages too
        UniqueConstraint('organization_id', 'title', name='uq_messages_organization_title'),
        Index('idx_messages_organization_created_at', 'organization_id', 'created_at'),
    )
