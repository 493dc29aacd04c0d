"""
Store and staged job tables
"""
from sqlalchemy import JSON, Column, DateTime, ForeignKey, String

from sales_channels.core.database import Base
from .base import utcnow


class Store(Base):
    """
    The merchant's store. A single row; points at the default sales channel.

    Soft-deleting the default channel does NOT clear default_sales_channel_id.
    """
    __tablename__ = "store"

    id = Column(String(64), primary_key=True)
    name = Column(String(255), nullable=False, default="Default Store")

    default_sales_channel_id = Column(String(64), ForeignKey("sales_channel.id"), nullable=True)

    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)


class StagedJob(Base):
    """
    Event emitted inside a transaction, waiting for post-commit delivery
    """
    __tablename__ = "staged_job"

    id = Column(String(64), primary_key=True)
    event_name = Column(String(255), nullable=False, index=True)
    data = Column(JSON, nullable=False)

    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, index=True)
