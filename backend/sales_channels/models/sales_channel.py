"""
Sales channel tables
"""
from sqlalchemy import Boolean, Column, DateTime, ForeignKey, String, Table, Text
from sqlalchemy.orm import relationship

from sales_channels.core.database import Base
from .base import utcnow


# Join table between channels and products - one row per (channel, product) pair
product_sales_channel = Table(
    "product_sales_channel",
    Base.metadata,
    Column(
        "sales_channel_id",
        String(64),
        ForeignKey("sales_channel.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "product_id",
        String(64),
        ForeignKey("product.id", ondelete="CASCADE"),
        primary_key=True,
        index=True,
    ),
)


class SalesChannel(Base):
    """
    A distribution context (storefront, marketplace, POS) products are sold through
    """
    __tablename__ = "sales_channel"

    id = Column(String(64), primary_key=True)

    name = Column(String(255), nullable=False)
    description = Column(Text)
    is_disabled = Column(Boolean, nullable=False, default=False)

    # Metadata
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)
    deleted_at = Column(DateTime(timezone=True), index=True)  # soft delete

    # Relationships
    products = relationship("Product", secondary=product_sales_channel, back_populates="sales_channels")
