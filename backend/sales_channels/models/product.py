"""
Product table

Only the columns the sales channel module needs; the full catalog lives elsewhere.
"""
from sqlalchemy import Column, DateTime, String
from sqlalchemy.orm import relationship

from sales_channels.core.database import Base
from .base import utcnow
from .sales_channel import product_sales_channel


class Product(Base):
    __tablename__ = "product"

    id = Column(String(64), primary_key=True)
    title = Column(String(255), nullable=False)

    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)
    deleted_at = Column(DateTime(timezone=True), index=True)

    sales_channels = relationship("SalesChannel", secondary=product_sales_channel, back_populates="products")
