"""
Database models
"""
from .base import generate_entity_id, utcnow
from .sales_channel import SalesChannel, product_sales_channel
from .product import Product
from .store import Store, StagedJob

__all__ = [
    "SalesChannel",
    "product_sales_channel",
    "Product",
    "Store",
    "StagedJob",
    "generate_entity_id",
    "utcnow",
]
