"""
Domain Layer - Business Entities

This layer contains Pydantic models representing business entities and the
inputs the services accept.
"""
from sales_channels.domain.common import FindConfig, ListConfig
from sales_channels.domain.sales_channel import (
    ProductBatchItem,
    ProductSummary,
    SalesChannel,
    SalesChannelCreate,
    SalesChannelProductsBatch,
    SalesChannelUpdate,
)
from sales_channels.domain.store import Store, StoreUpdate

__all__ = [
    'FindConfig',
    'ListConfig',
    'ProductBatchItem',
    'ProductSummary',
    'SalesChannel',
    'SalesChannelCreate',
    'SalesChannelProductsBatch',
    'SalesChannelUpdate',
    'Store',
    'StoreUpdate',
]
