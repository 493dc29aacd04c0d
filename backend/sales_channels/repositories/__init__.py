"""
Repository Layer - Data Access

This layer handles all database queries for the sales channel module.
Repositories work inside a session handed over by the service layer.
"""
from sales_channels.repositories.sales_channel_repository import SalesChannelRepository
from sales_channels.repositories.product_repository import ProductRepository
from sales_channels.repositories.store_repository import StoreRepository

__all__ = [
    'SalesChannelRepository',
    'ProductRepository',
    'StoreRepository',
]
