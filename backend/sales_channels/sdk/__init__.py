"""
Python SDK for the Sales Channels admin API
"""
from sales_channels.sdk.client import ApiError, SalesChannelsClient
from sales_channels.sdk.resources import AdminSalesChannelsResource

__all__ = ['ApiError', 'SalesChannelsClient', 'AdminSalesChannelsResource']
