"""
Admin API resources
"""
from typing import Dict, List, Optional, Union

from sales_channels.domain import SalesChannelCreate, SalesChannelProductsBatch, SalesChannelUpdate


class BaseResource:
    def __init__(self, client):
        self.client = client


class AdminSalesChannelsResource(BaseResource):
    """Sales channel endpoints (/admin/sales-channels)"""

    async def retrieve(
        self,
        sales_channel_id: str,
        expand: Optional[List[str]] = None,
        custom_headers: Optional[Dict[str, str]] = None,
    ) -> Dict:
        """Get a sales channel; returns {"sales_channel": {...}}"""
        path = f"/admin/sales-channels/{sales_channel_id}"
        query = {"expand": expand} if expand else None
        return await self.client.request("GET", path, query=query, custom_headers=custom_headers)

    async def create(
        self,
        payload: Union[SalesChannelCreate, Dict],
        custom_headers: Optional[Dict[str, str]] = None,
    ) -> Dict:
        """Create a sales channel"""
        path = "/admin/sales-channels"
        return await self.client.request("POST", path, payload, custom_headers=custom_headers)

    async def update(
        self,
        sales_channel_id: str,
        payload: Union[SalesChannelUpdate, Dict],
        custom_headers: Optional[Dict[str, str]] = None,
    ) -> Dict:
        """Update a sales channel; only the fields in the payload change"""
        path = f"/admin/sales-channels/{sales_channel_id}"
        return await self.client.request("POST", path, payload, custom_headers=custom_headers)

    async def delete(
        self,
        sales_channel_id: str,
        custom_headers: Optional[Dict[str, str]] = None,
    ) -> Dict:
        """Delete a sales channel; returns {"id", "object", "deleted"}"""
        path = f"/admin/sales-channels/{sales_channel_id}"
        return await self.client.request("DELETE", path, custom_headers=custom_headers)

    async def add_products(
        self,
        sales_channel_id: str,
        payload: Union[SalesChannelProductsBatch, Dict],
        custom_headers: Optional[Dict[str, str]] = None,
    ) -> Dict:
        """
        Add a batch of products to a sales channel

        Payload: {"products_ids": [{"id": "prod_..."}, ...]}
        """
        path = f"/admin/sales-channels/{sales_channel_id}/products/batch"
        return await self.client.request("POST", path, payload, custom_headers=custom_headers)


class Admin:
    def __init__(self, client):
        self.sales_channels = AdminSalesChannelsResource(client)
