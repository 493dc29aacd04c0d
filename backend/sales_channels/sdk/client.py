"""
Sales Channels API client
Async HTTP client for the admin API

Usage:
    client = SalesChannelsClient("http://localhost:8000", api_token="...")
    channel = await client.admin.sales_channels.retrieve("sc_123")
"""
import os
from typing import Any, Dict, Optional

import httpx
from pydantic import BaseModel

from sales_channels.sdk.resources import Admin


class ApiError(Exception):
    """Non-2xx response from the API"""

    def __init__(self, status_code: int, type: Optional[str], message: str):
        super().__init__(f"{status_code} {type or 'error'}: {message}")
        self.status_code = status_code
        self.type = type
        self.message = message


class SalesChannelsClient:
    """
    Client for the Sales Channels admin API

    Handles:
    - Base URL and authentication header
    - JSON encoding of payloads (pydantic models send only the fields that were set)
    - Error responses (raised as ApiError)
    """

    def __init__(
        self,
        base_url: str = None,
        api_token: str = None,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport = None,
    ):
        """
        Initialize client

        Args:
            base_url: API base URL (defaults to SALES_CHANNELS_API_URL)
            api_token: Admin API token (defaults to SALES_CHANNELS_API_TOKEN)
            timeout: Request timeout in seconds
            transport: Custom httpx transport (tests, proxies)
        """
        self.base_url = (base_url or os.getenv('SALES_CHANNELS_API_URL') or "http://localhost:8000").rstrip("/")
        self.api_token = api_token or os.getenv('SALES_CHANNELS_API_TOKEN')
        self.timeout = timeout
        self.transport = transport

        self.headers = {'Content-Type': 'application/json'}
        if self.api_token:
            self.headers['Authorization'] = f"Bearer {self.api_token}"

        self.admin = Admin(self)

    async def request(
        self,
        method: str,
        path: str,
        payload: Any = None,
        query: Optional[Dict[str, Any]] = None,
        custom_headers: Optional[Dict[str, str]] = None,
    ) -> Dict:
        """
        Send a request and return the decoded JSON body

        Args:
            method: HTTP verb
            path: Path relative to base_url (e.g. /admin/sales-channels)
            payload: Dict or pydantic model for the JSON body
            query: Query string parameters
            custom_headers: Extra headers for this request only

        Raises:
            ApiError: Response status is not 2xx
        """
        if isinstance(payload, BaseModel):
            payload = payload.model_dump(exclude_unset=True)

        headers = {**self.headers, **(custom_headers or {})}

        async with httpx.AsyncClient(base_url=self.base_url, transport=self.transport) as client:
            response = await client.request(
                method,
                path,
                json=payload if method != "GET" else None,
                params=query,
                headers=headers,
                timeout=self.timeout,
            )

        if response.is_error:
            try:
                body = response.json()
            except ValueError:
                body = {}
            message = body.get('message') or body.get('detail') or response.text
            raise ApiError(response.status_code, body.get('type'), str(message))

        return response.json()
