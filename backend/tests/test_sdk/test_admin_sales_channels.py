"""
Tests for the admin SDK

Requests are captured with httpx.MockTransport; the end-to-end test routes
the client straight into the FastAPI app with httpx.ASGITransport.
"""
import asyncio
import json

import httpx
import pytest

from sales_channels.domain import SalesChannelProductsBatch, SalesChannelUpdate
from sales_channels.sdk import ApiError, SalesChannelsClient


def _recording_client(requests, status_code=200, body=None, **kwargs):
    """Client whose transport records each request and answers with `body`"""
    def handler(request: httpx.Request):
        requests.append(request)
        return httpx.Response(status_code, json=body if body is not None else {"sales_channel": {"id": "sc_1"}})

    return SalesChannelsClient(
        base_url="http://api.test",
        transport=httpx.MockTransport(handler),
        **kwargs,
    )


class TestAdminSalesChannelsResource:
    """Test request shapes produced by client.admin.sales_channels"""

    def test_add_products_posts_batch(self):
        """Test add_products uses POST on the batch path with the body as given"""
        # Arrange
        requests = []
        client = _recording_client(requests)
        payload = {"products_ids": [{"id": "prod_1"}, {"id": "prod_2"}]}

        # Act
        result = asyncio.run(client.admin.sales_channels.add_products("sc_1", payload))

        # Assert
        assert result == {"sales_channel": {"id": "sc_1"}}
        request = requests[0]
        assert request.method == "POST"
        assert request.url.path == "/admin/sales-channels/sc_1/products/batch"
        assert json.loads(request.content) == payload

    def test_add_products_accepts_model(self):
        requests = []
        client = _recording_client(requests)
        payload = SalesChannelProductsBatch(products_ids=[{"id": "prod_1"}])

        asyncio.run(client.admin.sales_channels.add_products("sc_1", payload))

        assert json.loads(requests[0].content) == {"products_ids": [{"id": "prod_1"}]}

    def test_custom_headers_are_merged(self):
        requests = []
        client = _recording_client(requests, api_token="secret")

        asyncio.run(client.admin.sales_channels.add_products(
            "sc_1", {"products_ids": []}, custom_headers={"X-Request-Id": "req_1"}
        ))

        headers = requests[0].headers
        assert headers["X-Request-Id"] == "req_1"
        assert headers["Authorization"] == "Bearer secret"
        assert headers["Content-Type"] == "application/json"

    def test_update_sends_only_fields_that_were_set(self):
        """Test unset fields are dropped while explicit nulls are kept"""
        requests = []
        client = _recording_client(requests)

        asyncio.run(client.admin.sales_channels.update("sc_1", SalesChannelUpdate(description=None)))

        assert requests[0].method == "POST"
        assert requests[0].url.path == "/admin/sales-channels/sc_1"
        assert json.loads(requests[0].content) == {"description": None}

    def test_retrieve_with_expand(self):
        requests = []
        client = _recording_client(requests)

        asyncio.run(client.admin.sales_channels.retrieve("sc_1", expand=["products"]))

        assert requests[0].method == "GET"
        assert requests[0].url.params.get_list("expand") == ["products"]

    def test_delete(self):
        requests = []
        client = _recording_client(requests, body={"id": "sc_1", "object": "sales-channel", "deleted": True})

        result = asyncio.run(client.admin.sales_channels.delete("sc_1"))

        assert requests[0].method == "DELETE"
        assert result["deleted"] is True

    def test_error_response_raises_api_error(self):
        requests = []
        client = _recording_client(
            requests,
            status_code=404,
            body={"type": "not_found", "message": "Sales channel with id sc_1 was not found"},
        )

        with pytest.raises(ApiError) as exc_info:
            asyncio.run(client.admin.sales_channels.retrieve("sc_1"))

        assert exc_info.value.status_code == 404
        assert exc_info.value.type == "not_found"
        assert exc_info.value.message == "Sales channel with id sc_1 was not found"


class TestClientConfiguration:
    def test_base_url_from_environment(self, monkeypatch):
        monkeypatch.setenv("SALES_CHANNELS_API_URL", "http://channels.internal/")
        monkeypatch.delenv("SALES_CHANNELS_API_TOKEN", raising=False)

        client = SalesChannelsClient()

        assert client.base_url == "http://channels.internal"
        assert "Authorization" not in client.headers


def test_end_to_end_against_app(api_client, product_ids):
    """Test the SDK against the real app: create, assign products, retrieve"""
    from sales_channels.main import app

    client = SalesChannelsClient(base_url="http://testserver", transport=httpx.ASGITransport(app=app))
    sales_channels = client.admin.sales_channels

    async def scenario():
        created = await sales_channels.create({"name": "Marketplace"})
        sales_channel_id = created["sales_channel"]["id"]
        await sales_channels.add_products(
            sales_channel_id, {"products_ids": [{"id": product_id} for product_id in product_ids]}
        )
        return await sales_channels.retrieve(sales_channel_id, expand=["products"])

    result = asyncio.run(scenario())

    assert result["sales_channel"]["name"] == "Marketplace"
    assert sorted(p["id"] for p in result["sales_channel"]["products"]) == sorted(product_ids)
