"""
Sales Channels API Endpoints
Admin management of sales channels and their products

Domain errors raised by the service are turned into HTTP responses by the
exception handlers registered in main.py.
"""
from fastapi import APIRouter, Depends, Query, Request
from typing import List, Optional

from sales_channels.domain import (
    FindConfig,
    SalesChannelCreate,
    SalesChannelProductsBatch,
    SalesChannelUpdate,
)
from sales_channels.services.sales_channel_service import SalesChannelService

router = APIRouter()


def get_sales_channel_service(request: Request) -> SalesChannelService:
    """FastAPI dependency returning the app's SalesChannelService"""
    return request.app.state.container.sales_channel_service


@router.get("/{sales_channel_id}")
def get_sales_channel(
    sales_channel_id: str,
    expand: Optional[List[str]] = Query(None, description="Relations to include (products)"),
    service: SalesChannelService = Depends(get_sales_channel_service),
):
    """
    Get a single sales channel
    """
    sales_channel = service.retrieve(sales_channel_id, FindConfig(relations=expand or []))
    return {"sales_channel": sales_channel.to_dict()}


@router.post("")
def create_sales_channel(
    payload: SalesChannelCreate,
    service: SalesChannelService = Depends(get_sales_channel_service),
):
    """
    Create a sales channel
    """
    sales_channel = service.create(payload)
    return {"sales_channel": sales_channel.to_dict()}


@router.post("/{sales_channel_id}")
def update_sales_channel(
    sales_channel_id: str,
    payload: SalesChannelUpdate,
    service: SalesChannelService = Depends(get_sales_channel_service),
):
    """
    Update a sales channel

    Only the fields present in the body are changed.
    """
    sales_channel = service.update(sales_channel_id, payload)
    return {"sales_channel": sales_channel.to_dict()}


@router.delete("/{sales_channel_id}")
def delete_sales_channel(
    sales_channel_id: str,
    service: SalesChannelService = Depends(get_sales_channel_service),
):
    """
    Delete (soft) a sales channel

    Deleting an unknown channel also succeeds.
    """
    service.delete(sales_channel_id)
    return {"id": sales_channel_id, "object": "sales-channel", "deleted": True}


@router.post("/{sales_channel_id}/products/batch")
def add_products_to_sales_channel(
    sales_channel_id: str,
    payload: SalesChannelProductsBatch,
    service: SalesChannelService = Depends(get_sales_channel_service),
):
    """
    Assign a batch of products to a sales channel

    Body:
        products_ids: [{"id": "prod_..."}, ...]

    Returns the sales channel after the assignment.
    """
    sales_channel = service.add_products(
        sales_channel_id,
        [product.id for product in payload.products_ids],
    )
    return {"sales_channel": sales_channel.to_dict()}
