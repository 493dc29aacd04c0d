"""
Sales Channel Domain Model

Represents a sales channel entity and the inputs accepted by the service layer.
Partial updates rely on pydantic's fields-set tracking: a field left out of the
payload is skipped, a nullable field explicitly set to null is cleared.
Required columns (name, is_disabled) refuse an explicit null.
"""
from pydantic import BaseModel, Field, ConfigDict, field_validator
from typing import List, Optional
from datetime import datetime


class ProductSummary(BaseModel):
    """Product attached to a sales channel"""
    id: str
    title: str

    model_config = ConfigDict(from_attributes=True)


class SalesChannel(BaseModel):
    """
    Sales channel domain model - a distribution context products are sold through

    Fields:
        id: Channel ID (sc_ prefixed)
        name: Channel name
        description: Free text description (optional)
        is_disabled: Whether the channel is disabled
        created_at: When the channel was created
        updated_at: When the channel was last updated
        deleted_at: Soft-delete timestamp (None while the channel is live)
        products: Attached products, only present when the "products" relation is requested
    """

    id: str = Field(..., description="Sales channel ID")
    name: str = Field(..., description="Sales channel name")
    description: Optional[str] = Field(None, description="Sales channel description")
    is_disabled: bool = Field(False, description="Whether the channel is disabled")

    created_at: datetime = Field(..., description="Creation timestamp")
    updated_at: datetime = Field(..., description="Last update timestamp")
    deleted_at: Optional[datetime] = Field(None, description="Soft-delete timestamp")

    products: Optional[List[ProductSummary]] = Field(None, description="Attached products")

    model_config = ConfigDict(from_attributes=True)

    @classmethod
    def from_entity(cls, entity, include_products: bool = False) -> "SalesChannel":
        """
        Map an ORM SalesChannel to the domain model

        Relations are only read when requested so lazy loads never fire implicitly.
        """
        products = None
        if include_products:
            products = [
                ProductSummary.model_validate(product)
                for product in entity.products
                if product.deleted_at is None
            ]

        return cls(
            id=entity.id,
            name=entity.name,
            description=entity.description,
            is_disabled=entity.is_disabled,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
            deleted_at=entity.deleted_at,
            products=products,
        )

    def to_dict(self) -> dict:
        """Convert to a JSON-ready dict, leaving out relations that were not loaded"""
        data = self.model_dump(mode="json")
        if self.products is None:
            data.pop("products")
        return data


class SalesChannelCreate(BaseModel):
    """Schema for creating a new sales channel"""
    name: str = Field(..., min_length=1)
    description: Optional[str] = None
    is_disabled: bool = False


class SalesChannelUpdate(BaseModel):
    """Schema for updating an existing sales channel (only fields sent are applied)"""
    name: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    is_disabled: Optional[bool] = None

    @field_validator("name", "is_disabled")
    @classmethod
    def reject_null(cls, value, info):
        # Only runs for values that were sent; omitted fields keep their default
        if value is None:
            raise ValueError(f"{info.field_name} cannot be null")
        return value


class ProductBatchItem(BaseModel):
    """Reference to a product in a batch request"""
    id: str = Field(..., min_length=1)


class SalesChannelProductsBatch(BaseModel):
    """Request body for POST /admin/sales-channels/{id}/products/batch"""
    products_ids: List[ProductBatchItem]
