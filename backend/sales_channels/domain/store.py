"""
Store Domain Model
"""
from pydantic import BaseModel, ConfigDict, field_validator
from typing import Optional
from datetime import datetime


class Store(BaseModel):
    """The merchant's store and its default sales channel pointer"""
    id: str
    name: str
    default_sales_channel_id: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class StoreUpdate(BaseModel):
    """Schema for updating the store (only fields sent are applied)"""
    name: Optional[str] = None
    default_sales_channel_id: Optional[str] = None

    @field_validator("name")
    @classmethod
    def reject_null_name(cls, value):
        if value is None:
            raise ValueError("name cannot be null")
        return value
