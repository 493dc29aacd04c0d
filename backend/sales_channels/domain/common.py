"""
Query options shared by services
"""
from pydantic import BaseModel, Field
from typing import List


class FindConfig(BaseModel):
    """
    Options for single-entity lookups

    Fields:
        relations: Relations to load with the entity (e.g. ["products"])
        with_deleted: Also match soft-deleted rows
    """
    relations: List[str] = Field(default_factory=list)
    with_deleted: bool = False


class ListConfig(FindConfig):
    """Options for list lookups"""
    skip: int = Field(0, ge=0)
    take: int = Field(10, ge=1)
