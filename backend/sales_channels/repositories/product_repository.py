"""
Product Repository - Data Access Layer for Products

Only existence lookups; the product catalog is owned by another module.
"""
from typing import List, Sequence

from sqlalchemy import select
from sqlalchemy.orm import Session

from sales_channels.models import Product, generate_entity_id


class ProductRepository:
    """Repository for Product data access"""

    def __init__(self, session: Session):
        self.session = session

    def find_by_ids(self, product_ids: Sequence[str]) -> List[Product]:
        """
        Find non-deleted products by ID

        Args:
            product_ids: Product IDs to look up

        Returns:
            Products that exist (missing ids are simply absent)
        """
        if not product_ids:
            return []

        query = (
            select(Product)
            .where(Product.id.in_(list(product_ids)))
            .where(Product.deleted_at.is_(None))
        )
        return list(self.session.execute(query).scalars())

    def create(self, title: str) -> Product:
        product = Product(id=generate_entity_id("prod"), title=title)
        self.session.add(product)
        self.session.flush()
        return product

    def find_deleted_ids(self, product_ids: Sequence[str]) -> List[str]:
        """
        Find which of the given product ids belong to soft-deleted products

        Returns:
            Soft-deleted ids (ids with no row at all are not included)
        """
        if not product_ids:
            return []

        query = (
            select(Product.id)
            .where(Product.id.in_(list(product_ids)))
            .where(Product.deleted_at.is_not(None))
        )
        return list(self.session.execute(query).scalars())
