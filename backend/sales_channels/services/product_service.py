"""
Product Service
Product lookups used by the sales channel module
"""
from typing import List, Sequence

from sales_channels.domain import ProductSummary
from sales_channels.repositories import ProductRepository
from sales_channels.services.base import TransactionBaseService


class ProductService(TransactionBaseService):
    """Read access to products (plus creation for bootstrap and fixtures)"""

    def list(self, product_ids: Sequence[str]) -> List[ProductSummary]:
        """
        List the non-deleted products among `product_ids`

        Args:
            product_ids: Product IDs to look up

        Returns:
            Existing products; ids that do not resolve are left out
        """
        def work(session):
            products = ProductRepository(session).find_by_ids(product_ids)
            return [ProductSummary.model_validate(product) for product in products]

        return self.atomic_phase(work)

    def create(self, title: str) -> ProductSummary:
        def work(session):
            product = ProductRepository(session).create(title)
            return ProductSummary.model_validate(product)

        return self.atomic_phase(work)
