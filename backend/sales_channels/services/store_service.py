"""
Store Service
Bootstrap and default sales channel pointer of the merchant's store
"""
import logging

from sales_channels.core.errors import NotFoundError
from sales_channels.domain import Store, StoreUpdate
from sales_channels.repositories import StoreRepository
from sales_channels.services.base import TransactionBaseService

logger = logging.getLogger(__name__)

DEFAULT_STORE_NAME = "Default Store"


class StoreService(TransactionBaseService):
    """Service for the single store row"""

    def create(self) -> Store:
        """
        Create the store if it does not exist yet

        Returns:
            The existing or newly created store
        """
        def work(session):
            repo = StoreRepository(session)
            store = repo.find_one()
            if store is None:
                store = repo.create(DEFAULT_STORE_NAME)
                logger.info(f"Created store {store.id}")
            return Store.model_validate(store)

        return self.atomic_phase(work)

    def retrieve_entity(self, session):
        """Load the ORM store in `session` (NotFoundError when no store exists)"""
        store = StoreRepository(session).find_one()
        if store is None:
            raise NotFoundError("Store does not exist")
        return store

    def retrieve(self) -> Store:
        def work(session):
            return Store.model_validate(self.retrieve_entity(session))

        return self.atomic_phase(work)

    def update(self, data: StoreUpdate) -> Store:
        """
        Update the store

        Only fields present in `data` are applied; explicit nulls are applied too.
        """
        def work(session):
            repo = StoreRepository(session)
            store = self.retrieve_entity(session)

            patch = data.model_dump(include=data.model_fields_set)
            if "name" in patch:
                store.name = patch["name"]
            if "default_sales_channel_id" in patch:
                store.default_sales_channel_id = patch["default_sales_channel_id"]

            return Store.model_validate(repo.save(store))

        return self.atomic_phase(work)
