"""
Sales Channel Service
Transactional orchestration of sales channel operations

Handles:
- CRUD on sales channels (soft delete)
- Default sales channel bootstrap for the store
- Batch attachment of products, with a readable error when product ids are unknown
- Domain events (sales_channel.created / .updated / .deleted)
"""
import json
import logging
from typing import Any, Dict, List, Optional, Sequence, Tuple

from sqlalchemy.orm import sessionmaker

from sales_channels.core.errors import NotFoundError
from sales_channels.core.exception_formatter import PostgresError, format_exception, get_error_code
from sales_channels.domain import (
    FindConfig,
    ListConfig,
    SalesChannel,
    SalesChannelCreate,
    SalesChannelUpdate,
    StoreUpdate,
)
from sales_channels.repositories import ProductRepository, SalesChannelRepository
from sales_channels.services.base import TransactionBaseService
from sales_channels.services.event_bus_service import EventBusService
from sales_channels.services.product_service import ProductService
from sales_channels.services.store_service import StoreService

logger = logging.getLogger(__name__)


class SalesChannelService(TransactionBaseService):
    """
    Service for sales channels

    Every public method is one unit of work. Events are staged in the same
    transaction as the row writes, so they are dropped if the write rolls back.
    """

    class Events:
        UPDATED = "sales_channel.updated"
        CREATED = "sales_channel.created"
        DELETED = "sales_channel.deleted"

    DEFAULT_CHANNEL = {
        "name": "Default Sales Channel",
        "description": "Created by default",
        "is_disabled": False,
    }

    def __init__(
        self,
        session_factory: sessionmaker,
        event_bus_service: EventBusService,
        store_service: StoreService,
        product_service: ProductService,
    ):
        super().__init__(session_factory)
        self._event_bus_service = event_bus_service
        self._store_service = store_service
        self._product_service = product_service

    def _retrieve_entity(self, session, sales_channel_id: str, config: Optional[FindConfig] = None):
        sales_channel = SalesChannelRepository(session).find_by_id(sales_channel_id, config)
        if sales_channel is None:
            raise NotFoundError(f"Sales channel with id {sales_channel_id} was not found")
        return sales_channel

    def retrieve(self, sales_channel_id: str, config: Optional[FindConfig] = None) -> SalesChannel:
        """
        Retrieve a sales channel by id

        Args:
            sales_channel_id: Sales channel ID
            config: Relations to load; with_deleted to match soft-deleted channels

        Returns:
            SalesChannel

        Raises:
            NotFoundError: No (live) channel with this id
        """
        config = config or FindConfig()

        def work(session):
            sales_channel = self._retrieve_entity(session, sales_channel_id, config)
            return SalesChannel.from_entity(sales_channel, include_products="products" in config.relations)

        return self.atomic_phase(work)

    def list_and_count(
        self,
        selector: Optional[Dict[str, Any]] = None,
        config: Optional[ListConfig] = None,
    ) -> Tuple[List[SalesChannel], int]:
        raise NotImplementedError("Method not implemented.")

    def create(self, data: SalesChannelCreate) -> SalesChannel:
        """
        Create a sales channel and emit sales_channel.created

        Returns:
            The created channel
        """
        def work(session):
            repo = SalesChannelRepository(session)
            sales_channel = repo.create(
                name=data.name,
                description=data.description,
                is_disabled=data.is_disabled,
            )

            self._event_bus_service.with_transaction(session).emit(
                self.Events.CREATED, {"id": sales_channel.id}
            )

            result = SalesChannel.from_entity(repo.save(sales_channel))
            logger.info(f"Created sales channel {result.id} ({result.name})")
            return result

        return self.atomic_phase(work)

    def update(self, sales_channel_id: str, data: SalesChannelUpdate) -> SalesChannel:
        """
        Update a sales channel and emit sales_channel.updated

        Fields left out of `data` keep their value; fields sent as null are cleared.

        Raises:
            NotFoundError: No (live) channel with this id
        """
        def work(session):
            repo = SalesChannelRepository(session)
            sales_channel = self._retrieve_entity(session, sales_channel_id)

            patch = data.model_dump(include=data.model_fields_set)
            if "name" in patch:
                sales_channel.name = patch["name"]
            if "description" in patch:
                sales_channel.description = patch["description"]
            if "is_disabled" in patch:
                sales_channel.is_disabled = patch["is_disabled"]

            result = repo.save(sales_channel)

            self._event_bus_service.with_transaction(session).emit(
                self.Events.UPDATED, {"id": result.id}
            )

            return SalesChannel.from_entity(result)

        return self.atomic_phase(work)

    def delete(self, sales_channel_id: str) -> None:
        """
        Soft-delete a sales channel and emit sales_channel.deleted

        Deleting a channel that does not exist is a no-op. The store's
        default_sales_channel_id is left untouched.
        """
        def work(session):
            try:
                sales_channel = self._retrieve_entity(session, sales_channel_id)
            except NotFoundError:
                return

            SalesChannelRepository(session).soft_remove(sales_channel)

            self._event_bus_service.with_transaction(session).emit(
                self.Events.DELETED, {"id": sales_channel_id}
            )
            logger.info(f"Deleted sales channel {sales_channel_id}")

        return self.atomic_phase(work)

    def create_default(self) -> SalesChannel:
        """
        Create the store's default sales channel if it does not exist yet

        Read-check-then-create without locking: two concurrent first calls can
        both create a channel (the last store update wins).

        Returns:
            The default sales channel
        """
        def work(session):
            store_service = self._store_service.with_transaction(session)
            store = store_service.retrieve_entity(session)

            if store.default_sales_channel_id:
                # The pointer survives a soft delete of the channel, so match deleted rows too
                return self.with_transaction(session).retrieve(
                    store.default_sales_channel_id, FindConfig(with_deleted=True)
                )

            default_sales_channel = self.with_transaction(session).create(
                SalesChannelCreate(**self.DEFAULT_CHANNEL)
            )

            store_service.update(StoreUpdate(default_sales_channel_id=default_sales_channel.id))
            logger.info(f"Default sales channel {default_sales_channel.id} assigned to store {store.id}")

            return default_sales_channel

        return self.atomic_phase(work)

    def add_products(self, sales_channel_id: str, product_ids: Sequence[str]) -> SalesChannel:
        """
        Attach a batch of products to a sales channel

        Products already attached are skipped. Soft-deleted products count as
        missing and are rejected before the insert. When the insert hits a
        foreign key violation the transaction is rolled back and the error
        names the product ids that do not exist.

        Args:
            sales_channel_id: Sales channel ID
            product_ids: IDs of the products to attach

        Returns:
            The sales channel, reloaded after the insert

        Raises:
            NotFoundError: Unknown channel, or some product ids do not exist
        """
        product_ids = list(product_ids)

        def work(session):
            # The foreign keys only see the rows, not deleted_at
            deleted_ids = set(ProductRepository(session).find_deleted_ids(product_ids))
            if deleted_ids:
                raise self._missing_products_error(
                    [product_id for product_id in product_ids if product_id in deleted_ids]
                )

            SalesChannelRepository(session).add_associations(sales_channel_id, product_ids)
            return self.with_transaction(session).retrieve(sales_channel_id)

        def handle_error(error: Exception):
            if get_error_code(error) == PostgresError.FOREIGN_KEY_ERROR:
                existing_ids = {product.id for product in self._product_service.list(product_ids)}
                missing_ids = [product_id for product_id in product_ids if product_id not in existing_ids]

                if missing_ids:
                    logger.warning(
                        f"Sales channel {sales_channel_id}: {len(set(missing_ids))} unknown product ids in batch"
                    )
                    raise self._missing_products_error(missing_ids) from error

            formatted = format_exception(error)
            if formatted is error:
                raise error
            raise formatted from error

        return self.atomic_phase(work, handle_error)

    def _missing_products_error(self, product_ids: Sequence[str]) -> NotFoundError:
        missing_ids = list(dict.fromkeys(product_ids))
        return NotFoundError(
            f"The following product ids do not exist: {json.dumps(', '.join(missing_ids))}"
        )
