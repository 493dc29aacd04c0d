"""
Sales Channel Repository - Data Access Layer for Sales Channels

Narrow accessor over the sales_channel and product_sales_channel tables.
Works inside the caller's session; committing is the service's job.
"""
from typing import Iterable, Optional

from sqlalchemy import insert, select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.orm import Session, selectinload

from sales_channels.core.errors import InvalidDataError
from sales_channels.domain.common import FindConfig
from sales_channels.models import SalesChannel, generate_entity_id, product_sales_channel, utcnow


class SalesChannelRepository:
    """
    Repository for SalesChannel data access

    Exposes only what the service layer needs:
    - find_by_id / create / save / soft_remove for the channel itself
    - add_associations for the channel-product join table
    """

    RELATIONS = {
        "products": SalesChannel.products,
    }

    def __init__(self, session: Session):
        self.session = session

    def find_by_id(self, sales_channel_id: str, config: Optional[FindConfig] = None) -> Optional[SalesChannel]:
        """
        Find sales channel by ID

        Args:
            sales_channel_id: Sales channel ID
            config: Relations to load and whether soft-deleted rows match

        Returns:
            SalesChannel or None if not found
        """
        config = config or FindConfig()

        query = select(SalesChannel).where(SalesChannel.id == sales_channel_id)

        if not config.with_deleted:
            query = query.where(SalesChannel.deleted_at.is_(None))

        for relation in config.relations:
            if relation not in self.RELATIONS:
                raise InvalidDataError(f"Unknown sales channel relation: {relation}")
            query = query.options(selectinload(self.RELATIONS[relation]))

        return self.session.execute(query).scalar_one_or_none()

    def create(self, **fields) -> SalesChannel:
        """Build an unsaved SalesChannel with a generated id"""
        return SalesChannel(id=generate_entity_id("sc"), **fields)

    def save(self, sales_channel: SalesChannel) -> SalesChannel:
        """Persist a new or modified SalesChannel"""
        self.session.add(sales_channel)
        self.session.flush()
        return sales_channel

    def soft_remove(self, sales_channel: SalesChannel) -> SalesChannel:
        """Mark the channel as deleted; the row is kept"""
        sales_channel.deleted_at = utcnow()
        self.session.flush()
        return sales_channel

    def add_associations(self, sales_channel_id: str, product_ids: Iterable[str]) -> None:
        """
        Attach products to a sales channel

        Pairs that already exist are skipped (insert-ignore), so repeated calls
        with overlapping ids are safe. Unknown channel or product ids make the
        database raise a foreign key violation, which is not caught here.

        Args:
            sales_channel_id: Sales channel ID
            product_ids: Product IDs to attach (may be empty or contain duplicates)
        """
        # dict.fromkeys keeps first-seen order while dropping duplicates
        unique_ids = list(dict.fromkeys(product_ids))
        if not unique_ids:
            return

        rows = [
            {"sales_channel_id": sales_channel_id, "product_id": product_id}
            for product_id in unique_ids
        ]

        self.session.execute(self._insert_ignore().values(rows))

    def _insert_ignore(self):
        """INSERT statement on the join table that skips existing pairs"""
        dialect = self.session.get_bind().dialect.name

        if dialect == "postgresql":
            return pg_insert(product_sales_channel).on_conflict_do_nothing(
                index_elements=["sales_channel_id", "product_id"]
            )

        if dialect == "sqlite":
            return sqlite_insert(product_sales_channel).on_conflict_do_nothing(
                index_elements=["sales_channel_id", "product_id"]
            )

        if dialect in ("mysql", "mariadb"):
            return insert(product_sales_channel).prefix_with("IGNORE")

        raise NotImplementedError(f"Insert-ignore is not supported for dialect {dialect}")
