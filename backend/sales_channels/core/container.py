"""
Service container

Wires the services to a session factory. The FastAPI app keeps one container
on app.state; tests build their own against a throwaway database.
"""
import logging

from sqlalchemy.orm import sessionmaker

from sales_channels.services.event_bus_service import EventBusService
from sales_channels.services.product_service import ProductService
from sales_channels.services.sales_channel_service import SalesChannelService
from sales_channels.services.store_service import StoreService

logger = logging.getLogger(__name__)


class ServiceContainer:
    def __init__(self, session_factory: sessionmaker):
        self.session_factory = session_factory

        self.event_bus_service = EventBusService(session_factory)
        self.product_service = ProductService(session_factory)
        self.store_service = StoreService(session_factory)
        self.sales_channel_service = SalesChannelService(
            session_factory,
            event_bus_service=self.event_bus_service,
            store_service=self.store_service,
            product_service=self.product_service,
        )

    def bootstrap(self, sales_channels_enabled: bool = True) -> None:
        """
        Make sure the store exists and, with sales channels enabled, that it
        has a default sales channel
        """
        store = self.store_service.create()
        if sales_channels_enabled:
            default_sales_channel = self.sales_channel_service.create_default()
            logger.info(f"Store {store.id} default sales channel: {default_sales_channel.id}")
