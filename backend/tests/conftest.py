"""
Pytest fixtures and configuration for Sales Channels Backend tests

This file provides shared fixtures that can be used across all test modules.
Every test gets a fresh in-memory SQLite database with foreign keys enforced.
"""
import os

# Settings are read at import time; keep the app's module-level engine off any real database
os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from sqlalchemy import func, select
from sqlalchemy.pool import StaticPool

from sales_channels.core.container import ServiceContainer
from sales_channels.core.database import Base, create_db_engine, create_session_factory
from sales_channels.domain import SalesChannelCreate
from sales_channels.models import Product, StagedJob, product_sales_channel, utcnow


@pytest.fixture(scope="function")
def engine():
    """
    Provides an in-memory SQLite engine with the schema created

    Scope: function (new database per test)
    StaticPool keeps a single connection so every session sees the same database,
    including sessions opened from TestClient worker threads.
    """
    engine = create_db_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture(scope="function")
def session_factory(engine):
    return create_session_factory(engine)


@pytest.fixture(scope="function")
def db_session(session_factory):
    """
    Provides a session for direct assertions against the database

    Automatically closes the session after the test
    """
    session = session_factory()
    yield session
    session.close()


@pytest.fixture(scope="function")
def container(session_factory):
    """
    Provides a service container with the store already created
    """
    container = ServiceContainer(session_factory)
    container.store_service.create()
    return container


@pytest.fixture
def sales_channel_service(container):
    return container.sales_channel_service


@pytest.fixture
def event_bus(container):
    return container.event_bus_service


@pytest.fixture
def product_ids(container):
    """
    Provides the ids of three existing products
    """
    return [
        container.product_service.create(title).id
        for title in ("Coffee Beans 1kg", "Espresso Cups", "Milk Frother")
    ]


@pytest.fixture
def soft_delete_product(session_factory):
    """
    Returns a callable that marks a product as deleted (the row is kept)
    """
    def _soft_delete_product(product_id):
        with session_factory() as session:
            with session.begin():
                session.get(Product, product_id).deleted_at = utcnow()
    return _soft_delete_product


@pytest.fixture
def sales_channel(sales_channel_service):
    """
    Provides a freshly created sales channel
    """
    return sales_channel_service.create(
        SalesChannelCreate(name="Web Store", description="Main storefront")
    )


@pytest.fixture
def staged_events(session_factory):
    """
    Returns a callable listing staged (not yet dispatched) events as (event_name, data)
    """
    def _staged_events():
        with session_factory() as session:
            jobs = session.execute(select(StagedJob).order_by(StagedJob.created_at)).scalars()
            return [(job.event_name, job.data) for job in jobs]
    return _staged_events


@pytest.fixture
def associations(session_factory):
    """
    Returns a callable listing (sales_channel_id, product_id) rows of the join table
    """
    def _associations():
        with session_factory() as session:
            rows = session.execute(select(product_sales_channel)).all()
            return [(row.sales_channel_id, row.product_id) for row in rows]
    return _associations


@pytest.fixture
def count_rows(session_factory):
    """
    Returns a callable counting rows of a model or table
    """
    def _count_rows(target):
        with session_factory() as session:
            return session.execute(select(func.count()).select_from(target)).scalar_one()
    return _count_rows


@pytest.fixture
def api_client(container):
    """
    Provides a FastAPI TestClient wired to the test container

    The lifespan (bootstrap + event poller) is not started.
    """
    from fastapi.testclient import TestClient
    from sales_channels.main import app

    previous = app.state.container
    app.state.container = container
    yield TestClient(app)
    app.state.container = previous
