"""
PostgreSQL database connection

This module centralizes database access for the service layer:
- SQLAlchemy engine and session factory (ORM models, transactions)
- Connectivity check used by the health endpoint

psycopg2 is the PostgreSQL driver; SQLite is supported for local runs and tests.
"""
import logging
import time

from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker

from .config import settings

logger = logging.getLogger(__name__)


# ============================================================================
# SQLAlchemy Configuration
# ============================================================================

def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    """SQLite ignores FOREIGN KEY constraints unless asked per connection"""
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_db_engine(database_url: str, **kwargs) -> Engine:
    """
    Create a SQLAlchemy engine for the given URL

    Server databases get a connection pool with pre-ping; SQLite connections
    get foreign key enforcement so association inserts fail like they do
    on PostgreSQL.

    Args:
        database_url: SQLAlchemy database URL
        **kwargs: Extra keyword arguments for create_engine

    Returns:
        Engine
    """
    if database_url.startswith("sqlite"):
        engine = create_engine(database_url, **kwargs)
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
        return engine

    kwargs.setdefault("pool_pre_ping", True)  # Check connection before use
    kwargs.setdefault("pool_size", settings.DATABASE_POOL_SIZE)
    kwargs.setdefault("max_overflow", settings.DATABASE_MAX_OVERFLOW)
    return create_engine(database_url, **kwargs)


def create_session_factory(engine: Engine) -> sessionmaker:
    """Session factory bound to engine; objects stay readable after commit"""
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


# SQLAlchemy Engine
engine = create_db_engine(settings.DATABASE_URL)

# Session Factory
SessionLocal = create_session_factory(engine)

# Base for models
Base = declarative_base()


# ============================================================================
# Connectivity check
# ============================================================================

def check_database_connection(target: Engine = None) -> dict:
    """
    Run SELECT 1 against the database

    Returns:
        Dict with status, latency_ms and error (None when connected)
    """
    target = target or engine
    start = time.time()

    try:
        with target.connect() as conn:
            conn.execute(text("SELECT 1"))
        latency_ms = round((time.time() - start) * 1000, 2)
        return {"status": "connected", "latency_ms": latency_ms, "error": None}

    except Exception as e:
        logger.warning(f"Database connectivity check failed: {e}")
        return {"status": "disconnected", "latency_ms": None, "error": str(e)}
