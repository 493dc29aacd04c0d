"""
Shared column helpers for ORM models
"""
import secrets
from datetime import datetime, timezone


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def generate_entity_id(prefix: str) -> str:
    """
    Generate a prefixed entity id, e.g. sc_9F2C4A...

    Ids are generated in Python (not by the database) so an entity has its id
    before it is flushed.
    """
    return f"{prefix}_{secrets.token_hex(13).upper()}"
