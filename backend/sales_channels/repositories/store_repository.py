"""
Store Repository - Data Access Layer for the Store
"""
from typing import Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from sales_channels.models import Store, generate_entity_id


class StoreRepository:
    """Repository for the single Store row"""

    def __init__(self, session: Session):
        self.session = session

    def find_one(self) -> Optional[Store]:
        query = select(Store).order_by(Store.created_at).limit(1)
        return self.session.execute(query).scalar_one_or_none()

    def create(self, name: str) -> Store:
        store = Store(id=generate_entity_id("store"), name=name)
        self.session.add(store)
        self.session.flush()
        return store

    def save(self, store: Store) -> Store:
        self.session.add(store)
        self.session.flush()
        return store
