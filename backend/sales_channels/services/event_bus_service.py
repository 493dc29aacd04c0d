"""
Event Bus Service
Fire-and-forget domain events with transactional staging

Events emitted inside a transaction are written to the staged_job table in
that same transaction, so they become visible only if the transaction commits.
dispatch_staged_jobs() delivers committed events to subscribers afterwards
(at-least-once: a job whose subscriber fails stays staged for the next pass).
"""
import logging
from collections import defaultdict
from typing import Any, Callable, Dict, List

from sqlalchemy import select
from sqlalchemy.orm import sessionmaker

from sales_channels.models import StagedJob, generate_entity_id
from sales_channels.services.base import TransactionBaseService

logger = logging.getLogger(__name__)

Subscriber = Callable[[Dict[str, Any], str], None]


class EventBusService(TransactionBaseService):
    """
    In-process event bus

    Handles:
    - Subscriber registration
    - Staging events in the caller's transaction
    - Post-commit delivery of staged events
    """

    def __init__(self, session_factory: sessionmaker):
        super().__init__(session_factory)
        self._subscribers: Dict[str, List[Subscriber]] = defaultdict(list)

    def subscribe(self, event_name: str, handler: Subscriber) -> None:
        """
        Register a handler for an event

        Handlers are called with (data, event_name).
        """
        self._subscribers[event_name].append(handler)

    def emit(self, event_name: str, data: Dict[str, Any]) -> None:
        """
        Emit an event

        Bound to a transaction: the event is staged and delivered after commit.
        Unbound: the event is delivered to subscribers right away.
        """
        if self._transaction_session is None:
            self._deliver(event_name, data)
            return

        job = StagedJob(id=generate_entity_id("job"), event_name=event_name, data=data)
        self._transaction_session.add(job)
        self._transaction_session.flush()

    def dispatch_staged_jobs(self, limit: int = 1000) -> int:
        """
        Deliver committed staged events in creation order

        Args:
            limit: Maximum number of jobs handled in this pass

        Returns:
            Number of jobs delivered (and removed)
        """
        def work(session):
            jobs = session.execute(
                select(StagedJob).order_by(StagedJob.created_at, StagedJob.id).limit(limit)
            ).scalars().all()

            delivered = 0
            for job in jobs:
                try:
                    self._deliver(job.event_name, job.data)
                except Exception as e:
                    logger.error(f"Delivery of {job.event_name} ({job.id}) failed, keeping job: {e}")
                    continue

                session.delete(job)
                delivered += 1

            return delivered

        delivered = self.atomic_phase(work)
        if delivered:
            logger.info(f"Dispatched {delivered} staged events")
        return delivered

    def _deliver(self, event_name: str, data: Dict[str, Any]) -> None:
        for handler in self._subscribers.get(event_name, []):
            handler(data, event_name)
