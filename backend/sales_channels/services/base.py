"""
Transaction Base Service

Every service operation runs inside a unit of work:
- a service bound to a session (with_transaction) runs the work in that
  session and leaves commit/rollback to the session's owner
- an unbound service opens its own session and transaction, commits when the
  work returns and rolls back when it raises

An optional error handler runs after the rollback. It either raises a
translated error or returns a value that becomes the result.
"""
import copy
import logging
from typing import Callable, Optional, TypeVar

from sqlalchemy.orm import Session, sessionmaker

logger = logging.getLogger(__name__)

T = TypeVar("T")


class TransactionBaseService:
    """Base class for services that need a transaction boundary"""

    def __init__(self, session_factory: sessionmaker):
        self._session_factory = session_factory
        self._transaction_session: Optional[Session] = None

    def with_transaction(self, session: Optional[Session]):
        """
        Return a copy of this service that runs inside `session`

        Args:
            session: Session owning the current transaction (None returns self)
        """
        if session is None:
            return self

        bound = copy.copy(self)
        bound._transaction_session = session
        return bound

    def atomic_phase(
        self,
        work: Callable[[Session], T],
        error_handler: Optional[Callable[[Exception], T]] = None,
    ) -> T:
        """
        Run `work` in a unit of work

        Args:
            work: Callable receiving the transaction-scoped session
            error_handler: Called with the error after rollback; may raise or return

        Returns:
            Result of work (or of error_handler when it recovers)
        """
        if self._transaction_session is not None:
            try:
                return work(self._transaction_session)
            except Exception as e:
                if error_handler is None:
                    raise
                return error_handler(e)

        session = self._session_factory()
        try:
            with session.begin():
                result = work(session)
        except Exception as e:
            logger.debug(f"{type(self).__name__}: transaction rolled back ({type(e).__name__})")
            if error_handler is None:
                raise
            return error_handler(e)
        finally:
            session.close()

        return result
