"""
Tests for TransactionBaseService.atomic_phase
"""
import pytest

from sales_channels.models import Product
from sales_channels.services.base import TransactionBaseService


def _add_product(product_id):
    def work(session):
        session.add(Product(id=product_id, title="Grinder"))
        session.flush()
        return product_id
    return work


class TestAtomicPhase:
    """Test commit / rollback behaviour of the unit of work"""

    def test_commits_on_success(self, session_factory, count_rows):
        service = TransactionBaseService(session_factory)

        result = service.atomic_phase(_add_product("prod_1"))

        assert result == "prod_1"
        assert count_rows(Product) == 1

    def test_rolls_back_and_reraises_on_failure(self, session_factory, count_rows):
        service = TransactionBaseService(session_factory)

        def work(session):
            _add_product("prod_1")(session)
            raise RuntimeError("boom")

        with pytest.raises(RuntimeError, match="boom"):
            service.atomic_phase(work)

        assert count_rows(Product) == 0

    def test_error_handler_runs_after_rollback(self, session_factory, count_rows):
        """Test the handler sees the error once the writes are already gone"""
        service = TransactionBaseService(session_factory)
        seen = {}

        def work(session):
            _add_product("prod_1")(session)
            raise RuntimeError("boom")

        def handler(error):
            seen["error"] = error
            seen["rows"] = count_rows(Product)
            return "recovered"

        result = service.atomic_phase(work, handler)

        assert result == "recovered"
        assert str(seen["error"]) == "boom"
        assert seen["rows"] == 0

    def test_error_handler_can_translate(self, session_factory):
        service = TransactionBaseService(session_factory)

        def work(session):
            raise KeyError("prod_1")

        def handler(error):
            raise LookupError(f"translated {error}")

        with pytest.raises(LookupError, match="translated"):
            service.atomic_phase(work, handler)


class TestWithTransaction:
    """Test services bound to an outer session"""

    def test_bound_service_joins_outer_transaction(self, session_factory, count_rows):
        """Test nested work is rolled back with the outer transaction"""
        service = TransactionBaseService(session_factory)

        session = session_factory()
        with pytest.raises(RuntimeError):
            with session.begin():
                service.with_transaction(session).atomic_phase(_add_product("prod_1"))
                raise RuntimeError("outer failure")
        session.close()

        assert count_rows(Product) == 0

    def test_bound_service_does_not_commit(self, session_factory, count_rows):
        service = TransactionBaseService(session_factory)

        session = session_factory()
        service.with_transaction(session).atomic_phase(_add_product("prod_1"))
        # Closing without commit discards the flushed row
        session.close()

        assert count_rows(Product) == 0

    def test_with_transaction_returns_copy(self, session_factory):
        service = TransactionBaseService(session_factory)
        session = session_factory()

        bound = service.with_transaction(session)

        assert bound is not service
        assert bound._transaction_session is session
        assert service._transaction_session is None
        assert service.with_transaction(None) is service
        session.close()
