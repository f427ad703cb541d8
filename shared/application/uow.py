"""
Unit of Work

One rental operation touches several tables: item status, the booking
row and its lines, ledger entries and the party balance. The unit of
work runs them in a single ``transaction.atomic()`` block and holds the
resulting domain events back until that block has committed.
"""

from typing import List
import logging

from django.db import DatabaseError, transaction

from shared.domain.base import DomainEvent
from shared.domain.exceptions import DomainError, OperationFailed

logger = logging.getLogger(__name__)


class DjangoUnitOfWork:
    """
    Transaction plus event buffer for one operation

        with DjangoUnitOfWork('return_booking') as uow:
            booking = repo.get_by_id(booking_id, lock=True)
            booking.mark_returned()
            repo.save(booking)
            uow.collect_events(booking)

    On a domain error the block is rolled back and the error propagates
    untouched. Any other exception is rolled back and re-raised as
    OperationFailed, with the original chained as its cause.
    """

    def __init__(self, operation: str = 'operation'):
        self.operation = operation
        self._pending: List[DomainEvent] = []
        self._atomic = None

    def __enter__(self):
        self._atomic = transaction.atomic()
        self._atomic.__enter__()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_type is None:
            self.commit()
        else:
            self.rollback()

        try:
            self._atomic.__exit__(exc_type, exc_val, exc_tb)
        except DatabaseError as exc:
            logger.error(f"{self.operation}: commit failed: {exc}", exc_info=True)
            raise OperationFailed(f"{self.operation} could not be committed", operation=self.operation) from exc

        if exc_type is None or not issubclass(exc_type, Exception) or issubclass(exc_type, DomainError):
            return False

        logger.error(f"{self.operation}: rolled back after {exc_type.__name__}: {exc_val}", exc_info=exc_val)
        raise OperationFailed(
            f"{self.operation} failed and was rolled back",
            operation=self.operation,
        ) from exc_val

    def commit(self):
        """Hand the buffered events to on_commit; nothing is published yet"""
        events, self._pending = self._pending, []
        logger.debug(f"{self.operation}: {len(events)} events wait for commit")
        if events:
            transaction.on_commit(lambda: self._publish(events))

    def rollback(self):
        if self._pending:
            logger.info(f"{self.operation}: dropping {len(self._pending)} events")
        self._pending = []

    def collect_events(self, aggregate):
        """Move the aggregate's pending events into this unit of work"""
        events = aggregate.events
        aggregate.clear_events()
        self._pending.extend(events)

    def record(self, event: DomainEvent):
        """Buffer an event no aggregate owns (payments, removed entries)"""
        self._pending.append(event)

    def _publish(self, events: List[DomainEvent]):
        from shared.application.message_bus import message_bus

        try:
            message_bus.publish_events(events)
        except Exception:
            # The data is committed; a failed listener must not surface to the caller
            logger.exception(f"{self.operation}: publishing {len(events)} events failed")
