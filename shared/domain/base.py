"""
Domain Building Blocks

- Entity: identified by its ``id``, mutable
- ValueObject: frozen, equal when all fields are equal
- Aggregate: an entity that records events while it changes
- DomainEvent: a fact published once the change is committed
"""

from abc import ABC
from dataclasses import dataclass, field
from datetime import datetime
from typing import List
from uuid import UUID, uuid4


@dataclass(kw_only=True, eq=False)
class Entity(ABC):
    """Identity-based equality: same class and same id means same entity"""

    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=datetime.now)

    def __eq__(self, other):
        return type(other) is type(self) and other.id == self.id

    def __hash__(self):
        return hash((type(self).__name__, self.id))


@dataclass(frozen=True)
class ValueObject(ABC):
    pass


@dataclass(kw_only=True, eq=False)
class Aggregate(Entity):
    """
    Consistency boundary of the domain

    State changes append events to a private buffer. The unit of work
    drains the buffer and publishes it after the transaction commits.
    """

    _events: List['DomainEvent'] = field(default_factory=list, init=False, repr=False)

    def add_event(self, event: 'DomainEvent'):
        self._events.append(event)

    def clear_events(self):
        self._events.clear()

    @property
    def events(self) -> List['DomainEvent']:
        """Snapshot of the pending events"""
        return list(self._events)


@dataclass(kw_only=True)
class DomainEvent:
    event_id: UUID = field(default_factory=uuid4)
    occurred_at: datetime = field(default_factory=datetime.now)
    aggregate_id: UUID | None = None

    @property
    def name(self) -> str:
        return type(self).__name__

    def to_dict(self) -> dict:
        """Envelope fields, enough to log or forward the event"""
        return {
            'event_id': str(self.event_id),
            'event_type': self.name,
            'occurred_at': self.occurred_at.isoformat(),
            'aggregate_id': None if self.aggregate_id is None else str(self.aggregate_id),
        }
