"""
Base Domain Classes

Building blocks shared by the domain apps:
- Entity: Objects with identity assigned by storage
- ValueObject: Immutable objects compared by value
- Aggregate: Consistency boundary that records domain events
- DomainEvent: Something that happened and may interest other contexts
"""

from abc import ABC
from dataclasses import dataclass, field
from datetime import datetime
from typing import List
from uuid import UUID, uuid4

from django.utils import timezone


@dataclass
class Entity(ABC):
    """
    Base class for all entities

    The id stays None until the repository persists the entity.
    Two persisted entities are equal if their IDs are equal.
    """
    id: int | None = field(default=None, kw_only=True)

    def __eq__(self, other):
        if not isinstance(other, self.__class__):
            return False
        if self.id is None or other.id is None:
            return self is other
        return self.id == other.id

    def __hash__(self):
        return hash((self.__class__.__name__, self.id)) if self.id is not None else id(self)


@dataclass(frozen=True)
class ValueObject(ABC):
    """
    Base class for value objects

    Value objects are immutable and have no identity.
    Two value objects are equal if all their attributes are equal.
    """
    pass


@dataclass(eq=False)
class Aggregate(Entity):
    """
    Base class for aggregate roots

    Aggregates collect domain events that are published once the
    repository write they belong to has succeeded.
    """
    _events: List['DomainEvent'] = field(default_factory=list, repr=False, init=False, compare=False)

    def add_event(self, event: 'DomainEvent'):
        """Add a domain event to be published"""
        self._events.append(event)

    def clear_events(self):
        """Clear all collected events (called after publishing)"""
        self._events.clear()

    def pull_events(self) -> List['DomainEvent']:
        """Return collected events and forget them"""
        events = self._events.copy()
        self._events.clear()
        return events

    @property
    def events(self) -> List['DomainEvent']:
        """Get copy of collected events"""
        return self._events.copy()


@dataclass(kw_only=True)
class DomainEvent:
    """
    Base class for domain events

    Domain events represent something that happened in the domain.
    They are routed to handlers by the message bus.
    """
    event_id: UUID = field(default_factory=uuid4)
    occurred_at: datetime = field(default_factory=timezone.now)
    aggregate_id: int | None = None
