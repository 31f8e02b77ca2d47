"""
Base class for Aggregate Roots.

Aggregate Roots guard the invariants of their cluster and record domain
events for later dispatch by the Unit of Work.

Example:
    @dataclass
    class Enrollment(AggregateRoot[EnrollmentId]):
        id: EnrollmentId
        status: EnrollmentStatus

        def cancel(self) -> None:
            previous = self.status
            self.status = EnrollmentStatus.CANCELLED
            self._record_event(EnrollmentStatusChanged(self.id, previous, self.status))
"""

from dataclasses import dataclass, field
from typing import Generic

from .domain_event import DomainEvent
from .entity import Entity, IdType


@dataclass
class AggregateRoot(Entity[IdType], Generic[IdType]):
    """
    Base class for Aggregate Roots in the domain model.

    Events are collected after the aggregate is persisted and dispatched
    once the surrounding transaction commits.
    """

    _events: list[DomainEvent] = field(
        default_factory=list, repr=False, compare=False, kw_only=True
    )

    def _record_event(self, event: DomainEvent) -> None:
        self._events.append(event)

    def collect_events(self) -> list[DomainEvent]:
        """Collect and clear all recorded domain events."""
        events = self._events.copy()
        self._events.clear()
        return events

    @property
    def pending_events(self) -> list[DomainEvent]:
        """Return pending events without clearing them."""
        return self._events.copy()
