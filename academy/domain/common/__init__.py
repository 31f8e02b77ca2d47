"""
Domain common module.

Contains base classes for domain modeling:
- ValueObject: Immutable objects defined by their attributes
- Entity: Objects with identity and lifecycle
- AggregateRoot: Consistency boundaries with domain events
- DomainEvent: Notifications of significant domain occurrences
- StatusEnum / TransitionTable: Closed status sets and their legal moves
"""

from .aggregate_root import AggregateRoot
from .domain_event import DomainEvent
from .entity import Entity, EntityId
from .exceptions import (
    ConcurrencyError,
    ConflictError,
    DomainError,
    DuplicateError,
    InvalidStatusTransitionError,
    NotFoundError,
    ValidationError,
)
from .status import StatusEnum, TransitionTable
from .value_object import ValueObject

__all__ = [
    "AggregateRoot",
    "ConcurrencyError",
    "ConflictError",
    "DomainError",
    "DomainEvent",
    "DuplicateError",
    "Entity",
    "EntityId",
    "InvalidStatusTransitionError",
    "NotFoundError",
    "StatusEnum",
    "TransitionTable",
    "ValidationError",
    "ValueObject",
]
