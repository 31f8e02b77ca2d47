"""
Closed status domains and their transition tables.

Every status column in the model is a closed set. Values arriving from the
boundary go through ``StatusEnum.parse``, which rejects anything outside the
set instead of coercing it. Which moves are legal is data, not code: each
status domain declares a ``TransitionTable`` mapping a state to the states it
may move to. A state with no outgoing moves is terminal.

Example:
    class LightStatus(StatusEnum):
        RED = "red"
        GREEN = "green"

    LIGHT_TRANSITIONS = TransitionTable(
        "Light",
        {LightStatus.RED: {LightStatus.GREEN}, LightStatus.GREEN: {LightStatus.RED}},
    )
    LIGHT_TRANSITIONS.ensure(light_id, LightStatus.RED, LightStatus.GREEN)
"""

from collections.abc import Iterable, Mapping
from enum import StrEnum
from typing import Generic, Self, TypeVar

from .exceptions import InvalidStatusTransitionError, ValidationError


class StatusEnum(StrEnum):
    """Base class for closed status domains."""

    @classmethod
    def parse(cls, value: object, field: str = "status") -> Self:
        """
        Parse a boundary value into a member of this status domain.

        Raises:
            ValidationError: If the value is not a member of the set
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            allowed = ", ".join(member.value for member in cls)
            raise ValidationError(
                f"Invalid {cls.__name__} '{value}', expected one of: {allowed}",
                field=field,
                value=value,
            ) from None


S = TypeVar("S", bound=StatusEnum)


class TransitionTable(Generic[S]):
    """Allow/deny table from (current state, requested state)."""

    def __init__(self, entity_type: str, transitions: Mapping[S, Iterable[S]]) -> None:
        self.entity_type = entity_type
        self._transitions: dict[S, frozenset[S]] = {
            state: frozenset(targets) for state, targets in transitions.items()
        }

    def allows(self, current: S, requested: S) -> bool:
        return requested in self._transitions.get(current, frozenset())

    def targets(self, current: S) -> frozenset[S]:
        """States reachable from ``current`` in one step."""
        return self._transitions.get(current, frozenset())

    def is_terminal(self, state: S) -> bool:
        return not self._transitions.get(state)

    def ensure(self, entity_id: object, current: S, requested: S) -> None:
        """
        Check that ``current -> requested`` is a legal move.

        Raises:
            InvalidStatusTransitionError: If the move is not in the table
        """
        if not self.allows(current, requested):
            raise InvalidStatusTransitionError(self.entity_type, entity_id, current, requested)
