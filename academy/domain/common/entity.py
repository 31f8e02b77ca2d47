"""
Base class for Entities.

Entities have an identity that runs through time. Two entities of the same
class are the same entity when their ids match.
"""

from abc import ABC
from dataclasses import dataclass
from typing import Generic, Self, TypeVar

from .exceptions import ValidationError
from .value_object import ValueObject


@dataclass(frozen=True)
class EntityId(ValueObject):
    """
    Base class for strongly-typed entity identifiers.

    Ids are assigned by the database; ``0`` marks an entity that has not
    been persisted yet. Negative ids are rejected at the boundary.

    Example:
        @dataclass(frozen=True)
        class ProgramId(EntityId):
            pass

        ProgramId(10) == CourseId(10)  # False, different id types
    """

    value: int

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise ValidationError(
                f"{self.__class__.__name__} must be an integer", field="id", value=self.value
            )
        if self.value < 0:
            raise ValidationError(
                f"{self.__class__.__name__} must be non-negative", field="id", value=self.value
            )

    def __int__(self) -> int:
        return self.value

    def __str__(self) -> str:
        return str(self.value)

    @classmethod
    def generate(cls) -> Self:
        """Placeholder id for a new entity. The database assigns the real one."""
        return cls(0)

    def is_persisted(self) -> bool:
        return self.value != 0

    def to_primitive(self) -> int:
        return self.value


IdType = TypeVar("IdType", bound=EntityId)


class Entity(ABC, Generic[IdType]):
    """
    Base class for Entities in the domain model.

    Subclasses must have an 'id' attribute of type IdType.
    """

    id: IdType

    def is_new(self) -> bool:
        """Check if this entity has not been persisted yet."""
        return not self.id.is_persisted()
