"""
Base class for Value Objects.

Value Objects are immutable and compared by their attributes. Subclasses are
frozen dataclasses that validate themselves in ``__post_init__``.

Example:
    @dataclass(frozen=True)
    class Slug(ValueObject):
        value: str

        def __post_init__(self) -> None:
            if not self.value:
                raise ValidationError("Slug cannot be empty", field="slug")
"""


class ValueObject:
    """Base class for Value Objects in the domain model."""

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, self.__class__):
            return False
        return self.__dict__ == other.__dict__

    def __hash__(self) -> int:
        return hash(tuple(sorted(self.__dict__.items())))

    def __repr__(self) -> str:
        attrs = ", ".join(f"{k}={v!r}" for k, v in self.__dict__.items())
        return f"{self.__class__.__name__}({attrs})"

    def to_primitive(self) -> object:
        """Single-attribute value objects collapse to that attribute."""
        values = list(self.__dict__.values())
        if len(values) == 1:
            return values[0]
        return dict(self.__dict__)
