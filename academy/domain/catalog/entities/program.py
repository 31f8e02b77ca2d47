"""Program entity: the root sellable unit of the catalog."""

from dataclasses import dataclass, field
from datetime import datetime

from academy.domain.common.clock import utc_now
from academy.domain.common.entity import Entity
from academy.domain.common.exceptions import ValidationError
from academy.domain.common.value_objects.ids import ProgramId


def _validate_name(name: str) -> None:
    if not name or not name.strip():
        raise ValidationError("Program name cannot be empty", field="name", value=name)


def _validate_price(price: int) -> None:
    if isinstance(price, bool) or not isinstance(price, int):
        raise ValidationError("Program price must be an integer", field="price", value=price)
    if price < 0:
        raise ValidationError("Program price cannot be negative", field="price", value=price)


def _validate_program_type(program_type: str) -> None:
    if not program_type or not program_type.strip():
        raise ValidationError(
            "Program type cannot be empty", field="program_type", value=program_type
        )


@dataclass
class Program(Entity[ProgramId]):
    """
    Program entity.

    A top-level curriculum composed of modules and sold as a whole.

    Business Rules:
    - Name and program type cannot be empty
    - Price is an integer amount in minor units and never negative
    """

    id: ProgramId
    name: str
    price: int
    program_type: str
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime = field(default_factory=utc_now)

    def __post_init__(self) -> None:
        """Validate invariants."""
        _validate_name(self.name)
        _validate_price(self.price)
        _validate_program_type(self.program_type)

    def update(
        self,
        name: str | None = None,
        price: int | None = None,
        program_type: str | None = None,
    ) -> None:
        """
        Update program attributes. ``None`` leaves a field untouched.

        Raises:
            ValidationError: If a new value is invalid
        """
        if name is not None:
            _validate_name(name)
            self.name = name.strip()
        if price is not None:
            _validate_price(price)
            self.price = price
        if program_type is not None:
            _validate_program_type(program_type)
            self.program_type = program_type.strip()
        self.updated_at = utc_now()

    @classmethod
    def create(cls, name: str, price: int, program_type: str) -> "Program":
        """Factory for creating a new program."""
        _validate_name(name)
        _validate_program_type(program_type)
        now = utc_now()
        return cls(
            id=ProgramId.generate(),
            name=name.strip(),
            price=price,
            program_type=program_type.strip(),
            created_at=now,
            updated_at=now,
        )

    @classmethod
    def create_with_id(
        cls,
        id: ProgramId,
        name: str,
        price: int,
        program_type: str,
        created_at: datetime,
        updated_at: datetime,
    ) -> "Program":
        """Factory for reconstituting a program from persistence."""
        return cls(
            id=id,
            name=name,
            price=price,
            program_type=program_type,
            created_at=created_at,
            updated_at=updated_at,
        )
