"""Module entity: a reusable grouping of courses."""

from dataclasses import dataclass, field
from datetime import datetime

from academy.domain.catalog.entities.soft_delete import SoftDeletable
from academy.domain.common.clock import utc_now
from academy.domain.common.entity import Entity
from academy.domain.common.exceptions import ValidationError
from academy.domain.common.value_objects.ids import ModuleId


@dataclass
class Module(SoftDeletable, Entity[ModuleId]):
    """
    Catalog module.

    Modules are shared between programs through the program_modules link
    table and are soft-deleted rather than removed.
    """

    id: ModuleId
    name: str
    description: str | None = None
    is_deleted: bool = False
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime = field(default_factory=utc_now)

    def __post_init__(self) -> None:
        if not self.name or not self.name.strip():
            raise ValidationError("Module name cannot be empty", field="name", value=self.name)

    def update(self, name: str | None = None, description: str | None = None) -> None:
        if name is not None:
            if not name.strip():
                raise ValidationError("Module name cannot be empty", field="name", value=name)
            self.name = name.strip()
        if description is not None:
            self.description = description
        self.updated_at = utc_now()

    @classmethod
    def create(cls, name: str, description: str | None = None) -> "Module":
        now = utc_now()
        return cls(
            id=ModuleId.generate(),
            name=name.strip() if name else name,
            description=description,
            created_at=now,
            updated_at=now,
        )

    @classmethod
    def create_with_id(
        cls,
        id: ModuleId,
        name: str,
        description: str | None,
        is_deleted: bool,
        created_at: datetime,
        updated_at: datetime,
    ) -> "Module":
        return cls(
            id=id,
            name=name,
            description=description,
            is_deleted=is_deleted,
            created_at=created_at,
            updated_at=updated_at,
        )
