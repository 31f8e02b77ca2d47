"""Course entity: a reusable grouping of lessons."""

from dataclasses import dataclass, field
from datetime import datetime

from academy.domain.catalog.entities.soft_delete import SoftDeletable
from academy.domain.common.clock import utc_now
from academy.domain.common.entity import Entity
from academy.domain.common.exceptions import ValidationError
from academy.domain.common.value_objects.ids import CourseId


@dataclass
class Course(SoftDeletable, Entity[CourseId]):
    """
    Course entity.

    Business Rules:
    - Name cannot be empty
    - Shared between modules through the module_courses link table
    - Soft deletion keeps the row (and its lessons) referenceable
    """

    id: CourseId
    name: str
    description: str | None = None
    is_deleted: bool = False
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime = field(default_factory=utc_now)

    def __post_init__(self) -> None:
        """Validate invariants."""
        if not self.name or not self.name.strip():
            raise ValidationError("Course name cannot be empty", field="name", value=self.name)

    def update(self, name: str | None = None, description: str | None = None) -> None:
        """
        Update course attributes. ``None`` leaves a field untouched.

        Raises:
            ValidationError: If the new name is empty
        """
        if name is not None:
            if not name.strip():
                raise ValidationError("Course name cannot be empty", field="name", value=name)
            self.name = name.strip()
        if description is not None:
            self.description = description
        self.updated_at = utc_now()

    @classmethod
    def create(cls, name: str, description: str | None = None) -> "Course":
        """Factory for creating a new course."""
        now = utc_now()
        return cls(
            id=CourseId.generate(),
            name=name.strip() if name else name,
            description=description,
            created_at=now,
            updated_at=now,
        )

    @classmethod
    def create_with_id(
        cls,
        id: CourseId,
        name: str,
        description: str | None,
        is_deleted: bool,
        created_at: datetime,
        updated_at: datetime,
    ) -> "Course":
        """Factory for reconstituting a course from persistence."""
        return cls(
            id=id,
            name=name,
            description=description,
            is_deleted=is_deleted,
            created_at=created_at,
            updated_at=updated_at,
        )
