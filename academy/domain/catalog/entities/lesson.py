"""Lesson entity."""

from dataclasses import dataclass, field
from datetime import datetime

from academy.domain.catalog.entities.soft_delete import SoftDeletable
from academy.domain.common.clock import utc_now
from academy.domain.common.entity import Entity
from academy.domain.common.exceptions import ValidationError
from academy.domain.common.value_objects.ids import CourseId, LessonId


def validate_position(position: int) -> None:
    """
    Check that a lesson position is a positive integer.

    Raises:
        ValidationError: If the position is not a positive integer
    """
    if isinstance(position, bool) or not isinstance(position, int):
        raise ValidationError(
            "Lesson position must be an integer", field="position", value=position
        )
    if position <= 0:
        raise ValidationError(
            "Lesson position must be positive", field="position", value=position
        )


@dataclass
class Lesson(SoftDeletable, Entity[LessonId]):
    """
    Lesson entity.

    Business Rules:
    - Name cannot be empty
    - Position is a positive integer, unique within the owning course
      (uniqueness is checked by the use case and backed by a unique constraint)
    - Positions may have gaps
    - Soft-deleted lessons keep their position
    """

    id: LessonId
    course_id: CourseId
    name: str
    position: int
    content: str | None = None
    video_url: str | None = None
    is_deleted: bool = False
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime = field(default_factory=utc_now)

    def __post_init__(self) -> None:
        """Validate invariants."""
        if not self.name or not self.name.strip():
            raise ValidationError("Lesson name cannot be empty", field="name", value=self.name)
        validate_position(self.position)

    def move_to(self, position: int) -> None:
        """Place the lesson at a new position within its course."""
        validate_position(position)
        self.position = position
        self.updated_at = utc_now()

    def update(
        self,
        name: str | None = None,
        content: str | None = None,
        video_url: str | None = None,
    ) -> None:
        """
        Update lesson attributes. ``None`` leaves a field untouched.

        Raises:
            ValidationError: If the new name is empty
        """
        if name is not None:
            if not name.strip():
                raise ValidationError("Lesson name cannot be empty", field="name", value=name)
            self.name = name.strip()
        if content is not None:
            self.content = content
        if video_url is not None:
            self.video_url = video_url
        self.updated_at = utc_now()

    @classmethod
    def create(
        cls,
        course_id: CourseId,
        name: str,
        position: int,
        content: str | None = None,
        video_url: str | None = None,
    ) -> "Lesson":
        """Factory for creating a new lesson."""
        now = utc_now()
        return cls(
            id=LessonId.generate(),
            course_id=course_id,
            name=name.strip() if name else name,
            position=position,
            content=content,
            video_url=video_url,
            created_at=now,
            updated_at=now,
        )

    @classmethod
    def create_with_id(
        cls,
        id: LessonId,
        course_id: CourseId,
        name: str,
        position: int,
        content: str | None,
        video_url: str | None,
        is_deleted: bool,
        created_at: datetime,
        updated_at: datetime,
    ) -> "Lesson":
        """Factory for reconstituting a lesson from persistence."""
        return cls(
            id=id,
            course_id=course_id,
            name=name,
            position=position,
            content=content,
            video_url=video_url,
            is_deleted=is_deleted,
            created_at=created_at,
            updated_at=updated_at,
        )
