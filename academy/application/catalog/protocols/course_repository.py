"""Protocol for Course repository."""

from typing import Protocol

from academy.domain.catalog.entities.course import Course
from academy.domain.common.value_objects.ids import CourseId


class CourseRepositoryProtocol(Protocol):
    """Protocol for Course repository operations."""

    def find_by_id(self, course_id: CourseId) -> Course | None:
        """Find a course by ID, soft-deleted or not."""
        ...

    def find_all(self, include_deleted: bool = False) -> list[Course]:
        """Get courses ordered by name."""
        ...

    def save(self, course: Course) -> Course:
        ...
