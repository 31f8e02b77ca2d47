"""Protocol for Lesson repository."""

from typing import Protocol

from academy.domain.catalog.entities.lesson import Lesson
from academy.domain.common.value_objects.ids import CourseId, LessonId


class LessonRepositoryProtocol(Protocol):
    """Protocol for Lesson repository operations."""

    def find_by_id(self, lesson_id: LessonId, for_update: bool = False) -> Lesson | None:
        """
        Find a lesson by ID.

        Args:
            lesson_id: The lesson ID
            for_update: Lock the row for the rest of the transaction

        Returns:
            Lesson entity if found, None otherwise
        """
        ...

    def find_by_course(self, course_id: CourseId, include_deleted: bool = False) -> list[Lesson]:
        """
        Get the lessons of a course.

        Returns:
            List of lesson entities ordered by position
        """
        ...

    def find_by_position(self, course_id: CourseId, position: int) -> Lesson | None:
        """Find the lesson holding a position, including soft-deleted lessons."""
        ...

    def max_position(self, course_id: CourseId) -> int:
        """Highest position used in the course, 0 when it has no lessons."""
        ...

    def save(self, lesson: Lesson) -> Lesson:
        """
        Save a lesson entity (create or update).

        Raises:
            LessonPositionTakenError: If the store rejects the position as taken
        """
        ...
