"""Protocol for Discussion repository."""

from typing import Protocol

from academy.domain.common.value_objects.ids import DiscussionId, LessonId
from academy.domain.community.entities.discussion import Discussion


class DiscussionRepositoryProtocol(Protocol):
    """Protocol for Discussion repository operations."""

    def find_by_id(self, discussion_id: DiscussionId) -> Discussion | None:
        ...

    def find_by_lesson(self, lesson_id: LessonId) -> list[Discussion]:
        """
        Get every node of a lesson as a flat list.

        Returns:
            Discussions ordered by (created_at, id)
        """
        ...

    def save(self, discussion: Discussion) -> Discussion:
        ...
