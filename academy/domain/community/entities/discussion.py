"""
Discussion entity.

Lesson discussions form a forest: a root node has no parent, a reply points
at an existing node of the same lesson.
"""

from dataclasses import dataclass, field
from datetime import datetime

from academy.domain.common.clock import utc_now
from academy.domain.common.entity import Entity
from academy.domain.common.exceptions import ValidationError
from academy.domain.common.value_objects.ids import DiscussionId, LessonId
from academy.domain.community.exceptions import CrossLessonReplyError, DiscussionCycleError


def _clean_body(body: str) -> str:
    if body is None or not body.strip():
        raise ValidationError("Discussion body cannot be empty", field="body", value=body)
    return body.strip()


@dataclass
class Discussion(Entity[DiscussionId]):
    """
    Discussion node.

    Business Rules:
    - Body cannot be empty
    - The parent, when present, belongs to the same lesson
    - A node is never its own parent
    """

    id: DiscussionId
    lesson_id: LessonId
    body: str
    parent_id: DiscussionId | None = None
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime = field(default_factory=utc_now)

    def __post_init__(self) -> None:
        """Validate invariants."""
        self.body = _clean_body(self.body)
        if (
            self.parent_id is not None
            and self.id.is_persisted()
            and self.parent_id.value == self.id.value
        ):
            raise DiscussionCycleError(self.id.value)

    def is_root(self) -> bool:
        return self.parent_id is None

    @classmethod
    def create(cls, lesson_id: LessonId, body: str) -> "Discussion":
        """Factory for a new root node."""
        now = utc_now()
        return cls(
            id=DiscussionId.generate(),
            lesson_id=lesson_id,
            body=body,
            parent_id=None,
            created_at=now,
            updated_at=now,
        )

    @classmethod
    def create_reply(cls, parent: "Discussion", lesson_id: LessonId, body: str) -> "Discussion":
        """
        Factory for a reply under an existing node.

        Args:
            parent: The persisted node being replied to
            lesson_id: Lesson the reply is meant for

        Raises:
            CrossLessonReplyError: If the parent belongs to another lesson
            ValidationError: If the body is empty
        """
        if parent.lesson_id != lesson_id:
            raise CrossLessonReplyError(parent.id.value, parent.lesson_id.value, lesson_id.value)
        now = utc_now()
        return cls(
            id=DiscussionId.generate(),
            lesson_id=lesson_id,
            body=body,
            parent_id=parent.id,
            created_at=now,
            updated_at=now,
        )

    @classmethod
    def create_with_id(
        cls,
        id: DiscussionId,
        lesson_id: LessonId,
        body: str,
        parent_id: DiscussionId | None,
        created_at: datetime,
        updated_at: datetime,
    ) -> "Discussion":
        """Factory for reconstituting a discussion from persistence."""
        return cls(
            id=id,
            lesson_id=lesson_id,
            body=body,
            parent_id=parent_id,
            created_at=created_at,
            updated_at=updated_at,
        )
