"""Community domain exceptions."""

from academy.domain.common.exceptions import ConflictError, NotFoundError, ValidationError


class DiscussionNotFoundError(NotFoundError):
    """Raised when a discussion node cannot be found."""

    def __init__(self, discussion_id: int) -> None:
        super().__init__("Discussion", discussion_id)


class BlogPostNotFoundError(NotFoundError):
    """Raised when a blog post cannot be found."""

    def __init__(self, post_id: int) -> None:
        super().__init__("BlogPost", post_id)


class CrossLessonReplyError(ValidationError):
    """Raised when a reply's parent belongs to a different lesson."""

    def __init__(self, parent_id: int, parent_lesson_id: int, lesson_id: int) -> None:
        super().__init__(
            f"Discussion {parent_id} belongs to lesson {parent_lesson_id}, not lesson {lesson_id}",
            field="parent_id",
            value=parent_id,
        )
        self.details.update(
            {
                "entity_type": "Discussion",
                "parent_lesson_id": parent_lesson_id,
                "lesson_id": lesson_id,
            }
        )
        self.parent_id = parent_id
        self.parent_lesson_id = parent_lesson_id
        self.lesson_id = lesson_id


class DiscussionCycleError(ValidationError):
    """Raised when a discussion node is its own ancestor."""

    def __init__(self, discussion_id: int) -> None:
        super().__init__(
            f"Discussion {discussion_id} is its own ancestor",
            field="parent_id",
            value=discussion_id,
        )
        self.details["entity_type"] = "Discussion"
        self.discussion_id = discussion_id


class PostNotEditableError(ConflictError):
    """Raised when editing a post that has left the created state."""

    def __init__(self, post_id: int, status: str) -> None:
        super().__init__(
            f"Blog post {post_id} is {status} and can no longer be edited",
            {"entity_type": "BlogPost", "entity_id": post_id, "field": "status"},
        )
        self.post_id = post_id
        self.status = status
