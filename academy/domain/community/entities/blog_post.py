"""
BlogPost aggregate root.

Student-authored posts go through moderation before they become public.
"""

from dataclasses import dataclass, field
from datetime import datetime

from academy.domain.common.aggregate_root import AggregateRoot
from academy.domain.common.clock import utc_now
from academy.domain.common.exceptions import InvalidStatusTransitionError, ValidationError
from academy.domain.common.status import StatusEnum, TransitionTable
from academy.domain.common.value_objects.ids import BlogPostId, UserId
from academy.domain.community.events import BlogPostStatusChanged
from academy.domain.community.exceptions import PostNotEditableError

MAX_TITLE_LENGTH = 255


class BlogPostStatus(StatusEnum):
    CREATED = "created"
    IN_MODERATION = "in_moderation"
    PUBLISHED = "published"
    ARCHIVED = "archived"


class ModerationDecision(StatusEnum):
    PUBLISH = "publish"
    ARCHIVE = "archive"


BLOG_POST_TRANSITIONS: TransitionTable[BlogPostStatus] = TransitionTable(
    "BlogPost",
    {
        BlogPostStatus.CREATED: {BlogPostStatus.IN_MODERATION},
        BlogPostStatus.IN_MODERATION: {BlogPostStatus.PUBLISHED, BlogPostStatus.ARCHIVED},
        BlogPostStatus.PUBLISHED: {BlogPostStatus.ARCHIVED},
        BlogPostStatus.ARCHIVED: set(),
    },
)


def _clean_title(title: str) -> str:
    if title is None or not title.strip():
        raise ValidationError("Blog post title cannot be empty", field="title", value=title)
    title = title.strip()
    if len(title) > MAX_TITLE_LENGTH:
        raise ValidationError(
            f"Blog post title cannot exceed {MAX_TITLE_LENGTH} characters", field="title"
        )
    return title


def _clean_body(body: str) -> str:
    if body is None or not body.strip():
        raise ValidationError("Blog post body cannot be empty", field="body", value=body)
    return body


@dataclass
class BlogPost(AggregateRoot[BlogPostId]):
    """
    BlogPost aggregate root.

    State machine::

        created -> in_moderation -> published -> archived
                   in_moderation -> archived

    Business Rules:
    - Title and body cannot be empty
    - Only a created post can be edited
    - Once submitted a post never returns to created
    - Only published posts appear in public listings
    """

    id: BlogPostId
    student_id: UserId
    title: str
    body: str
    status: BlogPostStatus = BlogPostStatus.CREATED
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime = field(default_factory=utc_now)

    def __post_init__(self) -> None:
        """Validate invariants."""
        self.title = _clean_title(self.title)
        self.body = _clean_body(self.body)
        self.status = BlogPostStatus.parse(self.status)

    def is_published(self) -> bool:
        return self.status is BlogPostStatus.PUBLISHED

    def edit(self, title: str | None = None, body: str | None = None) -> None:
        """
        Edit a draft. ``None`` leaves a field untouched.

        Raises:
            PostNotEditableError: If the post was already submitted
            ValidationError: If a new title or body is empty
        """
        if self.status is not BlogPostStatus.CREATED:
            raise PostNotEditableError(self.id.value, self.status)
        if title is not None:
            self.title = _clean_title(title)
        if body is not None:
            self.body = _clean_body(body)
        self.updated_at = utc_now()

    def submit(self) -> None:
        """Send a created post to moderation."""
        self._change_status(BlogPostStatus.IN_MODERATION)

    def publish(self) -> None:
        self._change_status(BlogPostStatus.PUBLISHED)

    def archive(self) -> None:
        """Archive a post in moderation (rejection) or a published one (withdrawal)."""
        self._change_status(BlogPostStatus.ARCHIVED)

    def moderate(self, decision: ModerationDecision | str) -> None:
        """
        Apply a moderator decision to a post in moderation.

        Raises:
            ValidationError: If the decision is not publish or archive
            InvalidStatusTransitionError: If the post is not in moderation
        """
        decision = ModerationDecision.parse(decision, field="decision")
        target = (
            BlogPostStatus.PUBLISHED
            if decision is ModerationDecision.PUBLISH
            else BlogPostStatus.ARCHIVED
        )
        # published -> archived is a withdrawal, not a moderation outcome
        if self.status is not BlogPostStatus.IN_MODERATION:
            raise InvalidStatusTransitionError("BlogPost", self.id.value, self.status, target)
        self._change_status(target)

    def _change_status(self, requested: BlogPostStatus) -> None:
        BLOG_POST_TRANSITIONS.ensure(self.id.value, self.status, requested)
        previous = self.status
        self.status = requested
        self.updated_at = utc_now()
        self._record_event(
            BlogPostStatusChanged(
                post_id=self.id,
                student_id=self.student_id,
                previous=previous,
                current=requested,
            )
        )

    @classmethod
    def create(cls, student_id: UserId, title: str, body: str) -> "BlogPost":
        """Factory for a new draft post."""
        now = utc_now()
        return cls(
            id=BlogPostId.generate(),
            student_id=student_id,
            title=title,
            body=body,
            status=BlogPostStatus.CREATED,
            created_at=now,
            updated_at=now,
        )

    @classmethod
    def create_with_id(
        cls,
        id: BlogPostId,
        student_id: UserId,
        title: str,
        body: str,
        status: BlogPostStatus,
        created_at: datetime,
        updated_at: datetime,
    ) -> "BlogPost":
        """Factory for reconstituting a post from persistence."""
        return cls(
            id=id,
            student_id=student_id,
            title=title,
            body=body,
            status=status,
            created_at=created_at,
            updated_at=updated_at,
        )
