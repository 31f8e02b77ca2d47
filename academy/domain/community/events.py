"""Community domain events."""

from dataclasses import dataclass

from academy.domain.common.domain_event import DomainEvent
from academy.domain.common.value_objects.ids import BlogPostId, UserId


@dataclass(frozen=True)
class BlogPostStatusChanged(DomainEvent):
    post_id: BlogPostId
    student_id: UserId
    previous: str
    current: str
