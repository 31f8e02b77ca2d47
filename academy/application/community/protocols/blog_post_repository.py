"""Protocol for BlogPost repository."""

from typing import Protocol

from academy.application.common.pagination import Pagination
from academy.domain.common.value_objects.ids import BlogPostId, UserId
from academy.domain.community.entities.blog_post import BlogPost


class BlogPostRepositoryProtocol(Protocol):
    """Protocol for BlogPost repository operations."""

    def find_by_id(self, post_id: BlogPostId, for_update: bool = False) -> BlogPost | None:
        ...

    def find_published(self, pagination: Pagination) -> tuple[list[BlogPost], int]:
        """
        Get a page of published posts, newest first.

        Returns:
            Tuple of (posts on the page, total number of published posts)
        """
        ...

    def find_by_student(
        self, student_id: UserId, include_unpublished: bool = False
    ) -> list[BlogPost]:
        """Get the posts of a student, newest first."""
        ...

    def save(self, post: BlogPost) -> BlogPost:
        ...
