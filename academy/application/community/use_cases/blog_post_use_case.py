"""Use case for student blog posts and their moderation."""

import structlog

from academy.application.common.pagination import PaginatedResult, Pagination
from academy.application.common.unit_of_work import UnitOfWork
from academy.application.community.protocols.blog_post_repository import (
    BlogPostRepositoryProtocol,
)
from academy.application.identity.protocols.user_repository import UserRepositoryProtocol
from academy.domain.common.value_objects.ids import BlogPostId, UserId
from academy.domain.community.entities.blog_post import BlogPost, ModerationDecision
from academy.domain.community.exceptions import BlogPostNotFoundError
from academy.domain.identity.exceptions import UserNotFoundError

logger = structlog.get_logger(__name__)


class BlogPostUseCase:
    """Use case for the blog post lifecycle."""

    def __init__(
        self,
        post_repository: BlogPostRepositoryProtocol,
        user_repository: UserRepositoryProtocol,
        uow: UnitOfWork,
    ) -> None:
        self.post_repository = post_repository
        self.user_repository = user_repository
        self.uow = uow

    def create_post(self, student_id: int, title: str, body: str) -> BlogPost:
        """
        Create a draft post.

        Raises:
            UserNotFoundError: If the author doesn't exist
            ValidationError: If the title or body is empty
        """
        student_id_vo = UserId(student_id)
        with self.uow:
            if not self.user_repository.find_by_id(student_id_vo):
                raise UserNotFoundError(student_id)
            post = self.post_repository.save(BlogPost.create(student_id_vo, title, body))
            self.uow.commit()

        logger.info("blog_post_created", post_id=post.id.value, student_id=student_id)
        return post

    def update_post(
        self, post_id: int, title: str | None = None, body: str | None = None
    ) -> BlogPost:
        """
        Edit a draft.

        Raises:
            BlogPostNotFoundError: If the post doesn't exist
            PostNotEditableError: If the post has been submitted
        """
        with self.uow:
            post = self._get(post_id, for_update=True)
            post.edit(title=title, body=body)
            post = self.post_repository.save(post)
            self.uow.commit()

        logger.info("blog_post_updated", post_id=post_id)
        return post

    def submit_for_moderation(self, post_id: int) -> BlogPost:
        with self.uow:
            post = self._get(post_id, for_update=True)
            post.submit()
            saved = self.post_repository.save(post)
            self.uow.track(post)
            self.uow.commit()

        logger.info("blog_post_submitted", post_id=post_id)
        return saved

    def moderate_post(self, post_id: int, decision: ModerationDecision | str) -> BlogPost:
        """
        Publish or archive a post that is in moderation.

        Raises:
            ValidationError: If the decision is not publish or archive
            BlogPostNotFoundError: If the post doesn't exist
            InvalidStatusTransitionError: If the post is not in moderation
        """
        decision = ModerationDecision.parse(decision, field="decision")
        with self.uow:
            post = self._get(post_id, for_update=True)
            post.moderate(decision)
            saved = self.post_repository.save(post)
            self.uow.track(post)
            self.uow.commit()

        logger.info("blog_post_moderated", post_id=post_id, decision=decision.value)
        return saved

    def archive_post(self, post_id: int) -> BlogPost:
        with self.uow:
            post = self._get(post_id, for_update=True)
            post.archive()
            saved = self.post_repository.save(post)
            self.uow.track(post)
            self.uow.commit()

        logger.info("blog_post_archived", post_id=post_id)
        return saved

    def get_post(self, post_id: int) -> BlogPost:
        return self._get(post_id)

    def list_published_posts(
        self, pagination: Pagination | None = None
    ) -> PaginatedResult[BlogPost]:
        """Public listing: published posts only, newest first."""
        pagination = pagination or Pagination()
        items, total = self.post_repository.find_published(pagination)
        return PaginatedResult(items=items, total=total, pagination=pagination)

    def list_posts_by_student(
        self, student_id: int, include_unpublished: bool = False
    ) -> list[BlogPost]:
        student_id_vo = UserId(student_id)
        if not self.user_repository.find_by_id(student_id_vo):
            raise UserNotFoundError(student_id)
        return self.post_repository.find_by_student(
            student_id_vo, include_unpublished=include_unpublished
        )

    def _get(self, post_id: int, for_update: bool = False) -> BlogPost:
        post = self.post_repository.find_by_id(BlogPostId(post_id), for_update=for_update)
        if not post:
            raise BlogPostNotFoundError(post_id)
        return post
