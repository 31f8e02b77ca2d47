"""Use case for lesson discussions."""

import structlog

from academy.application.catalog.protocols.lesson_repository import LessonRepositoryProtocol
from academy.application.common.unit_of_work import UnitOfWork
from academy.application.community.protocols.discussion_repository import (
    DiscussionRepositoryProtocol,
)
from academy.domain.catalog.exceptions import LessonNotFoundError
from academy.domain.common.value_objects.ids import DiscussionId, LessonId
from academy.domain.community.entities.discussion import Discussion
from academy.domain.community.exceptions import DiscussionNotFoundError
from academy.domain.community.services.discussion_thread_service import (
    DiscussionThreadService,
    ThreadNode,
)

logger = structlog.get_logger(__name__)


class DiscussionUseCase:
    """Use case for creating discussion nodes and reading a lesson's thread."""

    def __init__(
        self,
        discussion_repository: DiscussionRepositoryProtocol,
        lesson_repository: LessonRepositoryProtocol,
        uow: UnitOfWork,
        thread_service: DiscussionThreadService | None = None,
    ) -> None:
        self.discussion_repository = discussion_repository
        self.lesson_repository = lesson_repository
        self.uow = uow
        self.thread_service = thread_service or DiscussionThreadService()

    def create_discussion(self, lesson_id: int, body: str) -> Discussion:
        """
        Start a new root discussion under a lesson.

        Raises:
            LessonNotFoundError: If the lesson doesn't exist
            ValidationError: If the body is empty
        """
        lesson_id_vo = self._require_lesson(lesson_id)
        with self.uow:
            discussion = self.discussion_repository.save(Discussion.create(lesson_id_vo, body))
            self.uow.commit()

        logger.info("discussion_created", discussion_id=discussion.id.value, lesson_id=lesson_id)
        return discussion

    def create_reply(self, lesson_id: int, parent_id: int, body: str) -> Discussion:
        """
        Reply to an existing discussion node.

        Args:
            lesson_id: Lesson the reply is posted under
            parent_id: ID of the node being replied to
            body: Reply text

        Raises:
            LessonNotFoundError: If the lesson doesn't exist
            DiscussionNotFoundError: If the parent doesn't exist
            CrossLessonReplyError: If the parent belongs to another lesson
        """
        lesson_id_vo = self._require_lesson(lesson_id)
        with self.uow:
            parent = self.discussion_repository.find_by_id(DiscussionId(parent_id))
            if not parent:
                raise DiscussionNotFoundError(parent_id)
            reply = self.discussion_repository.save(
                Discussion.create_reply(parent, lesson_id_vo, body)
            )
            self.uow.commit()

        logger.info(
            "discussion_reply_created",
            discussion_id=reply.id.value,
            parent_id=parent_id,
            lesson_id=lesson_id,
        )
        return reply

    def get_discussion(self, discussion_id: int) -> Discussion:
        discussion = self.discussion_repository.find_by_id(DiscussionId(discussion_id))
        if not discussion:
            raise DiscussionNotFoundError(discussion_id)
        return discussion

    def get_thread(self, lesson_id: int) -> list[ThreadNode]:
        """
        Build the discussion forest of a lesson.

        Returns:
            Root nodes by (created_at, id), each with replies in the same order

        Raises:
            LessonNotFoundError: If the lesson doesn't exist
            DiscussionCycleError: If stored rows form a cycle
        """
        lesson_id_vo = self._require_lesson(lesson_id)
        discussions = self.discussion_repository.find_by_lesson(lesson_id_vo)
        return self.thread_service.build_forest(discussions)

    def _require_lesson(self, lesson_id: int) -> LessonId:
        lesson_id_vo = LessonId(lesson_id)
        if not self.lesson_repository.find_by_id(lesson_id_vo):
            raise LessonNotFoundError(lesson_id)
        return lesson_id_vo
