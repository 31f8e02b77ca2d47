"""Use case for lesson operations."""

import structlog

from academy.application.catalog.protocols.course_repository import CourseRepositoryProtocol
from academy.application.catalog.protocols.lesson_repository import LessonRepositoryProtocol
from academy.application.common.unit_of_work import UnitOfWork
from academy.domain.catalog.entities.lesson import Lesson, validate_position
from academy.domain.catalog.exceptions import (
    CourseNotFoundError,
    LessonNotFoundError,
    LessonPositionTakenError,
)
from academy.domain.common.exceptions import ValidationError
from academy.domain.common.value_objects.ids import CourseId, LessonId

logger = structlog.get_logger(__name__)


class LessonUseCase:
    """
    Use case for lessons and their ordering within a course.

    Positions are unique per course, soft-deleted lessons included, and may
    have gaps.
    """

    def __init__(
        self,
        lesson_repository: LessonRepositoryProtocol,
        course_repository: CourseRepositoryProtocol,
        uow: UnitOfWork,
    ) -> None:
        self.lesson_repository = lesson_repository
        self.course_repository = course_repository
        self.uow = uow

    def add_lesson(
        self,
        course_id: int,
        position: int,
        name: str,
        content: str | None = None,
        video_url: str | None = None,
    ) -> Lesson:
        """
        Add a lesson to a course at the given position.

        Args:
            course_id: ID of the owning course
            position: Positive position within the course
            name: Lesson name
            content: Optional lesson text
            video_url: Optional video location

        Returns:
            Created lesson domain entity

        Raises:
            ValidationError: If the position is not positive or the name is empty
            CourseNotFoundError: If the course doesn't exist
            LessonPositionTakenError: If another lesson of the course holds the position
        """
        validate_position(position)
        course_id_vo = CourseId(course_id)

        with self.uow:
            if not self.course_repository.find_by_id(course_id_vo):
                raise CourseNotFoundError(course_id)
            self._ensure_position_free(course_id_vo, position)

            lesson = Lesson.create(
                course_id=course_id_vo,
                name=name,
                position=position,
                content=content,
                video_url=video_url,
            )
            lesson = self.lesson_repository.save(lesson)
            self.uow.commit()

        logger.info(
            "lesson_added", lesson_id=lesson.id.value, course_id=course_id, position=position
        )
        return lesson

    def update_lesson(
        self,
        lesson_id: int,
        name: str | None = None,
        content: str | None = None,
        video_url: str | None = None,
        position: int | None = None,
    ) -> Lesson:
        """
        Update a lesson. ``None`` leaves a field untouched.

        Raises:
            LessonNotFoundError: If the lesson doesn't exist
            LessonPositionTakenError: If the new position is used by another lesson
        """
        with self.uow:
            lesson = self._get(lesson_id, for_update=True)
            lesson.update(name=name, content=content, video_url=video_url)
            if position is not None and position != lesson.position:
                validate_position(position)
                self._ensure_position_free(lesson.course_id, position)
                lesson.move_to(position)
            lesson = self.lesson_repository.save(lesson)
            self.uow.commit()

        logger.info("lesson_updated", lesson_id=lesson_id)
        return lesson

    def reorder_lesson(self, lesson_id: int, other_lesson_id: int) -> tuple[Lesson, Lesson]:
        """
        Swap the positions of two lessons of the same course.

        The swap parks the first lesson on a free position past the end of the
        course, so the (course, position) constraint holds after every
        statement. All three writes share one transaction.

        Returns:
            The two lessons with their new positions, in argument order

        Raises:
            LessonNotFoundError: If either lesson doesn't exist
            ValidationError: If the lessons belong to different courses
        """
        with self.uow:
            first = self._get(lesson_id, for_update=True)
            second = self._get(other_lesson_id, for_update=True)
            if first.course_id != second.course_id:
                raise ValidationError(
                    f"Lessons {lesson_id} and {other_lesson_id} belong to different courses",
                    field="course_id",
                    value=second.course_id.value,
                )
            if first.id == second.id:
                return first, second

            first_position, second_position = first.position, second.position
            parking = self.lesson_repository.max_position(first.course_id) + 1

            first.move_to(parking)
            self.lesson_repository.save(first)
            second.move_to(first_position)
            second = self.lesson_repository.save(second)
            first.move_to(second_position)
            first = self.lesson_repository.save(first)
            self.uow.commit()

        logger.info(
            "lessons_reordered",
            course_id=first.course_id.value,
            lesson_id=lesson_id,
            other_lesson_id=other_lesson_id,
        )
        return first, second

    def soft_delete_lesson(self, lesson_id: int) -> Lesson:
        """
        Flag a lesson as deleted. It keeps its position.

        Raises:
            LessonNotFoundError: If the lesson doesn't exist
            AlreadyDeletedError: If the lesson is already deleted
        """
        with self.uow:
            lesson = self._get(lesson_id)
            lesson.soft_delete()
            lesson = self.lesson_repository.save(lesson)
            self.uow.commit()

        logger.info("lesson_soft_deleted", lesson_id=lesson_id)
        return lesson

    def restore_lesson(self, lesson_id: int) -> Lesson:
        with self.uow:
            lesson = self._get(lesson_id)
            lesson.restore()
            lesson = self.lesson_repository.save(lesson)
            self.uow.commit()

        logger.info("lesson_restored", lesson_id=lesson_id)
        return lesson

    def get_lesson(self, lesson_id: int) -> Lesson:
        return self._get(lesson_id)

    def list_lessons(self, course_id: int, include_deleted: bool = False) -> list[Lesson]:
        """
        Get the lessons of a course ordered by position.

        Raises:
            CourseNotFoundError: If the course doesn't exist
        """
        course_id_vo = CourseId(course_id)
        if not self.course_repository.find_by_id(course_id_vo):
            raise CourseNotFoundError(course_id)
        return self.lesson_repository.find_by_course(course_id_vo, include_deleted=include_deleted)

    def _get(self, lesson_id: int, for_update: bool = False) -> Lesson:
        lesson = self.lesson_repository.find_by_id(LessonId(lesson_id), for_update=for_update)
        if not lesson:
            raise LessonNotFoundError(lesson_id)
        return lesson

    def _ensure_position_free(self, course_id: CourseId, position: int) -> None:
        if self.lesson_repository.find_by_position(course_id, position):
            raise LessonPositionTakenError(course_id.value, position)
