"""Repository for Lesson domain entities."""

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from academy.domain.catalog.entities.lesson import Lesson
from academy.domain.catalog.exceptions import LessonNotFoundError, LessonPositionTakenError
from academy.domain.common.value_objects.ids import CourseId, LessonId
from academy.infrastructure.catalog.mappers.lesson_mapper import LessonMapper
from academy.infrastructure.common.persistence import guarded_write
from academy.models import Lesson as LessonORM


class LessonRepository:
    """Repository for Lesson domain entities."""

    def __init__(self, db: Session) -> None:
        self.db = db
        self.mapper = LessonMapper()

    def find_by_id(self, lesson_id: LessonId, for_update: bool = False) -> Lesson | None:
        """
        Find a lesson by ID.

        Args:
            lesson_id: The lesson ID
            for_update: Lock the row for the rest of the transaction

        Returns:
            Lesson entity if found, None otherwise
        """
        stmt = select(LessonORM).where(LessonORM.id == lesson_id.value)
        if for_update:
            stmt = stmt.with_for_update().execution_options(populate_existing=True)
        orm_model = self.db.execute(stmt).scalar_one_or_none()
        return self.mapper.to_domain(orm_model) if orm_model else None

    def find_by_course(self, course_id: CourseId, include_deleted: bool = False) -> list[Lesson]:
        stmt = (
            select(LessonORM)
            .where(LessonORM.course_id == course_id.value)
            .order_by(LessonORM.position)
        )
        if not include_deleted:
            stmt = stmt.where(LessonORM.is_deleted.is_(False))
        return [self.mapper.to_domain(orm) for orm in self.db.execute(stmt).scalars().all()]

    def find_by_position(self, course_id: CourseId, position: int) -> Lesson | None:
        stmt = select(LessonORM).where(
            LessonORM.course_id == course_id.value,
            LessonORM.position == position,
        )
        orm_model = self.db.execute(stmt).scalar_one_or_none()
        return self.mapper.to_domain(orm_model) if orm_model else None

    def max_position(self, course_id: CourseId) -> int:
        stmt = select(func.max(LessonORM.position)).where(LessonORM.course_id == course_id.value)
        return self.db.execute(stmt).scalar() or 0

    def save(self, lesson: Lesson) -> Lesson:
        """
        Save a lesson entity (create or update).

        Raises:
            LessonPositionTakenError: If the (course, position) pair is taken
        """

        def position_taken(_: IntegrityError) -> LessonPositionTakenError:
            return LessonPositionTakenError(lesson.course_id.value, lesson.position)

        if lesson.id.value == 0:
            orm_model = self.mapper.to_orm(lesson)
            with guarded_write(self.db, "Lesson", on_conflict=position_taken):
                self.db.add(orm_model)
            return self.mapper.to_domain(orm_model)

        orm_model = self.db.get(LessonORM, lesson.id.value)
        if not orm_model:
            raise LessonNotFoundError(lesson.id.value)
        with guarded_write(self.db, "Lesson", lesson.id.value, on_conflict=position_taken):
            self.mapper.to_orm(lesson, orm_model)
        return self.mapper.to_domain(orm_model)
