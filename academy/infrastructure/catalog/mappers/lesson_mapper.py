"""Mapper for Lesson ORM ↔ Domain conversion."""

from academy.domain.catalog.entities.lesson import Lesson
from academy.domain.common.clock import ensure_utc
from academy.domain.common.value_objects.ids import CourseId, LessonId
from academy.models import Lesson as LessonORM


class LessonMapper:
    """Mapper for Lesson ORM ↔ Domain conversion."""

    def to_domain(self, orm_model: LessonORM) -> Lesson:
        """Convert ORM model to domain entity."""
        return Lesson.create_with_id(
            id=LessonId(orm_model.id),
            course_id=CourseId(orm_model.course_id),
            name=orm_model.name,
            position=orm_model.position,
            content=orm_model.content,
            video_url=orm_model.video_url,
            is_deleted=orm_model.is_deleted,
            created_at=ensure_utc(orm_model.created_at),
            updated_at=ensure_utc(orm_model.updated_at),
        )

    def to_orm(self, domain_entity: Lesson, orm_model: LessonORM | None = None) -> LessonORM:
        """Convert domain entity to ORM model."""
        if orm_model:
            # Update existing; a lesson never changes course
            orm_model.name = domain_entity.name
            orm_model.position = domain_entity.position
            orm_model.content = domain_entity.content
            orm_model.video_url = domain_entity.video_url
            orm_model.is_deleted = domain_entity.is_deleted
            orm_model.updated_at = domain_entity.updated_at
            return orm_model

        return LessonORM(
            id=domain_entity.id.value if domain_entity.id.value != 0 else None,
            course_id=domain_entity.course_id.value,
            name=domain_entity.name,
            position=domain_entity.position,
            content=domain_entity.content,
            video_url=domain_entity.video_url,
            is_deleted=domain_entity.is_deleted,
            created_at=domain_entity.created_at,
            updated_at=domain_entity.updated_at,
        )
