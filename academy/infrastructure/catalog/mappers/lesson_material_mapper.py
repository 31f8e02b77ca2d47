"""Mappers for Quiz and Exercise ORM ↔ Domain conversion."""

from academy.domain.catalog.entities.lesson_material import Exercise, Quiz
from academy.domain.common.clock import ensure_utc
from academy.domain.common.value_objects.ids import ExerciseId, LessonId, QuizId
from academy.models import Exercise as ExerciseORM
from academy.models import Quiz as QuizORM


class QuizMapper:
    def to_domain(self, orm_model: QuizORM) -> Quiz:
        return Quiz.create_with_id(
            id=QuizId(orm_model.id),
            lesson_id=LessonId(orm_model.lesson_id),
            title=orm_model.title,
            content=dict(orm_model.content),
            created_at=ensure_utc(orm_model.created_at),
            updated_at=ensure_utc(orm_model.updated_at),
        )

    def to_orm(self, domain_entity: Quiz, orm_model: QuizORM | None = None) -> QuizORM:
        if orm_model:
            orm_model.title = domain_entity.title
            # New dict so the JSON column registers the change
            orm_model.content = dict(domain_entity.content)
            orm_model.updated_at = domain_entity.updated_at
            return orm_model

        return QuizORM(
            id=domain_entity.id.value if domain_entity.id.value != 0 else None,
            lesson_id=domain_entity.lesson_id.value,
            title=domain_entity.title,
            content=dict(domain_entity.content),
            created_at=domain_entity.created_at,
            updated_at=domain_entity.updated_at,
        )


class ExerciseMapper:
    def to_domain(self, orm_model: ExerciseORM) -> Exercise:
        return Exercise.create_with_id(
            id=ExerciseId(orm_model.id),
            lesson_id=LessonId(orm_model.lesson_id),
            title=orm_model.title,
            url=orm_model.url,
            created_at=ensure_utc(orm_model.created_at),
            updated_at=ensure_utc(orm_model.updated_at),
        )

    def to_orm(self, domain_entity: Exercise, orm_model: ExerciseORM | None = None) -> ExerciseORM:
        if orm_model:
            orm_model.title = domain_entity.title
            orm_model.url = domain_entity.url
            orm_model.updated_at = domain_entity.updated_at
            return orm_model

        return ExerciseORM(
            id=domain_entity.id.value if domain_entity.id.value != 0 else None,
            lesson_id=domain_entity.lesson_id.value,
            title=domain_entity.title,
            url=domain_entity.url,
            created_at=domain_entity.created_at,
            updated_at=domain_entity.updated_at,
        )
