"""Repositories for Quiz and Exercise domain entities."""

from sqlalchemy import select
from sqlalchemy.orm import Session

from academy.domain.catalog.entities.lesson_material import Exercise, Quiz
from academy.domain.catalog.exceptions import ExerciseNotFoundError, QuizNotFoundError
from academy.domain.common.value_objects.ids import ExerciseId, LessonId, QuizId
from academy.infrastructure.catalog.mappers.lesson_material_mapper import (
    ExerciseMapper,
    QuizMapper,
)
from academy.infrastructure.common.persistence import guarded_write
from academy.models import Exercise as ExerciseORM
from academy.models import Quiz as QuizORM


class QuizRepository:
    """Repository for Quiz domain entities."""

    def __init__(self, db: Session) -> None:
        self.db = db
        self.mapper = QuizMapper()

    def find_by_id(self, quiz_id: QuizId) -> Quiz | None:
        orm_model = self.db.get(QuizORM, quiz_id.value)
        return self.mapper.to_domain(orm_model) if orm_model else None

    def find_by_lesson(self, lesson_id: LessonId) -> list[Quiz]:
        stmt = (
            select(QuizORM)
            .where(QuizORM.lesson_id == lesson_id.value)
            .order_by(QuizORM.created_at, QuizORM.id)
        )
        return [self.mapper.to_domain(orm) for orm in self.db.execute(stmt).scalars().all()]

    def save(self, quiz: Quiz) -> Quiz:
        if quiz.id.value == 0:
            orm_model = self.mapper.to_orm(quiz)
            with guarded_write(self.db, "Quiz"):
                self.db.add(orm_model)
            return self.mapper.to_domain(orm_model)

        orm_model = self.db.get(QuizORM, quiz.id.value)
        if not orm_model:
            raise QuizNotFoundError(quiz.id.value)
        with guarded_write(self.db, "Quiz", quiz.id.value):
            self.mapper.to_orm(quiz, orm_model)
        return self.mapper.to_domain(orm_model)


class ExerciseRepository:
    """Repository for Exercise domain entities."""

    def __init__(self, db: Session) -> None:
        self.db = db
        self.mapper = ExerciseMapper()

    def find_by_id(self, exercise_id: ExerciseId) -> Exercise | None:
        orm_model = self.db.get(ExerciseORM, exercise_id.value)
        return self.mapper.to_domain(orm_model) if orm_model else None

    def find_by_lesson(self, lesson_id: LessonId) -> list[Exercise]:
        stmt = (
            select(ExerciseORM)
            .where(ExerciseORM.lesson_id == lesson_id.value)
            .order_by(ExerciseORM.created_at, ExerciseORM.id)
        )
        return [self.mapper.to_domain(orm) for orm in self.db.execute(stmt).scalars().all()]

    def save(self, exercise: Exercise) -> Exercise:
        if exercise.id.value == 0:
            orm_model = self.mapper.to_orm(exercise)
            with guarded_write(self.db, "Exercise"):
                self.db.add(orm_model)
            return self.mapper.to_domain(orm_model)

        orm_model = self.db.get(ExerciseORM, exercise.id.value)
        if not orm_model:
            raise ExerciseNotFoundError(exercise.id.value)
        with guarded_write(self.db, "Exercise", exercise.id.value):
            self.mapper.to_orm(exercise, orm_model)
        return self.mapper.to_domain(orm_model)
