"""Use case for quizzes and exercises attached to lessons."""

from typing import Any

import structlog

from academy.application.catalog.protocols.lesson_material_repository import (
    ExerciseRepositoryProtocol,
    QuizRepositoryProtocol,
)
from academy.application.catalog.protocols.lesson_repository import LessonRepositoryProtocol
from academy.application.common.unit_of_work import UnitOfWork
from academy.domain.catalog.entities.lesson_material import Exercise, Quiz
from academy.domain.catalog.exceptions import (
    ExerciseNotFoundError,
    LessonNotFoundError,
    QuizNotFoundError,
)
from academy.domain.common.value_objects.ids import ExerciseId, LessonId, QuizId

logger = structlog.get_logger(__name__)


class LessonMaterialUseCase:
    """Use case for quiz and exercise CRUD operations."""

    def __init__(
        self,
        quiz_repository: QuizRepositoryProtocol,
        exercise_repository: ExerciseRepositoryProtocol,
        lesson_repository: LessonRepositoryProtocol,
        uow: UnitOfWork,
    ) -> None:
        self.quiz_repository = quiz_repository
        self.exercise_repository = exercise_repository
        self.lesson_repository = lesson_repository
        self.uow = uow

    def create_quiz(self, lesson_id: int, title: str, content: dict[str, Any]) -> Quiz:
        """
        Attach a quiz to a lesson.

        Args:
            lesson_id: ID of the lesson
            title: Quiz title
            content: Quiz definition as a JSON object

        Raises:
            LessonNotFoundError: If the lesson doesn't exist
            ValidationError: If the title is empty or content is not an object
        """
        with self.uow:
            lesson_id_vo = self._require_lesson(lesson_id)
            quiz = self.quiz_repository.save(Quiz.create(lesson_id_vo, title, content))
            self.uow.commit()

        logger.info("quiz_created", quiz_id=quiz.id.value, lesson_id=lesson_id)
        return quiz

    def update_quiz(
        self, quiz_id: int, title: str | None = None, content: dict[str, Any] | None = None
    ) -> Quiz:
        with self.uow:
            quiz = self.quiz_repository.find_by_id(QuizId(quiz_id))
            if not quiz:
                raise QuizNotFoundError(quiz_id)
            quiz.update(title=title, content=content)
            quiz = self.quiz_repository.save(quiz)
            self.uow.commit()

        logger.info("quiz_updated", quiz_id=quiz_id)
        return quiz

    def list_quizzes(self, lesson_id: int) -> list[Quiz]:
        return self.quiz_repository.find_by_lesson(self._require_lesson(lesson_id))

    def create_exercise(self, lesson_id: int, title: str, url: str) -> Exercise:
        """
        Attach an exercise to a lesson.

        Raises:
            LessonNotFoundError: If the lesson doesn't exist
            ValidationError: If the title or url is empty
        """
        with self.uow:
            lesson_id_vo = self._require_lesson(lesson_id)
            exercise = self.exercise_repository.save(Exercise.create(lesson_id_vo, title, url))
            self.uow.commit()

        logger.info("exercise_created", exercise_id=exercise.id.value, lesson_id=lesson_id)
        return exercise

    def update_exercise(
        self, exercise_id: int, title: str | None = None, url: str | None = None
    ) -> Exercise:
        with self.uow:
            exercise = self.exercise_repository.find_by_id(ExerciseId(exercise_id))
            if not exercise:
                raise ExerciseNotFoundError(exercise_id)
            exercise.update(title=title, url=url)
            exercise = self.exercise_repository.save(exercise)
            self.uow.commit()

        logger.info("exercise_updated", exercise_id=exercise_id)
        return exercise

    def list_exercises(self, lesson_id: int) -> list[Exercise]:
        return self.exercise_repository.find_by_lesson(self._require_lesson(lesson_id))

    def _require_lesson(self, lesson_id: int) -> LessonId:
        lesson_id_vo = LessonId(lesson_id)
        if not self.lesson_repository.find_by_id(lesson_id_vo):
            raise LessonNotFoundError(lesson_id)
        return lesson_id_vo
