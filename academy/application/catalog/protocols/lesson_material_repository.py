"""Protocols for quiz and exercise repositories."""

from typing import Protocol

from academy.domain.catalog.entities.lesson_material import Exercise, Quiz
from academy.domain.common.value_objects.ids import ExerciseId, LessonId, QuizId


class QuizRepositoryProtocol(Protocol):
    """Protocol for Quiz repository operations."""

    def find_by_id(self, quiz_id: QuizId) -> Quiz | None:
        ...

    def find_by_lesson(self, lesson_id: LessonId) -> list[Quiz]:
        """Get the quizzes of a lesson, oldest first."""
        ...

    def save(self, quiz: Quiz) -> Quiz:
        ...


class ExerciseRepositoryProtocol(Protocol):
    """Protocol for Exercise repository operations."""

    def find_by_id(self, exercise_id: ExerciseId) -> Exercise | None:
        ...

    def find_by_lesson(self, lesson_id: LessonId) -> list[Exercise]:
        """Get the exercises of a lesson, oldest first."""
        ...

    def save(self, exercise: Exercise) -> Exercise:
        ...
