"""Quizzes and exercises attached to lessons."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from academy.domain.common.clock import utc_now
from academy.domain.common.entity import Entity
from academy.domain.common.exceptions import ValidationError
from academy.domain.common.value_objects.ids import ExerciseId, LessonId, QuizId


def _require_title(title: str) -> None:
    if not title or not title.strip():
        raise ValidationError("Title cannot be empty", field="title", value=title)


def _require_content(content: object) -> None:
    if not isinstance(content, dict):
        raise ValidationError("Quiz content must be a JSON object", field="content")


@dataclass
class Quiz(Entity[QuizId]):
    """
    Quiz entity.

    The quiz body (questions, answers, scoring) is an opaque JSON object;
    the model only guarantees that it is present and structured.
    """

    id: QuizId
    lesson_id: LessonId
    title: str
    content: dict[str, Any]
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime = field(default_factory=utc_now)

    def __post_init__(self) -> None:
        _require_title(self.title)
        _require_content(self.content)

    def update(self, title: str | None = None, content: dict[str, Any] | None = None) -> None:
        if title is not None:
            _require_title(title)
            self.title = title.strip()
        if content is not None:
            _require_content(content)
            self.content = content
        self.updated_at = utc_now()

    @classmethod
    def create(cls, lesson_id: LessonId, title: str, content: dict[str, Any]) -> "Quiz":
        now = utc_now()
        return cls(
            id=QuizId.generate(),
            lesson_id=lesson_id,
            title=title.strip() if title else title,
            content=content,
            created_at=now,
            updated_at=now,
        )

    @classmethod
    def create_with_id(
        cls,
        id: QuizId,
        lesson_id: LessonId,
        title: str,
        content: dict[str, Any],
        created_at: datetime,
        updated_at: datetime,
    ) -> "Quiz":
        return cls(
            id=id,
            lesson_id=lesson_id,
            title=title,
            content=content,
            created_at=created_at,
            updated_at=updated_at,
        )


@dataclass
class Exercise(Entity[ExerciseId]):
    """Practical exercise hosted at an external URL."""

    id: ExerciseId
    lesson_id: LessonId
    title: str
    url: str
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime = field(default_factory=utc_now)

    def __post_init__(self) -> None:
        _require_title(self.title)
        if not self.url or not self.url.strip():
            raise ValidationError("Exercise url cannot be empty", field="url", value=self.url)

    def update(self, title: str | None = None, url: str | None = None) -> None:
        if title is not None:
            _require_title(title)
            self.title = title.strip()
        if url is not None:
            if not url.strip():
                raise ValidationError("Exercise url cannot be empty", field="url", value=url)
            self.url = url.strip()
        self.updated_at = utc_now()

    @classmethod
    def create(cls, lesson_id: LessonId, title: str, url: str) -> "Exercise":
        now = utc_now()
        return cls(
            id=ExerciseId.generate(),
            lesson_id=lesson_id,
            title=title.strip() if title else title,
            url=url.strip() if url else url,
            created_at=now,
            updated_at=now,
        )

    @classmethod
    def create_with_id(
        cls,
        id: ExerciseId,
        lesson_id: LessonId,
        title: str,
        url: str,
        created_at: datetime,
        updated_at: datetime,
    ) -> "Exercise":
        return cls(
            id=id,
            lesson_id=lesson_id,
            title=title,
            url=url,
            created_at=created_at,
            updated_at=updated_at,
        )
