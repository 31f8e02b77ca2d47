"""Tests for Program and Lesson rules."""

import pytest

from academy.domain.catalog.entities.lesson import Lesson
from academy.domain.catalog.entities.lesson_material import Quiz
from academy.domain.catalog.entities.program import Program
from academy.domain.catalog.exceptions import AlreadyDeletedError, NotDeletedError
from academy.domain.common.exceptions import ValidationError
from academy.domain.common.value_objects.ids import CourseId, LessonId


class TestProgram:
    def test_create_trims_text(self) -> None:
        program = Program.create("  Data Engineering ", 0, " bootcamp ")
        assert program.name == "Data Engineering"
        assert program.program_type == "bootcamp"
        assert program.is_new()

    @pytest.mark.parametrize("price", [-1, 9.99, True])
    def test_price_must_be_a_non_negative_integer(self, price: object) -> None:
        with pytest.raises(ValidationError) as exc_info:
            Program.create("Data", price, "course")  # type: ignore[arg-type]
        assert exc_info.value.field == "price"

    def test_update_keeps_untouched_fields(self) -> None:
        program = Program.create("Data", 100, "course")

        program.update(price=250)

        assert program.price == 250
        assert program.name == "Data"
        with pytest.raises(ValidationError):
            program.update(name="  ")


class TestLesson:
    @pytest.mark.parametrize("position", [0, -3, 1.5])
    def test_position_must_be_positive(self, position: object) -> None:
        with pytest.raises(ValidationError):
            Lesson.create(CourseId(1), "Intro", position)  # type: ignore[arg-type]

    def test_move_to_validates(self) -> None:
        lesson = Lesson.create(CourseId(1), "Intro", 1)
        lesson.move_to(7)
        assert lesson.position == 7
        with pytest.raises(ValidationError):
            lesson.move_to(0)

    def test_soft_delete_and_restore(self) -> None:
        lesson = Lesson.create(CourseId(1), "Intro", 1)

        lesson.soft_delete()
        with pytest.raises(AlreadyDeletedError):
            lesson.soft_delete()
        lesson.restore()

        assert not lesson.is_deleted
        with pytest.raises(NotDeletedError):
            lesson.restore()


class TestQuiz:
    def test_content_must_be_an_object(self) -> None:
        with pytest.raises(ValidationError):
            Quiz.create(LessonId(1), "Check-in", ["not", "an", "object"])  # type: ignore[arg-type]
