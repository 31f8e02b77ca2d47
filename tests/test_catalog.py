"""Tests for the catalog: programs, modules, courses, lessons and lesson material."""

from unittest.mock import patch

import pytest
from sqlalchemy import text
from sqlalchemy.exc import IntegrityError

from academy.core import Container
from academy.domain.catalog.entities.lesson import Lesson
from academy.domain.catalog.exceptions import (
    AlreadyDeletedError,
    CatalogModuleNotFoundError,
    CourseNotFoundError,
    LessonPositionTakenError,
    NotDeletedError,
    ProgramNotFoundError,
)
from academy.domain.common.exceptions import ConflictError, ValidationError
from academy.domain.common.value_objects.ids import CourseId, LessonId, ModuleId, ProgramId
from academy.models import Lesson as LessonORM


class TestPrograms:
    def test_create_and_update_program(self, container: Container) -> None:
        programs = container.program_use_case()
        program = programs.create_program("  Web Development ", 1200, "bootcamp")

        assert program.name == "Web Development"
        updated = programs.update_program(program.id.value, price=900)

        assert updated.price == 900
        assert programs.get_program(program.id.value).price == 900

    def test_negative_price_is_rejected(self, container: Container) -> None:
        with pytest.raises(ValidationError):
            container.program_use_case().create_program("Free", -1, "course")

    def test_programs_listed_by_name(self, container: Container) -> None:
        programs = container.program_use_case()
        programs.create_program("Zeta", 100, "course")
        programs.create_program("Alpha", 100, "course")

        assert [p.name for p in programs.list_programs()] == ["Alpha", "Zeta"]

    def test_unknown_program(self, container: Container) -> None:
        with pytest.raises(ProgramNotFoundError):
            container.program_use_case().get_program(77)


class TestSoftDelete:
    def test_module_soft_delete_and_restore_round_trip(self, container: Container) -> None:
        modules = container.module_use_case()
        module = modules.create_module("Foundations", "Start here")

        modules.soft_delete_module(module.id.value)
        assert modules.list_modules() == []
        assert [m.id for m in modules.list_modules(include_deleted=True)] == [module.id]

        restored = modules.restore_module(module.id.value)
        assert restored.is_deleted is False
        assert restored.name == "Foundations"
        assert restored.description == "Start here"
        assert [m.id for m in modules.list_modules()] == [module.id]

    def test_deleting_twice_fails(self, container: Container, course_id: int) -> None:
        courses = container.course_use_case()
        courses.soft_delete_course(course_id)

        with pytest.raises(AlreadyDeletedError):
            courses.soft_delete_course(course_id)

    def test_restoring_a_live_course_fails(self, container: Container, course_id: int) -> None:
        with pytest.raises(NotDeletedError):
            container.course_use_case().restore_course(course_id)

    def test_soft_deleted_lesson_keeps_its_position(
        self, container: Container, course_id: int, lesson_id: int
    ) -> None:
        lessons = container.lesson_use_case()
        lessons.soft_delete_lesson(lesson_id)

        assert lessons.list_lessons(course_id) == []
        with pytest.raises(LessonPositionTakenError):
            lessons.add_lesson(course_id, 1, "Replacement")

        restored = lessons.restore_lesson(lesson_id)
        assert restored.position == 1
        assert [lesson.id.value for lesson in lessons.list_lessons(course_id)] == [lesson_id]


class TestLessons:
    def test_same_position_twice_conflicts(self, container: Container, course_id: int) -> None:
        lessons = container.lesson_use_case()
        lessons.add_lesson(course_id, 3, "Joins")

        with pytest.raises(ConflictError) as exc_info:
            lessons.add_lesson(course_id, 3, "Joins again")

        assert isinstance(exc_info.value, LessonPositionTakenError)
        assert [lesson.name for lesson in lessons.list_lessons(course_id)] == ["Joins"]

    def test_store_rejects_duplicate_position(
        self, container: Container, course_id: int, lesson_id: int
    ) -> None:
        """The (course, position) unique constraint holds without the application check."""
        with pytest.raises(LessonPositionTakenError):
            container.lesson_repository().save(Lesson.create(CourseId(course_id), "Dup", 1))

    def test_swap_positions(self, container: Container, db_session, course_id: int) -> None:
        lessons = container.lesson_use_case()
        third = lessons.add_lesson(course_id, 3, "Joins")
        fourth = lessons.add_lesson(course_id, 4, "Indexes")

        first, second = lessons.reorder_lesson(third.id.value, fourth.id.value)

        assert (first.position, second.position) == (4, 3)
        positions = {
            row.id: row.position
            for row in db_session.query(LessonORM).filter_by(course_id=course_id)
        }
        assert positions == {third.id.value: 4, fourth.id.value: 3}
        assert [lesson.name for lesson in lessons.list_lessons(course_id)] == [
            "Indexes",
            "Joins",
        ]

    def test_failed_swap_leaves_both_positions(
        self, container: Container, db_session, course_id: int
    ) -> None:
        lessons = container.lesson_use_case()
        third = lessons.add_lesson(course_id, 3, "Joins")
        fourth = lessons.add_lesson(course_id, 4, "Indexes")
        repository = lessons.lesson_repository
        save = repository.save
        calls: list[int] = []

        def save_while_another_writer_moves_in(lesson: Lesson) -> Lesson:
            calls.append(lesson.id.value)
            if len(calls) == 2:
                # Position 3 was just vacated by parking the first lesson
                db_session.execute(
                    text(
                        "INSERT INTO lessons (course_id, name, position) "
                        "VALUES (:course_id, 'Intruder', 3)"
                    ),
                    {"course_id": course_id},
                )
            return save(lesson)

        with (
            patch.object(repository, "save", side_effect=save_while_another_writer_moves_in),
            pytest.raises(LessonPositionTakenError),
        ):
            lessons.reorder_lesson(third.id.value, fourth.id.value)

        assert len(calls) == 2
        assert lessons.get_lesson(third.id.value).position == 3
        assert lessons.get_lesson(fourth.id.value).position == 4
        assert [lesson.name for lesson in lessons.list_lessons(course_id)] == [
            "Joins",
            "Indexes",
        ]

    def test_swap_across_courses_is_rejected(
        self, container: Container, course_id: int, lesson_id: int
    ) -> None:
        lessons = container.lesson_use_case()
        other_course = container.course_use_case().create_course("Other")
        other = lessons.add_lesson(other_course.id.value, 1, "Elsewhere")

        with pytest.raises(ValidationError):
            lessons.reorder_lesson(lesson_id, other.id.value)

        assert lessons.get_lesson(lesson_id).position == 1
        assert lessons.get_lesson(other.id.value).position == 1

    def test_move_to_taken_position_conflicts(self, container: Container, course_id: int) -> None:
        lessons = container.lesson_use_case()
        lessons.add_lesson(course_id, 1, "One")
        two = lessons.add_lesson(course_id, 2, "Two")

        with pytest.raises(LessonPositionTakenError):
            lessons.update_lesson(two.id.value, position=1)

        moved = lessons.update_lesson(two.id.value, position=5, name="Five")
        assert (moved.position, moved.name) == (5, "Five")

    @pytest.mark.parametrize("position", [0, -1])
    def test_position_must_be_positive(
        self, container: Container, course_id: int, position: int
    ) -> None:
        with pytest.raises(ValidationError):
            container.lesson_use_case().add_lesson(course_id, position, "Bad")

    def test_lesson_in_unknown_course(self, container: Container) -> None:
        with pytest.raises(CourseNotFoundError):
            container.lesson_use_case().add_lesson(404, 1, "Orphan")


class TestCatalogLinks:
    def test_link_is_idempotent_and_queryable_both_ways(
        self, container: Container, program_id: int
    ) -> None:
        links = container.catalog_link_use_case()
        module = container.module_use_case().create_module("Databases")

        assert links.link_module_to_program(program_id, module.id.value) is True
        assert links.link_module_to_program(program_id, module.id.value) is False

        assert [m.id for m in links.list_program_modules(program_id)] == [module.id]
        assert [p.id.value for p in links.list_programs_for_module(module.id.value)] == [
            program_id
        ]

    def test_unlink(self, container: Container, course_id: int) -> None:
        links = container.catalog_link_use_case()
        module = container.module_use_case().create_module("Databases")
        links.link_course_to_module(module.id.value, course_id)

        assert links.unlink_course_from_module(module.id.value, course_id) is True
        assert links.unlink_course_from_module(module.id.value, course_id) is False
        assert links.list_module_courses(module.id.value) == []

    def test_deleted_course_hidden_from_module_listing(
        self, container: Container, course_id: int
    ) -> None:
        links = container.catalog_link_use_case()
        module = container.module_use_case().create_module("Databases")
        links.link_course_to_module(module.id.value, course_id)
        container.course_use_case().soft_delete_course(course_id)

        assert links.list_module_courses(module.id.value) == []
        listed = links.list_module_courses(module.id.value, include_deleted=True)
        assert [c.id.value for c in listed] == [course_id]

    def test_link_unknown_module(self, container: Container, program_id: int) -> None:
        with pytest.raises(CatalogModuleNotFoundError):
            container.catalog_link_use_case().link_module_to_program(program_id, 31337)

    def test_pair_linked_by_another_writer_is_a_no_op(
        self, container: Container, db_session, program_id: int
    ) -> None:
        module = container.module_use_case().create_module("Warehousing")
        db_session.execute(
            text("INSERT INTO program_modules (program_id, module_id) VALUES (:p, :m)"),
            {"p": program_id, "m": module.id.value},
        )
        repository = container.catalog_link_repository()

        # The lookup misses, as it does when the other writer commits after it
        with patch.object(db_session, "get", return_value=None):
            linked = repository.link_module_to_program(ProgramId(program_id), module.id)

        assert linked is False
        count = db_session.execute(text("SELECT COUNT(*) FROM program_modules")).scalar_one()
        assert count == 1

    def test_link_to_missing_module_is_not_swallowed(
        self, container: Container, program_id: int
    ) -> None:
        with pytest.raises(IntegrityError):
            container.catalog_link_repository().link_module_to_program(
                ProgramId(program_id), ModuleId(31337)
            )


class TestLessonMaterial:
    def test_quiz_and_exercise_attach_to_lesson(
        self, container: Container, lesson_id: int
    ) -> None:
        material = container.lesson_material_use_case()
        quiz = material.create_quiz(lesson_id, "Check-in", {"questions": [{"q": "2+2?"}]})
        exercise = material.create_exercise(lesson_id, "Practice", "https://ex.example.com/1")

        assert quiz.lesson_id == LessonId(lesson_id)
        assert material.list_quizzes(lesson_id)[0].content == {"questions": [{"q": "2+2?"}]}
        assert [e.id for e in material.list_exercises(lesson_id)] == [exercise.id]

        updated = material.update_quiz(quiz.id.value, title="Final check")
        assert updated.title == "Final check"
        assert updated.content == {"questions": [{"q": "2+2?"}]}
