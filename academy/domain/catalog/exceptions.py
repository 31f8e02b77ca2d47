"""Catalog domain exceptions."""

from academy.domain.common.exceptions import ConflictError, DuplicateError, NotFoundError


class ProgramNotFoundError(NotFoundError):
    """Raised when a program cannot be found."""

    def __init__(self, program_id: int) -> None:
        super().__init__("Program", program_id)


class CatalogModuleNotFoundError(NotFoundError):
    """Raised when a catalog module cannot be found."""

    def __init__(self, module_id: int) -> None:
        super().__init__("Module", module_id)


class CourseNotFoundError(NotFoundError):
    """Raised when a course cannot be found."""

    def __init__(self, course_id: int) -> None:
        super().__init__("Course", course_id)


class LessonNotFoundError(NotFoundError):
    """Raised when a lesson cannot be found."""

    def __init__(self, lesson_id: int) -> None:
        super().__init__("Lesson", lesson_id)


class QuizNotFoundError(NotFoundError):
    """Raised when a quiz cannot be found."""

    def __init__(self, quiz_id: int) -> None:
        super().__init__("Quiz", quiz_id)


class ExerciseNotFoundError(NotFoundError):
    """Raised when an exercise cannot be found."""

    def __init__(self, exercise_id: int) -> None:
        super().__init__("Exercise", exercise_id)


class LessonPositionTakenError(DuplicateError):
    """Raised when a position is already used by another lesson of the course."""

    def __init__(self, course_id: int, position: int) -> None:
        super().__init__("Lesson", {"course_id": course_id, "position": position})
        self.course_id = course_id
        self.position = position


class AlreadyDeletedError(ConflictError):
    """Raised when soft-deleting a row that is already soft-deleted."""

    def __init__(self, entity_type: str, entity_id: int) -> None:
        super().__init__(
            f"{entity_type} {entity_id} is already deleted",
            {"entity_type": entity_type, "entity_id": entity_id, "field": "is_deleted"},
        )


class NotDeletedError(ConflictError):
    """Raised when restoring a row that is not soft-deleted."""

    def __init__(self, entity_type: str, entity_id: int) -> None:
        super().__init__(
            f"{entity_type} {entity_id} is not deleted",
            {"entity_type": entity_type, "entity_id": entity_id, "field": "is_deleted"},
        )
