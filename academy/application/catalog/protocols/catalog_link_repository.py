"""Protocol for the program/module and module/course association tables."""

from typing import Protocol

from academy.domain.catalog.entities.course import Course
from academy.domain.catalog.entities.module import Module
from academy.domain.catalog.entities.program import Program
from academy.domain.common.value_objects.ids import CourseId, ModuleId, ProgramId


class CatalogLinkRepositoryProtocol(Protocol):
    """Protocol for catalog association records."""

    def link_module_to_program(self, program_id: ProgramId, module_id: ModuleId) -> bool:
        """
        Insert the association unless it exists.

        Returns:
            True if a new link was created, False if it already existed
        """
        ...

    def unlink_module_from_program(self, program_id: ProgramId, module_id: ModuleId) -> bool:
        """
        Remove the association if present.

        Returns:
            True if a link was removed, False if there was none
        """
        ...

    def link_course_to_module(self, module_id: ModuleId, course_id: CourseId) -> bool:
        ...

    def unlink_course_from_module(self, module_id: ModuleId, course_id: CourseId) -> bool:
        ...

    def find_modules_for_program(
        self, program_id: ProgramId, include_deleted: bool = False
    ) -> list[Module]:
        ...

    def find_courses_for_module(
        self, module_id: ModuleId, include_deleted: bool = False
    ) -> list[Course]:
        ...

    def find_programs_for_module(self, module_id: ModuleId) -> list[Program]:
        ...
