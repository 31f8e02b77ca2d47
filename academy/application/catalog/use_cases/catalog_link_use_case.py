"""Use case for the program/module and module/course associations."""

import structlog

from academy.application.catalog.protocols.catalog_link_repository import (
    CatalogLinkRepositoryProtocol,
)
from academy.application.catalog.protocols.course_repository import CourseRepositoryProtocol
from academy.application.catalog.protocols.module_repository import ModuleRepositoryProtocol
from academy.application.catalog.protocols.program_repository import ProgramRepositoryProtocol
from academy.application.common.unit_of_work import UnitOfWork
from academy.domain.catalog.entities.course import Course
from academy.domain.catalog.entities.module import Module
from academy.domain.catalog.entities.program import Program
from academy.domain.catalog.exceptions import (
    CatalogModuleNotFoundError,
    CourseNotFoundError,
    ProgramNotFoundError,
)
from academy.domain.common.value_objects.ids import CourseId, ModuleId, ProgramId

logger = structlog.get_logger(__name__)


class CatalogLinkUseCase:
    """
    Link and unlink catalog entities.

    Linking and unlinking are idempotent. Both ends must exist; a soft-deleted
    end is still linkable since historical references must keep resolving.
    """

    def __init__(
        self,
        link_repository: CatalogLinkRepositoryProtocol,
        program_repository: ProgramRepositoryProtocol,
        module_repository: ModuleRepositoryProtocol,
        course_repository: CourseRepositoryProtocol,
        uow: UnitOfWork,
    ) -> None:
        self.link_repository = link_repository
        self.program_repository = program_repository
        self.module_repository = module_repository
        self.course_repository = course_repository
        self.uow = uow

    def link_module_to_program(self, program_id: int, module_id: int) -> bool:
        """
        Attach a module to a program.

        Returns:
            True if a new link was created, False if it already existed

        Raises:
            ProgramNotFoundError: If the program doesn't exist
            CatalogModuleNotFoundError: If the module doesn't exist
        """
        with self.uow:
            program_id_vo = self._require_program(program_id)
            module_id_vo = self._require_module(module_id)
            created = self.link_repository.link_module_to_program(program_id_vo, module_id_vo)
            self.uow.commit()

        logger.info(
            "module_linked_to_program", program_id=program_id, module_id=module_id, created=created
        )
        return created

    def unlink_module_from_program(self, program_id: int, module_id: int) -> bool:
        with self.uow:
            program_id_vo = self._require_program(program_id)
            module_id_vo = self._require_module(module_id)
            removed = self.link_repository.unlink_module_from_program(program_id_vo, module_id_vo)
            self.uow.commit()

        logger.info(
            "module_unlinked_from_program",
            program_id=program_id,
            module_id=module_id,
            removed=removed,
        )
        return removed

    def link_course_to_module(self, module_id: int, course_id: int) -> bool:
        """
        Attach a course to a module.

        Returns:
            True if a new link was created, False if it already existed

        Raises:
            CatalogModuleNotFoundError: If the module doesn't exist
            CourseNotFoundError: If the course doesn't exist
        """
        with self.uow:
            module_id_vo = self._require_module(module_id)
            course_id_vo = self._require_course(course_id)
            created = self.link_repository.link_course_to_module(module_id_vo, course_id_vo)
            self.uow.commit()

        logger.info(
            "course_linked_to_module", module_id=module_id, course_id=course_id, created=created
        )
        return created

    def unlink_course_from_module(self, module_id: int, course_id: int) -> bool:
        with self.uow:
            module_id_vo = self._require_module(module_id)
            course_id_vo = self._require_course(course_id)
            removed = self.link_repository.unlink_course_from_module(module_id_vo, course_id_vo)
            self.uow.commit()

        logger.info(
            "course_unlinked_from_module",
            module_id=module_id,
            course_id=course_id,
            removed=removed,
        )
        return removed

    def list_program_modules(self, program_id: int, include_deleted: bool = False) -> list[Module]:
        program_id_vo = self._require_program(program_id)
        return self.link_repository.find_modules_for_program(
            program_id_vo, include_deleted=include_deleted
        )

    def list_module_courses(self, module_id: int, include_deleted: bool = False) -> list[Course]:
        module_id_vo = self._require_module(module_id)
        return self.link_repository.find_courses_for_module(
            module_id_vo, include_deleted=include_deleted
        )

    def list_programs_for_module(self, module_id: int) -> list[Program]:
        module_id_vo = self._require_module(module_id)
        return self.link_repository.find_programs_for_module(module_id_vo)

    def _require_program(self, program_id: int) -> ProgramId:
        program_id_vo = ProgramId(program_id)
        if not self.program_repository.find_by_id(program_id_vo):
            raise ProgramNotFoundError(program_id)
        return program_id_vo

    def _require_module(self, module_id: int) -> ModuleId:
        module_id_vo = ModuleId(module_id)
        if not self.module_repository.find_by_id(module_id_vo):
            raise CatalogModuleNotFoundError(module_id)
        return module_id_vo

    def _require_course(self, course_id: int) -> CourseId:
        course_id_vo = CourseId(course_id)
        if not self.course_repository.find_by_id(course_id_vo):
            raise CourseNotFoundError(course_id)
        return course_id_vo
