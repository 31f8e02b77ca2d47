"""Use cases for reusable catalog groupings: modules and courses."""

import structlog

from academy.application.catalog.protocols.course_repository import CourseRepositoryProtocol
from academy.application.catalog.protocols.module_repository import ModuleRepositoryProtocol
from academy.application.common.unit_of_work import UnitOfWork
from academy.domain.catalog.entities.course import Course
from academy.domain.catalog.entities.module import Module
from academy.domain.catalog.exceptions import CatalogModuleNotFoundError, CourseNotFoundError
from academy.domain.common.value_objects.ids import CourseId, ModuleId

logger = structlog.get_logger(__name__)


class ModuleUseCase:
    """Create, update, soft-delete and restore catalog modules."""

    def __init__(self, module_repository: ModuleRepositoryProtocol, uow: UnitOfWork) -> None:
        self.module_repository = module_repository
        self.uow = uow

    def create_module(self, name: str, description: str | None = None) -> Module:
        with self.uow:
            module = self.module_repository.save(Module.create(name, description))
            self.uow.commit()

        logger.info("module_created", module_id=module.id.value)
        return module

    def update_module(
        self, module_id: int, name: str | None = None, description: str | None = None
    ) -> Module:
        """
        Update a module. Soft-deleted modules can be edited as well.

        Raises:
            CatalogModuleNotFoundError: If the module doesn't exist
        """
        with self.uow:
            module = self._get(module_id)
            module.update(name=name, description=description)
            module = self.module_repository.save(module)
            self.uow.commit()

        logger.info("module_updated", module_id=module_id)
        return module

    def soft_delete_module(self, module_id: int) -> Module:
        """
        Flag a module as deleted. Links and references stay intact.

        Raises:
            CatalogModuleNotFoundError: If the module doesn't exist
            AlreadyDeletedError: If the module is already deleted
        """
        with self.uow:
            module = self._get(module_id)
            module.soft_delete()
            module = self.module_repository.save(module)
            self.uow.commit()

        logger.info("module_soft_deleted", module_id=module_id)
        return module

    def restore_module(self, module_id: int) -> Module:
        """
        Clear the deleted flag of a module.

        Raises:
            CatalogModuleNotFoundError: If the module doesn't exist
            NotDeletedError: If the module is not deleted
        """
        with self.uow:
            module = self._get(module_id)
            module.restore()
            module = self.module_repository.save(module)
            self.uow.commit()

        logger.info("module_restored", module_id=module_id)
        return module

    def get_module(self, module_id: int) -> Module:
        return self._get(module_id)

    def list_modules(self, include_deleted: bool = False) -> list[Module]:
        return self.module_repository.find_all(include_deleted=include_deleted)

    def _get(self, module_id: int) -> Module:
        module = self.module_repository.find_by_id(ModuleId(module_id))
        if not module:
            raise CatalogModuleNotFoundError(module_id)
        return module


class CourseUseCase:
    """Create, update, soft-delete and restore courses."""

    def __init__(self, course_repository: CourseRepositoryProtocol, uow: UnitOfWork) -> None:
        self.course_repository = course_repository
        self.uow = uow

    def create_course(self, name: str, description: str | None = None) -> Course:
        with self.uow:
            course = self.course_repository.save(Course.create(name, description))
            self.uow.commit()

        logger.info("course_created", course_id=course.id.value)
        return course

    def update_course(
        self, course_id: int, name: str | None = None, description: str | None = None
    ) -> Course:
        with self.uow:
            course = self._get(course_id)
            course.update(name=name, description=description)
            course = self.course_repository.save(course)
            self.uow.commit()

        logger.info("course_updated", course_id=course_id)
        return course

    def soft_delete_course(self, course_id: int) -> Course:
        """
        Flag a course as deleted. Its lessons are left untouched.

        Raises:
            CourseNotFoundError: If the course doesn't exist
            AlreadyDeletedError: If the course is already deleted
        """
        with self.uow:
            course = self._get(course_id)
            course.soft_delete()
            course = self.course_repository.save(course)
            self.uow.commit()

        logger.info("course_soft_deleted", course_id=course_id)
        return course

    def restore_course(self, course_id: int) -> Course:
        with self.uow:
            course = self._get(course_id)
            course.restore()
            course = self.course_repository.save(course)
            self.uow.commit()

        logger.info("course_restored", course_id=course_id)
        return course

    def get_course(self, course_id: int) -> Course:
        return self._get(course_id)

    def list_courses(self, include_deleted: bool = False) -> list[Course]:
        return self.course_repository.find_all(include_deleted=include_deleted)

    def _get(self, course_id: int) -> Course:
        course = self.course_repository.find_by_id(CourseId(course_id))
        if not course:
            raise CourseNotFoundError(course_id)
        return course
