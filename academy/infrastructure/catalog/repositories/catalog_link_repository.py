"""Repository for the catalog association tables."""

from sqlalchemy import ColumnElement, delete, exists, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from academy.domain.catalog.entities.course import Course
from academy.domain.catalog.entities.module import Module
from academy.domain.catalog.entities.program import Program
from academy.domain.common.value_objects.ids import CourseId, ModuleId, ProgramId
from academy.infrastructure.catalog.mappers.module_mapper import CourseMapper, ModuleMapper
from academy.infrastructure.catalog.mappers.program_mapper import ProgramMapper
from academy.infrastructure.common.persistence import guarded_write
from academy.models import Course as CourseORM
from academy.models import Module as ModuleORM
from academy.models import ModuleCourse as ModuleCourseORM
from academy.models import Program as ProgramORM
from academy.models import ProgramModule as ProgramModuleORM


class CatalogLinkRepository:
    """Program↔module and module↔course links, both directions queryable."""

    def __init__(self, db: Session) -> None:
        self.db = db
        self.program_mapper = ProgramMapper()
        self.module_mapper = ModuleMapper()
        self.course_mapper = CourseMapper()

    def link_module_to_program(self, program_id: ProgramId, module_id: ModuleId) -> bool:
        if self.db.get(ProgramModuleORM, (program_id.value, module_id.value)):
            return False
        return self._insert_link(
            ProgramModuleORM(program_id=program_id.value, module_id=module_id.value),
            ProgramModuleORM.program_id == program_id.value,
            ProgramModuleORM.module_id == module_id.value,
        )

    def unlink_module_from_program(self, program_id: ProgramId, module_id: ModuleId) -> bool:
        stmt = delete(ProgramModuleORM).where(
            ProgramModuleORM.program_id == program_id.value,
            ProgramModuleORM.module_id == module_id.value,
        )
        result = self.db.execute(stmt)
        return result.rowcount > 0

    def link_course_to_module(self, module_id: ModuleId, course_id: CourseId) -> bool:
        if self.db.get(ModuleCourseORM, (module_id.value, course_id.value)):
            return False
        return self._insert_link(
            ModuleCourseORM(module_id=module_id.value, course_id=course_id.value),
            ModuleCourseORM.module_id == module_id.value,
            ModuleCourseORM.course_id == course_id.value,
        )

    def unlink_course_from_module(self, module_id: ModuleId, course_id: CourseId) -> bool:
        stmt = delete(ModuleCourseORM).where(
            ModuleCourseORM.module_id == module_id.value,
            ModuleCourseORM.course_id == course_id.value,
        )
        result = self.db.execute(stmt)
        return result.rowcount > 0

    def find_modules_for_program(
        self, program_id: ProgramId, include_deleted: bool = False
    ) -> list[Module]:
        stmt = (
            select(ModuleORM)
            .join(ProgramModuleORM, ProgramModuleORM.module_id == ModuleORM.id)
            .where(ProgramModuleORM.program_id == program_id.value)
            .order_by(ModuleORM.name, ModuleORM.id)
        )
        if not include_deleted:
            stmt = stmt.where(ModuleORM.is_deleted.is_(False))
        return [self.module_mapper.to_domain(orm) for orm in self.db.execute(stmt).scalars().all()]

    def find_courses_for_module(
        self, module_id: ModuleId, include_deleted: bool = False
    ) -> list[Course]:
        stmt = (
            select(CourseORM)
            .join(ModuleCourseORM, ModuleCourseORM.course_id == CourseORM.id)
            .where(ModuleCourseORM.module_id == module_id.value)
            .order_by(CourseORM.name, CourseORM.id)
        )
        if not include_deleted:
            stmt = stmt.where(CourseORM.is_deleted.is_(False))
        return [self.course_mapper.to_domain(orm) for orm in self.db.execute(stmt).scalars().all()]

    def find_programs_for_module(self, module_id: ModuleId) -> list[Program]:
        stmt = (
            select(ProgramORM)
            .join(ProgramModuleORM, ProgramModuleORM.program_id == ProgramORM.id)
            .where(ProgramModuleORM.module_id == module_id.value)
            .order_by(ProgramORM.name, ProgramORM.id)
        )
        return [self.program_mapper.to_domain(orm) for orm in self.db.execute(stmt).scalars().all()]

    def _insert_link(
        self, link: ProgramModuleORM | ModuleCourseORM, *pair: ColumnElement[bool]
    ) -> bool:
        """
        Insert a link row inside a savepoint.

        A pair committed by another transaction between the lookup and the
        insert counts as already linked. Any other integrity error propagates.
        """
        try:
            with guarded_write(self.db, type(link).__name__):
                self.db.add(link)
        except IntegrityError:
            if not self.db.execute(select(exists().where(*pair))).scalar():
                raise
            return False
        return True
