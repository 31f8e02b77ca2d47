"""Repositories for catalog Module and Course entities."""

from sqlalchemy import select
from sqlalchemy.orm import Session

from academy.domain.catalog.entities.course import Course
from academy.domain.catalog.entities.module import Module
from academy.domain.catalog.exceptions import CatalogModuleNotFoundError, CourseNotFoundError
from academy.domain.common.value_objects.ids import CourseId, ModuleId
from academy.infrastructure.catalog.mappers.module_mapper import CourseMapper, ModuleMapper
from academy.infrastructure.common.persistence import guarded_write
from academy.models import Course as CourseORM
from academy.models import Module as ModuleORM


class ModuleRepository:
    """Repository for Module domain entities."""

    def __init__(self, db: Session) -> None:
        self.db = db
        self.mapper = ModuleMapper()

    def find_by_id(self, module_id: ModuleId) -> Module | None:
        orm_model = self.db.get(ModuleORM, module_id.value)
        return self.mapper.to_domain(orm_model) if orm_model else None

    def find_all(self, include_deleted: bool = False) -> list[Module]:
        stmt = select(ModuleORM).order_by(ModuleORM.name, ModuleORM.id)
        if not include_deleted:
            stmt = stmt.where(ModuleORM.is_deleted.is_(False))
        return [self.mapper.to_domain(orm) for orm in self.db.execute(stmt).scalars().all()]

    def save(self, module: Module) -> Module:
        if module.id.value == 0:
            orm_model = self.mapper.to_orm(module)
            with guarded_write(self.db, "Module"):
                self.db.add(orm_model)
            return self.mapper.to_domain(orm_model)

        orm_model = self.db.get(ModuleORM, module.id.value)
        if not orm_model:
            raise CatalogModuleNotFoundError(module.id.value)
        with guarded_write(self.db, "Module", module.id.value):
            self.mapper.to_orm(module, orm_model)
        return self.mapper.to_domain(orm_model)


class CourseRepository:
    """Repository for Course domain entities."""

    def __init__(self, db: Session) -> None:
        self.db = db
        self.mapper = CourseMapper()

    def find_by_id(self, course_id: CourseId) -> Course | None:
        orm_model = self.db.get(CourseORM, course_id.value)
        return self.mapper.to_domain(orm_model) if orm_model else None

    def find_all(self, include_deleted: bool = False) -> list[Course]:
        stmt = select(CourseORM).order_by(CourseORM.name, CourseORM.id)
        if not include_deleted:
            stmt = stmt.where(CourseORM.is_deleted.is_(False))
        return [self.mapper.to_domain(orm) for orm in self.db.execute(stmt).scalars().all()]

    def save(self, course: Course) -> Course:
        if course.id.value == 0:
            orm_model = self.mapper.to_orm(course)
            with guarded_write(self.db, "Course"):
                self.db.add(orm_model)
            return self.mapper.to_domain(orm_model)

        orm_model = self.db.get(CourseORM, course.id.value)
        if not orm_model:
            raise CourseNotFoundError(course.id.value)
        with guarded_write(self.db, "Course", course.id.value):
            self.mapper.to_orm(course, orm_model)
        return self.mapper.to_domain(orm_model)
