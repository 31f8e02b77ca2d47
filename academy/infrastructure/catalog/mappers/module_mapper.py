"""Mappers for Module and Course ORM ↔ Domain conversion."""

from academy.domain.catalog.entities.course import Course
from academy.domain.catalog.entities.module import Module
from academy.domain.common.clock import ensure_utc
from academy.domain.common.value_objects.ids import CourseId, ModuleId
from academy.models import Course as CourseORM
from academy.models import Module as ModuleORM


class ModuleMapper:
    """Mapper for Module ORM ↔ Domain conversion."""

    def to_domain(self, orm_model: ModuleORM) -> Module:
        return Module.create_with_id(
            id=ModuleId(orm_model.id),
            name=orm_model.name,
            description=orm_model.description,
            is_deleted=orm_model.is_deleted,
            created_at=ensure_utc(orm_model.created_at),
            updated_at=ensure_utc(orm_model.updated_at),
        )

    def to_orm(self, domain_entity: Module, orm_model: ModuleORM | None = None) -> ModuleORM:
        if orm_model:
            orm_model.name = domain_entity.name
            orm_model.description = domain_entity.description
            orm_model.is_deleted = domain_entity.is_deleted
            orm_model.updated_at = domain_entity.updated_at
            return orm_model

        return ModuleORM(
            id=domain_entity.id.value if domain_entity.id.value != 0 else None,
            name=domain_entity.name,
            description=domain_entity.description,
            is_deleted=domain_entity.is_deleted,
            created_at=domain_entity.created_at,
            updated_at=domain_entity.updated_at,
        )


class CourseMapper:
    """Mapper for Course ORM ↔ Domain conversion."""

    def to_domain(self, orm_model: CourseORM) -> Course:
        return Course.create_with_id(
            id=CourseId(orm_model.id),
            name=orm_model.name,
            description=orm_model.description,
            is_deleted=orm_model.is_deleted,
            created_at=ensure_utc(orm_model.created_at),
            updated_at=ensure_utc(orm_model.updated_at),
        )

    def to_orm(self, domain_entity: Course, orm_model: CourseORM | None = None) -> CourseORM:
        if orm_model:
            orm_model.name = domain_entity.name
            orm_model.description = domain_entity.description
            orm_model.is_deleted = domain_entity.is_deleted
            orm_model.updated_at = domain_entity.updated_at
            return orm_model

        return CourseORM(
            id=domain_entity.id.value if domain_entity.id.value != 0 else None,
            name=domain_entity.name,
            description=domain_entity.description,
            is_deleted=domain_entity.is_deleted,
            created_at=domain_entity.created_at,
            updated_at=domain_entity.updated_at,
        )
