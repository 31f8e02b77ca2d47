"""Mapper for TeachingGroup ORM ↔ Domain conversion."""

from academy.domain.common.clock import ensure_utc
from academy.domain.common.value_objects.ids import TeachingGroupId
from academy.domain.identity.entities.teaching_group import TeachingGroup
from academy.models import TeachingGroup as TeachingGroupORM


class TeachingGroupMapper:
    def to_domain(self, orm_model: TeachingGroupORM) -> TeachingGroup:
        return TeachingGroup.create_with_id(
            id=TeachingGroupId(orm_model.id),
            slug=orm_model.slug,
            created_at=ensure_utc(orm_model.created_at),
            updated_at=ensure_utc(orm_model.updated_at),
        )

    def to_orm(
        self, domain_entity: TeachingGroup, orm_model: TeachingGroupORM | None = None
    ) -> TeachingGroupORM:
        if orm_model:
            orm_model.slug = domain_entity.slug
            orm_model.updated_at = domain_entity.updated_at
            return orm_model

        return TeachingGroupORM(
            id=domain_entity.id.value if domain_entity.id.value != 0 else None,
            slug=domain_entity.slug,
            created_at=domain_entity.created_at,
            updated_at=domain_entity.updated_at,
        )
