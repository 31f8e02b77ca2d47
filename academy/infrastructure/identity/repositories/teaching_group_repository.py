"""Repository for TeachingGroup domain entities."""

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from academy.domain.common.value_objects.ids import TeachingGroupId
from academy.domain.identity.entities.teaching_group import TeachingGroup
from academy.domain.identity.exceptions import (
    TeachingGroupNotFoundError,
    TeachingGroupSlugTakenError,
)
from academy.infrastructure.common.persistence import guarded_write
from academy.infrastructure.identity.mappers.teaching_group_mapper import TeachingGroupMapper
from academy.models import TeachingGroup as TeachingGroupORM


class TeachingGroupRepository:
    def __init__(self, db: Session) -> None:
        self.db = db
        self.mapper = TeachingGroupMapper()

    def find_by_id(self, teaching_group_id: TeachingGroupId) -> TeachingGroup | None:
        orm_model = self.db.get(TeachingGroupORM, teaching_group_id.value)
        return self.mapper.to_domain(orm_model) if orm_model else None

    def find_by_slug(self, slug: str) -> TeachingGroup | None:
        stmt = select(TeachingGroupORM).where(TeachingGroupORM.slug == slug)
        orm_model = self.db.execute(stmt).scalar_one_or_none()
        return self.mapper.to_domain(orm_model) if orm_model else None

    def save(self, teaching_group: TeachingGroup) -> TeachingGroup:
        def slug_taken(_: IntegrityError) -> TeachingGroupSlugTakenError:
            return TeachingGroupSlugTakenError(teaching_group.slug)

        if teaching_group.id.value == 0:
            orm_model = self.mapper.to_orm(teaching_group)
            with guarded_write(self.db, "TeachingGroup", on_conflict=slug_taken):
                self.db.add(orm_model)
            return self.mapper.to_domain(orm_model)

        orm_model = self.db.get(TeachingGroupORM, teaching_group.id.value)
        if not orm_model:
            raise TeachingGroupNotFoundError(teaching_group.id.value)
        with guarded_write(
            self.db, "TeachingGroup", teaching_group.id.value, on_conflict=slug_taken
        ):
            self.mapper.to_orm(teaching_group, orm_model)
        return self.mapper.to_domain(orm_model)
