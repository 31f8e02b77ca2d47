"""Mapper for Discussion ORM ↔ Domain conversion."""

from academy.domain.common.clock import ensure_utc
from academy.domain.common.value_objects.ids import DiscussionId, LessonId
from academy.domain.community.entities.discussion import Discussion
from academy.models import Discussion as DiscussionORM


class DiscussionMapper:
    def to_domain(self, orm_model: DiscussionORM) -> Discussion:
        return Discussion.create_with_id(
            id=DiscussionId(orm_model.id),
            lesson_id=LessonId(orm_model.lesson_id),
            body=orm_model.body,
            parent_id=DiscussionId(orm_model.parent_id) if orm_model.parent_id else None,
            created_at=ensure_utc(orm_model.created_at),
            updated_at=ensure_utc(orm_model.updated_at),
        )

    def to_orm(
        self, domain_entity: Discussion, orm_model: DiscussionORM | None = None
    ) -> DiscussionORM:
        if orm_model:
            orm_model.body = domain_entity.body
            orm_model.updated_at = domain_entity.updated_at
            return orm_model

        return DiscussionORM(
            id=domain_entity.id.value if domain_entity.id.value != 0 else None,
            lesson_id=domain_entity.lesson_id.value,
            parent_id=domain_entity.parent_id.value if domain_entity.parent_id else None,
            body=domain_entity.body,
            created_at=domain_entity.created_at,
            updated_at=domain_entity.updated_at,
        )
