"""Mapper for BlogPost ORM ↔ Domain conversion."""

from academy.domain.common.clock import ensure_utc
from academy.domain.common.value_objects.ids import BlogPostId, UserId
from academy.domain.community.entities.blog_post import BlogPost
from academy.models import BlogPost as BlogPostORM


class BlogPostMapper:
    """Mapper for BlogPost ORM ↔ Domain conversion."""

    def to_domain(self, orm_model: BlogPostORM) -> BlogPost:
        return BlogPost.create_with_id(
            id=BlogPostId(orm_model.id),
            student_id=UserId(orm_model.student_id),
            title=orm_model.title,
            body=orm_model.body,
            status=orm_model.status,
            created_at=ensure_utc(orm_model.created_at),
            updated_at=ensure_utc(orm_model.updated_at),
        )

    def to_orm(self, domain_entity: BlogPost, orm_model: BlogPostORM | None = None) -> BlogPostORM:
        if orm_model:
            orm_model.title = domain_entity.title
            orm_model.body = domain_entity.body
            orm_model.status = domain_entity.status
            orm_model.updated_at = domain_entity.updated_at
            return orm_model

        return BlogPostORM(
            id=domain_entity.id.value if domain_entity.id.value != 0 else None,
            student_id=domain_entity.student_id.value,
            title=domain_entity.title,
            body=domain_entity.body,
            status=domain_entity.status,
            created_at=domain_entity.created_at,
            updated_at=domain_entity.updated_at,
        )
