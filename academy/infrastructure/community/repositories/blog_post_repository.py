"""Repository for BlogPost domain entities."""

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from academy.application.common.pagination import Pagination
from academy.domain.common.value_objects.ids import BlogPostId, UserId
from academy.domain.community.entities.blog_post import BlogPost, BlogPostStatus
from academy.domain.community.exceptions import BlogPostNotFoundError
from academy.infrastructure.common.persistence import guarded_write
from academy.infrastructure.community.mappers.blog_post_mapper import BlogPostMapper
from academy.models import BlogPost as BlogPostORM


class BlogPostRepository:
    """Repository for BlogPost domain entities."""

    def __init__(self, db: Session) -> None:
        self.db = db
        self.mapper = BlogPostMapper()

    def find_by_id(self, post_id: BlogPostId, for_update: bool = False) -> BlogPost | None:
        stmt = select(BlogPostORM).where(BlogPostORM.id == post_id.value)
        if for_update:
            stmt = stmt.with_for_update().execution_options(populate_existing=True)
        orm_model = self.db.execute(stmt).scalar_one_or_none()
        return self.mapper.to_domain(orm_model) if orm_model else None

    def find_published(self, pagination: Pagination) -> tuple[list[BlogPost], int]:
        """
        Get a page of published posts, newest first.

        Returns:
            Tuple of (posts on the page, total number of published posts)
        """
        published = BlogPostORM.status == BlogPostStatus.PUBLISHED
        total = self.db.execute(
            select(func.count()).select_from(BlogPostORM).where(published)
        ).scalar_one()

        stmt = (
            select(BlogPostORM)
            .where(published)
            .order_by(BlogPostORM.created_at.desc(), BlogPostORM.id.desc())
            .offset(pagination.offset)
            .limit(pagination.limit)
        )
        posts = [self.mapper.to_domain(orm) for orm in self.db.execute(stmt).scalars().all()]
        return posts, total

    def find_by_student(
        self, student_id: UserId, include_unpublished: bool = False
    ) -> list[BlogPost]:
        stmt = (
            select(BlogPostORM)
            .where(BlogPostORM.student_id == student_id.value)
            .order_by(BlogPostORM.created_at.desc(), BlogPostORM.id.desc())
        )
        if not include_unpublished:
            stmt = stmt.where(BlogPostORM.status == BlogPostStatus.PUBLISHED)
        return [self.mapper.to_domain(orm) for orm in self.db.execute(stmt).scalars().all()]

    def save(self, post: BlogPost) -> BlogPost:
        if post.id.value == 0:
            orm_model = self.mapper.to_orm(post)
            with guarded_write(self.db, "BlogPost"):
                self.db.add(orm_model)
            return self.mapper.to_domain(orm_model)

        orm_model = self.db.get(BlogPostORM, post.id.value)
        if not orm_model:
            raise BlogPostNotFoundError(post.id.value)
        with guarded_write(self.db, "BlogPost", post.id.value):
            self.mapper.to_orm(post, orm_model)
        return self.mapper.to_domain(orm_model)
