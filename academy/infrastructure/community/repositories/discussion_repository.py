"""Repository for Discussion domain entities."""

from sqlalchemy import select
from sqlalchemy.orm import Session

from academy.domain.common.value_objects.ids import DiscussionId, LessonId
from academy.domain.community.entities.discussion import Discussion
from academy.domain.community.exceptions import DiscussionNotFoundError
from academy.infrastructure.common.persistence import guarded_write
from academy.infrastructure.community.mappers.discussion_mapper import DiscussionMapper
from academy.models import Discussion as DiscussionORM


class DiscussionRepository:
    """Repository for Discussion domain entities."""

    def __init__(self, db: Session) -> None:
        self.db = db
        self.mapper = DiscussionMapper()

    def find_by_id(self, discussion_id: DiscussionId) -> Discussion | None:
        orm_model = self.db.get(DiscussionORM, discussion_id.value)
        return self.mapper.to_domain(orm_model) if orm_model else None

    def find_by_lesson(self, lesson_id: LessonId) -> list[Discussion]:
        """Load a lesson's whole forest in one flat query."""
        stmt = (
            select(DiscussionORM)
            .where(DiscussionORM.lesson_id == lesson_id.value)
            .order_by(DiscussionORM.created_at, DiscussionORM.id)
        )
        return [self.mapper.to_domain(orm) for orm in self.db.execute(stmt).scalars().all()]

    def save(self, discussion: Discussion) -> Discussion:
        if discussion.id.value == 0:
            orm_model = self.mapper.to_orm(discussion)
            with guarded_write(self.db, "Discussion"):
                self.db.add(orm_model)
            return self.mapper.to_domain(orm_model)

        orm_model = self.db.get(DiscussionORM, discussion.id.value)
        if not orm_model:
            raise DiscussionNotFoundError(discussion.id.value)
        with guarded_write(self.db, "Discussion", discussion.id.value):
            self.mapper.to_orm(discussion, orm_model)
        return self.mapper.to_domain(orm_model)
