"""Mapper for User ORM ↔ Domain conversion."""

from academy.domain.common.clock import ensure_utc
from academy.domain.common.value_objects.ids import TeachingGroupId, UserId
from academy.domain.identity.entities.user import User
from academy.models import User as UserORM


class UserMapper:
    """Mapper for User ORM ↔ Domain conversion."""

    def to_domain(self, orm_model: UserORM) -> User:
        """Convert ORM model to domain entity."""
        return User.create_with_id(
            id=UserId(orm_model.id),
            name=orm_model.name,
            email=orm_model.email,
            password_hash=orm_model.password_hash,
            teaching_group_id=TeachingGroupId(orm_model.teaching_group_id),
            role=orm_model.role,
            created_at=ensure_utc(orm_model.created_at),
            updated_at=ensure_utc(orm_model.updated_at),
        )

    def to_orm(self, domain_entity: User, orm_model: UserORM | None = None) -> UserORM:
        """Convert domain entity to ORM model."""
        if orm_model:
            orm_model.name = domain_entity.name
            orm_model.email = domain_entity.email
            orm_model.password_hash = domain_entity.password_hash
            orm_model.teaching_group_id = domain_entity.teaching_group_id.value
            orm_model.role = domain_entity.role
            orm_model.updated_at = domain_entity.updated_at
            return orm_model

        return UserORM(
            id=domain_entity.id.value if domain_entity.id.value != 0 else None,
            name=domain_entity.name,
            email=domain_entity.email,
            password_hash=domain_entity.password_hash,
            teaching_group_id=domain_entity.teaching_group_id.value,
            role=domain_entity.role,
            created_at=domain_entity.created_at,
            updated_at=domain_entity.updated_at,
        )
