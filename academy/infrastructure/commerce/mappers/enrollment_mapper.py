"""Mapper for Enrollment ORM ↔ Domain conversion."""

from academy.domain.commerce.entities.enrollment import Enrollment
from academy.domain.common.clock import ensure_utc
from academy.domain.common.value_objects.ids import EnrollmentId, ProgramId, UserId
from academy.models import Enrollment as EnrollmentORM


class EnrollmentMapper:
    """Mapper for Enrollment ORM ↔ Domain conversion."""

    def to_domain(self, orm_model: EnrollmentORM) -> Enrollment:
        """Convert ORM model to domain entity."""
        return Enrollment.create_with_id(
            id=EnrollmentId(orm_model.id),
            user_id=UserId(orm_model.user_id),
            program_id=ProgramId(orm_model.program_id),
            status=orm_model.status,
            created_at=ensure_utc(orm_model.created_at),
            updated_at=ensure_utc(orm_model.updated_at),
            version=orm_model.version,
        )

    def to_orm(
        self, domain_entity: Enrollment, orm_model: EnrollmentORM | None = None
    ) -> EnrollmentORM:
        """Convert domain entity to ORM model. The version column is managed by SQLAlchemy."""
        if orm_model:
            # Only the status moves after creation
            orm_model.status = domain_entity.status
            orm_model.updated_at = domain_entity.updated_at
            return orm_model

        return EnrollmentORM(
            id=domain_entity.id.value if domain_entity.id.value != 0 else None,
            user_id=domain_entity.user_id.value,
            program_id=domain_entity.program_id.value,
            status=domain_entity.status,
            created_at=domain_entity.created_at,
            updated_at=domain_entity.updated_at,
        )
