"""Mapper for ProgramCompletion ORM ↔ Domain conversion."""

from academy.domain.common.clock import ensure_utc
from academy.domain.common.value_objects.ids import ProgramCompletionId, ProgramId, UserId
from academy.domain.progress.entities.program_completion import ProgramCompletion
from academy.models import ProgramCompletion as ProgramCompletionORM


class ProgramCompletionMapper:
    """Mapper for ProgramCompletion ORM ↔ Domain conversion."""

    def to_domain(self, orm_model: ProgramCompletionORM) -> ProgramCompletion:
        return ProgramCompletion.create_with_id(
            id=ProgramCompletionId(orm_model.id),
            user_id=UserId(orm_model.user_id),
            program_id=ProgramId(orm_model.program_id),
            status=orm_model.status,
            started_at=ensure_utc(orm_model.started_at),
            finished_at=ensure_utc(orm_model.finished_at),
            created_at=ensure_utc(orm_model.created_at),
            updated_at=ensure_utc(orm_model.updated_at),
            version=orm_model.version,
        )

    def to_orm(
        self, domain_entity: ProgramCompletion, orm_model: ProgramCompletionORM | None = None
    ) -> ProgramCompletionORM:
        if orm_model:
            orm_model.status = domain_entity.status
            orm_model.started_at = domain_entity.started_at
            orm_model.finished_at = domain_entity.finished_at
            orm_model.updated_at = domain_entity.updated_at
            return orm_model

        return ProgramCompletionORM(
            id=domain_entity.id.value if domain_entity.id.value != 0 else None,
            user_id=domain_entity.user_id.value,
            program_id=domain_entity.program_id.value,
            status=domain_entity.status,
            started_at=domain_entity.started_at,
            finished_at=domain_entity.finished_at,
            created_at=domain_entity.created_at,
            updated_at=domain_entity.updated_at,
        )
