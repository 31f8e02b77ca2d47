"""Mapper for Program ORM ↔ Domain conversion."""

from academy.domain.catalog.entities.program import Program
from academy.domain.common.clock import ensure_utc
from academy.domain.common.value_objects.ids import ProgramId
from academy.models import Program as ProgramORM


class ProgramMapper:
    """Mapper for Program ORM ↔ Domain conversion."""

    def to_domain(self, orm_model: ProgramORM) -> Program:
        """Convert ORM model to domain entity."""
        return Program.create_with_id(
            id=ProgramId(orm_model.id),
            name=orm_model.name,
            price=orm_model.price,
            program_type=orm_model.program_type,
            created_at=ensure_utc(orm_model.created_at),
            updated_at=ensure_utc(orm_model.updated_at),
        )

    def to_orm(self, domain_entity: Program, orm_model: ProgramORM | None = None) -> ProgramORM:
        """Convert domain entity to ORM model."""
        if orm_model:
            # Update existing
            orm_model.name = domain_entity.name
            orm_model.price = domain_entity.price
            orm_model.program_type = domain_entity.program_type
            orm_model.updated_at = domain_entity.updated_at
            return orm_model

        # Create new
        return ProgramORM(
            id=domain_entity.id.value if domain_entity.id.value != 0 else None,
            name=domain_entity.name,
            price=domain_entity.price,
            program_type=domain_entity.program_type,
            created_at=domain_entity.created_at,
            updated_at=domain_entity.updated_at,
        )
