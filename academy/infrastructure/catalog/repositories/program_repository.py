"""Repository for Program domain entities."""

from sqlalchemy import select
from sqlalchemy.orm import Session

from academy.domain.catalog.entities.program import Program
from academy.domain.catalog.exceptions import ProgramNotFoundError
from academy.domain.common.value_objects.ids import ProgramId
from academy.infrastructure.catalog.mappers.program_mapper import ProgramMapper
from academy.infrastructure.common.persistence import guarded_write
from academy.models import Program as ProgramORM


class ProgramRepository:
    """Repository for Program domain entities."""

    def __init__(self, db: Session) -> None:
        self.db = db
        self.mapper = ProgramMapper()

    def find_by_id(self, program_id: ProgramId) -> Program | None:
        orm_model = self.db.get(ProgramORM, program_id.value)
        return self.mapper.to_domain(orm_model) if orm_model else None

    def find_all(self) -> list[Program]:
        stmt = select(ProgramORM).order_by(ProgramORM.name, ProgramORM.id)
        orm_models = self.db.execute(stmt).scalars().all()
        return [self.mapper.to_domain(orm) for orm in orm_models]

    def save(self, program: Program) -> Program:
        """
        Save a program entity (create or update).

        Args:
            program: The program entity to save

        Returns:
            Saved program entity with database-generated values
        """
        if program.id.value == 0:
            orm_model = self.mapper.to_orm(program)
            with guarded_write(self.db, "Program"):
                self.db.add(orm_model)
            return self.mapper.to_domain(orm_model)

        orm_model = self.db.get(ProgramORM, program.id.value)
        if not orm_model:
            raise ProgramNotFoundError(program.id.value)
        with guarded_write(self.db, "Program", program.id.value):
            self.mapper.to_orm(program, orm_model)
        return self.mapper.to_domain(orm_model)
