"""Repository for ProgramCompletion domain entities."""

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from academy.domain.common.exceptions import DuplicateError, NotFoundError
from academy.domain.common.value_objects.ids import ProgramId, UserId
from academy.domain.progress.entities.program_completion import ProgramCompletion
from academy.infrastructure.common.persistence import ensure_read_version, guarded_write
from academy.infrastructure.progress.mappers.program_completion_mapper import (
    ProgramCompletionMapper,
)
from academy.models import ProgramCompletion as ProgramCompletionORM


class ProgramCompletionRepository:
    """Repository for ProgramCompletion domain entities."""

    def __init__(self, db: Session) -> None:
        self.db = db
        self.mapper = ProgramCompletionMapper()

    def find_by_pair(
        self, user_id: UserId, program_id: ProgramId, for_update: bool = False
    ) -> ProgramCompletion | None:
        stmt = select(ProgramCompletionORM).where(
            ProgramCompletionORM.user_id == user_id.value,
            ProgramCompletionORM.program_id == program_id.value,
        )
        if for_update:
            stmt = stmt.with_for_update().execution_options(populate_existing=True)
        orm_model = self.db.execute(stmt).scalar_one_or_none()
        return self.mapper.to_domain(orm_model) if orm_model else None

    def save(self, completion: ProgramCompletion) -> ProgramCompletion:
        """
        Save a completion entity (create or update).

        Raises:
            DuplicateError: If a record already exists for the pair
            ConcurrencyError: If the row was changed by another transaction
        """

        def duplicate(_: IntegrityError) -> DuplicateError:
            return DuplicateError(
                "ProgramCompletion",
                {"user_id": completion.user_id.value, "program_id": completion.program_id.value},
            )

        if completion.id.value == 0:
            orm_model = self.mapper.to_orm(completion)
            with guarded_write(self.db, "ProgramCompletion", on_conflict=duplicate):
                self.db.add(orm_model)
            return self.mapper.to_domain(orm_model)

        orm_model = self.db.get(
            ProgramCompletionORM, completion.id.value, populate_existing=True
        )
        if not orm_model:
            raise NotFoundError("ProgramCompletion", completion.id.value)
        ensure_read_version(
            "ProgramCompletion", completion.id.value, completion.version, orm_model.version
        )
        with guarded_write(self.db, "ProgramCompletion", completion.id.value):
            self.mapper.to_orm(completion, orm_model)
        completion.version = orm_model.version
        return self.mapper.to_domain(orm_model)
