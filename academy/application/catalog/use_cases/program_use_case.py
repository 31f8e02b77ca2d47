"""Use case for program operations."""

import structlog

from academy.application.catalog.protocols.program_repository import ProgramRepositoryProtocol
from academy.application.common.unit_of_work import UnitOfWork
from academy.domain.catalog.entities.program import Program
from academy.domain.catalog.exceptions import ProgramNotFoundError
from academy.domain.common.value_objects.ids import ProgramId

logger = structlog.get_logger(__name__)


class ProgramUseCase:
    """Use case for program CRUD operations. Programs are never deleted."""

    def __init__(self, program_repository: ProgramRepositoryProtocol, uow: UnitOfWork) -> None:
        """Initialize use case with repository protocols."""
        self.program_repository = program_repository
        self.uow = uow

    def create_program(self, name: str, price: int, program_type: str) -> Program:
        """
        Create a new program.

        Args:
            name: Program name
            price: Price in minor currency units, zero or more
            program_type: Free-form program kind (e.g. "bootcamp")

        Returns:
            Created program domain entity

        Raises:
            ValidationError: If the name is empty or the price is negative
        """
        with self.uow:
            program = self.program_repository.save(Program.create(name, price, program_type))
            self.uow.commit()

        logger.info("program_created", program_id=program.id.value, price=program.price)
        return program

    def update_program(
        self,
        program_id: int,
        name: str | None = None,
        price: int | None = None,
        program_type: str | None = None,
    ) -> Program:
        """
        Update a program. ``None`` leaves a field untouched.

        Raises:
            ProgramNotFoundError: If the program doesn't exist
            ValidationError: If a new value is invalid
        """
        with self.uow:
            program = self._get(program_id)
            program.update(name=name, price=price, program_type=program_type)
            program = self.program_repository.save(program)
            self.uow.commit()

        logger.info("program_updated", program_id=program_id)
        return program

    def get_program(self, program_id: int) -> Program:
        return self._get(program_id)

    def list_programs(self) -> list[Program]:
        return self.program_repository.find_all()

    def _get(self, program_id: int) -> Program:
        program = self.program_repository.find_by_id(ProgramId(program_id))
        if not program:
            raise ProgramNotFoundError(program_id)
        return program
