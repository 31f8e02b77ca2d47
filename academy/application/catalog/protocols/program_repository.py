"""Protocol for Program repository."""

from typing import Protocol

from academy.domain.catalog.entities.program import Program
from academy.domain.common.value_objects.ids import ProgramId


class ProgramRepositoryProtocol(Protocol):
    """Protocol for Program repository operations."""

    def find_by_id(self, program_id: ProgramId) -> Program | None:
        """
        Find a program by ID.

        Args:
            program_id: The program ID

        Returns:
            Program entity if found, None otherwise
        """
        ...

    def find_all(self) -> list[Program]:
        """Get all programs ordered by name."""
        ...

    def save(self, program: Program) -> Program:
        """
        Save a program entity (create or update).

        Returns:
            Saved program entity with database-generated values
        """
        ...
