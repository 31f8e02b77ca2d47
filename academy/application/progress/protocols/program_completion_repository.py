"""Protocol for ProgramCompletion repository."""

from typing import Protocol

from academy.domain.common.value_objects.ids import ProgramId, UserId
from academy.domain.progress.entities.program_completion import ProgramCompletion


class ProgramCompletionRepositoryProtocol(Protocol):
    """Protocol for ProgramCompletion repository operations."""

    def find_by_pair(
        self, user_id: UserId, program_id: ProgramId, for_update: bool = False
    ) -> ProgramCompletion | None:
        """
        Find the completion record of a (user, program) pair.

        Args:
            user_id: The user ID
            program_id: The program ID
            for_update: Lock the row for the rest of the transaction

        Returns:
            ProgramCompletion entity if found, None otherwise
        """
        ...

    def save(self, completion: ProgramCompletion) -> ProgramCompletion:
        """
        Save a completion entity (create or update).

        Raises:
            ConflictError: If a record already exists for the pair
            ConcurrencyError: If the row was changed by another transaction
        """
        ...
