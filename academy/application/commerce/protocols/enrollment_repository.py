"""Protocol for Enrollment repository."""

from typing import Protocol

from academy.domain.commerce.entities.enrollment import Enrollment
from academy.domain.common.value_objects.ids import EnrollmentId, ProgramId, UserId


class EnrollmentRepositoryProtocol(Protocol):
    """Protocol for Enrollment repository operations."""

    def find_by_id(
        self, enrollment_id: EnrollmentId, for_update: bool = False
    ) -> Enrollment | None:
        """
        Find an enrollment by ID.

        Args:
            enrollment_id: The enrollment ID
            for_update: Lock the row (SELECT ... FOR UPDATE) for the transaction

        Returns:
            Enrollment entity if found, None otherwise
        """
        ...

    def find_open(
        self, user_id: UserId, program_id: ProgramId, for_update: bool = False
    ) -> Enrollment | None:
        """
        Find the non-cancelled enrollment of a (user, program) pair.

        Returns:
            The pending, active or completed enrollment, None if there is none
        """
        ...

    def find_by_user(self, user_id: UserId) -> list[Enrollment]:
        """Get all enrollments of a user, oldest first."""
        ...

    def save(self, enrollment: Enrollment) -> Enrollment:
        """
        Save an enrollment entity (create or update).

        Raises:
            ConflictError: If the store rejects a second open enrollment for the pair
            ConcurrencyError: If the row was changed by another transaction
        """
        ...
