"""Protocol for Certificate repository."""

from typing import Protocol

from academy.domain.common.value_objects.ids import ProgramId, UserId
from academy.domain.progress.entities.certificate import Certificate


class CertificateRepositoryProtocol(Protocol):
    """Protocol for Certificate repository operations."""

    def find_by_pair(self, user_id: UserId, program_id: ProgramId) -> Certificate | None:
        ...

    def find_by_user(self, user_id: UserId) -> list[Certificate]:
        """Get the certificates of a user, most recently issued first."""
        ...

    def save(self, certificate: Certificate) -> Certificate:
        """
        Insert a certificate.

        Raises:
            CertificateAlreadyIssuedError: If the store rejects a second one for the pair
        """
        ...
