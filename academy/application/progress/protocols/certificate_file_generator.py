"""Protocol for the certificate file collaborator."""

from typing import Protocol

from academy.domain.common.value_objects.ids import ProgramId, UserId


class CertificateFileGeneratorProtocol(Protocol):
    """Produces (or locates) the certificate document and returns its URL."""

    def generate(self, user_id: UserId, program_id: ProgramId) -> str:
        ...
