"""Use case for certificate issuance."""

import structlog

from academy.application.common.unit_of_work import UnitOfWork
from academy.application.progress.protocols.certificate_file_generator import (
    CertificateFileGeneratorProtocol,
)
from academy.application.progress.protocols.certificate_repository import (
    CertificateRepositoryProtocol,
)
from academy.application.progress.protocols.program_completion_repository import (
    ProgramCompletionRepositoryProtocol,
)
from academy.domain.common.value_objects.ids import ProgramId, UserId
from academy.domain.progress.entities.certificate import Certificate
from academy.domain.progress.exceptions import (
    CertificateAlreadyIssuedError,
    CertificateNotFoundError,
    CompletionNotFinishedError,
)

logger = structlog.get_logger(__name__)


class CertificateUseCase:
    """Issue and read certificates. At most one certificate exists per (user, program)."""

    def __init__(
        self,
        certificate_repository: CertificateRepositoryProtocol,
        completion_repository: ProgramCompletionRepositoryProtocol,
        file_generator: CertificateFileGeneratorProtocol,
        uow: UnitOfWork,
    ) -> None:
        self.certificate_repository = certificate_repository
        self.completion_repository = completion_repository
        self.file_generator = file_generator
        self.uow = uow

    def issue_certificate(
        self, user_id: int, program_id: int, url: str | None = None
    ) -> Certificate:
        """
        Issue the certificate of a completed program.

        Args:
            user_id: ID of the user
            program_id: ID of the program
            url: Location of the certificate document; generated when omitted

        Returns:
            The issued certificate

        Raises:
            CompletionNotFinishedError: If the pair's completion is missing or not completed
            CertificateAlreadyIssuedError: If the pair already has a certificate
        """
        user_id_vo = UserId(user_id)
        program_id_vo = ProgramId(program_id)

        with self.uow.serializable():
            completion = self.completion_repository.find_by_pair(user_id_vo, program_id_vo)
            if completion is None or not completion.is_completed():
                raise CompletionNotFinishedError(
                    user_id, program_id, completion.status.value if completion else None
                )
            if self.certificate_repository.find_by_pair(user_id_vo, program_id_vo):
                raise CertificateAlreadyIssuedError(user_id, program_id)

            if url is None:
                url = self.file_generator.generate(user_id_vo, program_id_vo)
            certificate = self.certificate_repository.save(
                Certificate.create(user_id_vo, program_id_vo, url)
            )
            certificate.record_issued()
            self.uow.track(certificate)
            self.uow.commit()

        logger.info(
            "certificate_issued",
            certificate_id=certificate.id.value,
            user_id=user_id,
            program_id=program_id,
        )
        return certificate

    def get_certificate(self, user_id: int, program_id: int) -> Certificate:
        certificate = self.certificate_repository.find_by_pair(
            UserId(user_id), ProgramId(program_id)
        )
        if not certificate:
            raise CertificateNotFoundError(user_id, program_id)
        return certificate

    def list_certificates(self, user_id: int) -> list[Certificate]:
        return self.certificate_repository.find_by_user(UserId(user_id))
