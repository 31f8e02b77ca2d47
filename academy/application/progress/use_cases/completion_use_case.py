"""Use case for program completion progress."""

import structlog

from academy.application.commerce.protocols.enrollment_repository import (
    EnrollmentRepositoryProtocol,
)
from academy.application.common.unit_of_work import UnitOfWork
from academy.application.progress.protocols.program_completion_repository import (
    ProgramCompletionRepositoryProtocol,
)
from academy.application.progress.use_cases.certificate_use_case import CertificateUseCase
from academy.domain.common.exceptions import ConflictError
from academy.domain.common.value_objects.ids import ProgramId, UserId
from academy.domain.progress.entities.program_completion import ProgramCompletion
from academy.domain.progress.entities.statuses import CompletionStatus
from academy.domain.progress.exceptions import CompletionNotFoundError, CompletionNotStartedError

logger = structlog.get_logger(__name__)


class CompletionUseCase:
    """
    Drive a student's progress through a program.

    Reaching completed closes the loop with commerce: the active enrollment
    of the pair is marked completed and the certificate is issued, all in
    the same transaction.
    """

    def __init__(
        self,
        completion_repository: ProgramCompletionRepositoryProtocol,
        enrollment_repository: EnrollmentRepositoryProtocol,
        certificate_use_case: CertificateUseCase,
        uow: UnitOfWork,
    ) -> None:
        self.completion_repository = completion_repository
        self.enrollment_repository = enrollment_repository
        self.certificate_use_case = certificate_use_case
        self.uow = uow

    def advance_completion(
        self, user_id: int, program_id: int, new_status: CompletionStatus | str
    ) -> ProgramCompletion:
        """
        Move the completion of a (user, program) pair to a new status.

        Args:
            user_id: ID of the user
            program_id: ID of the program
            new_status: Target status, one of pending, active, completed, cancelled

        Returns:
            The updated completion

        Raises:
            ValidationError: If ``new_status`` is not a completion status, or
                finishing would put finished_at before started_at
            CompletionNotStartedError: If the pair has no completion record
            InvalidStatusTransitionError: If the move is not allowed
        """
        status = CompletionStatus.parse(new_status)
        user_id_vo = UserId(user_id)
        program_id_vo = ProgramId(program_id)

        with self.uow:
            completion = self.completion_repository.find_by_pair(
                user_id_vo, program_id_vo, for_update=True
            )
            if completion is None:
                raise CompletionNotStartedError(user_id, program_id)

            previous = completion.status
            completion.advance_to(status)
            saved = self.completion_repository.save(completion)
            self.uow.track(completion)

            if status is CompletionStatus.COMPLETED:
                self._complete_enrollment(user_id_vo, program_id_vo)
                self._issue_certificate(user_id, program_id)

            self.uow.commit()

        logger.info(
            "program_completion_advanced",
            user_id=user_id,
            program_id=program_id,
            previous=previous.value,
            status=status.value,
        )
        return saved

    def get_completion(self, user_id: int, program_id: int) -> ProgramCompletion:
        completion = self.completion_repository.find_by_pair(
            UserId(user_id), ProgramId(program_id)
        )
        if not completion:
            raise CompletionNotFoundError(user_id, program_id)
        return completion

    def _complete_enrollment(self, user_id: UserId, program_id: ProgramId) -> None:
        enrollment = self.enrollment_repository.find_open(user_id, program_id, for_update=True)
        if enrollment is None or not enrollment.is_active():
            logger.info(
                "no_active_enrollment_to_complete",
                user_id=user_id.value,
                program_id=program_id.value,
            )
            return
        enrollment.complete()
        self.enrollment_repository.save(enrollment)
        self.uow.track(enrollment)
        logger.info("enrollment_completed", enrollment_id=enrollment.id.value)

    def _issue_certificate(self, user_id: int, program_id: int) -> None:
        try:
            self.certificate_use_case.issue_certificate(user_id, program_id)
        except ConflictError as e:
            # A certificate for the pair already exists; completion stands.
            logger.warning(
                "certificate_issue_skipped",
                user_id=user_id,
                program_id=program_id,
                reason=e.message,
            )
