"""Use case for enrollment operations."""

import structlog

from academy.application.catalog.protocols.program_repository import ProgramRepositoryProtocol
from academy.application.commerce.protocols.enrollment_repository import (
    EnrollmentRepositoryProtocol,
)
from academy.application.commerce.protocols.payment_repository import PaymentRepositoryProtocol
from academy.application.common.unit_of_work import UnitOfWork
from academy.application.identity.protocols.user_repository import UserRepositoryProtocol
from academy.application.progress.protocols.program_completion_repository import (
    ProgramCompletionRepositoryProtocol,
)
from academy.domain.catalog.exceptions import ProgramNotFoundError
from academy.domain.commerce.entities.enrollment import Enrollment
from academy.domain.commerce.exceptions import (
    EnrollmentAlreadyExistsError,
    EnrollmentNotFoundError,
)
from academy.domain.common.value_objects.ids import EnrollmentId, ProgramId, UserId
from academy.domain.identity.exceptions import UserNotFoundError
from academy.domain.progress.entities.program_completion import ProgramCompletion

logger = structlog.get_logger(__name__)


class EnrollmentUseCase:
    """
    Use case for the enrollment lifecycle.

    Status-changing operations lock the enrollment row for the duration of
    the transaction; the version column catches anything the lock misses.
    """

    def __init__(
        self,
        enrollment_repository: EnrollmentRepositoryProtocol,
        payment_repository: PaymentRepositoryProtocol,
        completion_repository: ProgramCompletionRepositoryProtocol,
        user_repository: UserRepositoryProtocol,
        program_repository: ProgramRepositoryProtocol,
        uow: UnitOfWork,
    ) -> None:
        """Initialize use case with repository protocols."""
        self.enrollment_repository = enrollment_repository
        self.payment_repository = payment_repository
        self.completion_repository = completion_repository
        self.user_repository = user_repository
        self.program_repository = program_repository
        self.uow = uow

    def enroll(self, user_id: int, program_id: int) -> Enrollment:
        """
        Enroll a user in a program.

        A cancelled enrollment for the same pair does not block a new one.

        Args:
            user_id: ID of the user
            program_id: ID of the program

        Returns:
            Created pending enrollment

        Raises:
            UserNotFoundError: If the user doesn't exist
            ProgramNotFoundError: If the program doesn't exist
            EnrollmentAlreadyExistsError: If a non-cancelled enrollment exists for the pair
        """
        user_id_vo = UserId(user_id)
        program_id_vo = ProgramId(program_id)

        with self.uow.serializable():
            if not self.user_repository.find_by_id(user_id_vo):
                raise UserNotFoundError(user_id)
            if not self.program_repository.find_by_id(program_id_vo):
                raise ProgramNotFoundError(program_id)

            existing = self.enrollment_repository.find_open(
                user_id_vo, program_id_vo, for_update=True
            )
            if existing:
                raise EnrollmentAlreadyExistsError(user_id, program_id, existing.id.value)

            enrollment = self.enrollment_repository.save(
                Enrollment.create(user_id_vo, program_id_vo)
            )
            self.uow.commit()

        logger.info(
            "enrollment_created",
            enrollment_id=enrollment.id.value,
            user_id=user_id,
            program_id=program_id,
        )
        return enrollment

    def activate_enrollment(self, enrollment_id: int) -> Enrollment:
        """
        Activate a pending enrollment once it has a paid payment.

        Also opens the pending ProgramCompletion for the pair if it has none.

        Raises:
            EnrollmentNotFoundError: If the enrollment doesn't exist
            InvalidStatusTransitionError: If the enrollment is not pending
            PaymentRequiredError: If no payment of the enrollment is paid
        """
        with self.uow:
            enrollment = self._get(enrollment_id, for_update=True)
            has_paid = self.payment_repository.has_paid_payment(enrollment.id)
            enrollment.activate(has_paid_payment=has_paid)
            saved = self.enrollment_repository.save(enrollment)
            self.uow.track(enrollment)

            completion = self.completion_repository.find_by_pair(
                enrollment.user_id, enrollment.program_id, for_update=True
            )
            if completion is None:
                completion = self.completion_repository.save(
                    ProgramCompletion.create(enrollment.user_id, enrollment.program_id)
                )
                logger.info(
                    "program_completion_opened",
                    completion_id=completion.id.value,
                    user_id=enrollment.user_id.value,
                    program_id=enrollment.program_id.value,
                )
            self.uow.commit()

        logger.info("enrollment_activated", enrollment_id=enrollment_id)
        return saved

    def cancel_enrollment(self, enrollment_id: int) -> Enrollment:
        """
        Cancel a pending or active enrollment.

        Payments and the completion record are left as they are.

        Raises:
            EnrollmentNotFoundError: If the enrollment doesn't exist
            InvalidStatusTransitionError: If the enrollment is already terminal
        """
        with self.uow:
            enrollment = self._get(enrollment_id, for_update=True)
            enrollment.cancel()
            saved = self.enrollment_repository.save(enrollment)
            self.uow.track(enrollment)
            self.uow.commit()

        logger.info("enrollment_cancelled", enrollment_id=enrollment_id)
        return saved

    def mark_enrollment_completed(self, enrollment_id: int) -> Enrollment:
        """
        Mark an active enrollment completed.

        Raises:
            EnrollmentNotFoundError: If the enrollment doesn't exist
            InvalidStatusTransitionError: If the enrollment is not active
        """
        with self.uow:
            enrollment = self._get(enrollment_id, for_update=True)
            enrollment.complete()
            saved = self.enrollment_repository.save(enrollment)
            self.uow.track(enrollment)
            self.uow.commit()

        logger.info("enrollment_completed", enrollment_id=enrollment_id)
        return saved

    def get_enrollment(self, enrollment_id: int) -> Enrollment:
        return self._get(enrollment_id)

    def find_open_enrollment(self, user_id: int, program_id: int) -> Enrollment | None:
        """The pending, active or completed enrollment of a pair, if any."""
        return self.enrollment_repository.find_open(UserId(user_id), ProgramId(program_id))

    def list_enrollments(self, user_id: int) -> list[Enrollment]:
        """
        Get every enrollment of a user, cancelled ones included.

        Raises:
            UserNotFoundError: If the user doesn't exist
        """
        user_id_vo = UserId(user_id)
        if not self.user_repository.find_by_id(user_id_vo):
            raise UserNotFoundError(user_id)
        return self.enrollment_repository.find_by_user(user_id_vo)

    def _get(self, enrollment_id: int, for_update: bool = False) -> Enrollment:
        enrollment = self.enrollment_repository.find_by_id(
            EnrollmentId(enrollment_id), for_update=for_update
        )
        if not enrollment:
            raise EnrollmentNotFoundError(enrollment_id)
        return enrollment
