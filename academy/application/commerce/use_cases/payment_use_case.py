"""Use case for payment operations."""

import structlog

from academy.application.commerce.protocols.enrollment_repository import (
    EnrollmentRepositoryProtocol,
)
from academy.application.commerce.protocols.payment_repository import PaymentRepositoryProtocol
from academy.application.common.unit_of_work import UnitOfWork
from academy.domain.commerce.entities.payment import Payment, validate_amount
from academy.domain.commerce.exceptions import (
    EnrollmentClosedError,
    EnrollmentNotFoundError,
    PaymentNotFoundError,
)
from academy.domain.common.value_objects.ids import EnrollmentId, PaymentId

logger = structlog.get_logger(__name__)


class PaymentUseCase:
    """
    Use case for payment attempts.

    Confirming a payment does not activate the enrollment; the caller decides
    when to call ``EnrollmentUseCase.activate_enrollment``. Refunds do not
    touch the enrollment either.
    """

    def __init__(
        self,
        payment_repository: PaymentRepositoryProtocol,
        enrollment_repository: EnrollmentRepositoryProtocol,
        uow: UnitOfWork,
    ) -> None:
        self.payment_repository = payment_repository
        self.enrollment_repository = enrollment_repository
        self.uow = uow

    def record_payment(self, enrollment_id: int, amount: int) -> Payment:
        """
        Record a new pending payment attempt.

        Args:
            enrollment_id: ID of the enrollment being paid for
            amount: Positive amount in minor currency units

        Returns:
            Created pending payment

        Raises:
            ValidationError: If the amount is not a positive integer
            EnrollmentNotFoundError: If the enrollment doesn't exist
            EnrollmentClosedError: If the enrollment is completed or cancelled
        """
        validate_amount(amount)

        with self.uow:
            enrollment = self.enrollment_repository.find_by_id(
                EnrollmentId(enrollment_id), for_update=True
            )
            if not enrollment:
                raise EnrollmentNotFoundError(enrollment_id)
            if enrollment.is_terminal():
                raise EnrollmentClosedError(enrollment_id, enrollment.status)

            payment = self.payment_repository.save(Payment.create(enrollment.id, amount))
            self.uow.commit()

        logger.info(
            "payment_recorded",
            payment_id=payment.id.value,
            enrollment_id=enrollment_id,
            amount=amount,
        )
        return payment

    def confirm_payment(self, payment_id: int) -> Payment:
        """
        Mark a pending payment as paid and stamp ``paid_at``.

        Raises:
            PaymentNotFoundError: If the payment doesn't exist
            InvalidStatusTransitionError: If the payment is not pending
        """
        with self.uow:
            payment = self._get(payment_id, for_update=True)
            payment.confirm()
            saved = self.payment_repository.save(payment)
            self.uow.track(payment)
            self.uow.commit()

        logger.info(
            "payment_confirmed",
            payment_id=payment_id,
            enrollment_id=saved.enrollment_id.value,
        )
        return saved

    def fail_payment(self, payment_id: int) -> Payment:
        with self.uow:
            payment = self._get(payment_id, for_update=True)
            payment.fail()
            saved = self.payment_repository.save(payment)
            self.uow.track(payment)
            self.uow.commit()

        logger.info("payment_failed", payment_id=payment_id)
        return saved

    def refund_payment(self, payment_id: int) -> Payment:
        """
        Refund a paid payment.

        Raises:
            PaymentNotFoundError: If the payment doesn't exist
            InvalidStatusTransitionError: If the payment is not paid
        """
        with self.uow:
            payment = self._get(payment_id, for_update=True)
            payment.refund()
            saved = self.payment_repository.save(payment)
            self.uow.track(payment)
            self.uow.commit()

        logger.info("payment_refunded", payment_id=payment_id)
        return saved

    def get_payment(self, payment_id: int) -> Payment:
        return self._get(payment_id)

    def list_payments(self, enrollment_id: int) -> list[Payment]:
        enrollment_id_vo = EnrollmentId(enrollment_id)
        if not self.enrollment_repository.find_by_id(enrollment_id_vo):
            raise EnrollmentNotFoundError(enrollment_id)
        return self.payment_repository.find_by_enrollment(enrollment_id_vo)

    def _get(self, payment_id: int, for_update: bool = False) -> Payment:
        payment = self.payment_repository.find_by_id(PaymentId(payment_id), for_update=for_update)
        if not payment:
            raise PaymentNotFoundError(payment_id)
        return payment
