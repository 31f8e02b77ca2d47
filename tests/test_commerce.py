"""Tests for enrollments and payments."""

import pytest

from academy.core import Container
from academy.domain.catalog.exceptions import ProgramNotFoundError
from academy.domain.commerce.entities.enrollment import Enrollment
from academy.domain.commerce.entities.statuses import EnrollmentStatus, PaymentStatus
from academy.domain.commerce.events import EnrollmentStatusChanged, PaymentStatusChanged
from academy.domain.commerce.exceptions import (
    EnrollmentAlreadyExistsError,
    EnrollmentClosedError,
    EnrollmentNotFoundError,
    PaymentRequiredError,
)
from academy.domain.common.exceptions import (
    ConflictError,
    InvalidStatusTransitionError,
    ValidationError,
)
from academy.domain.common.value_objects.ids import ProgramId, UserId
from academy.domain.identity.exceptions import UserNotFoundError
from academy.domain.progress.entities.statuses import CompletionStatus


class TestEnrollmentLifecycle:
    """Enroll, pay, confirm and activate."""

    def test_paid_enrollment_can_be_activated(
        self, container: Container, user_id: int, program_id: int
    ) -> None:
        enrollments = container.enrollment_use_case()
        payments = container.payment_use_case()

        enrollment = enrollments.enroll(user_id, program_id)
        assert enrollment.status is EnrollmentStatus.PENDING
        assert enrollment.id.value > 0

        payment = payments.record_payment(enrollment.id.value, 500)
        assert payment.status is PaymentStatus.PENDING
        assert payment.paid_at is None

        payment = payments.confirm_payment(payment.id.value)
        assert payment.status is PaymentStatus.PAID
        assert payment.paid_at is not None

        activated = enrollments.activate_enrollment(enrollment.id.value)
        assert activated.status is EnrollmentStatus.ACTIVE

    def test_activation_opens_a_pending_completion(
        self, container: Container, user_id: int, program_id: int
    ) -> None:
        enrollments = container.enrollment_use_case()
        payments = container.payment_use_case()
        enrollment = enrollments.enroll(user_id, program_id)
        payment = payments.record_payment(enrollment.id.value, 500)
        payments.confirm_payment(payment.id.value)

        enrollments.activate_enrollment(enrollment.id.value)

        completion = container.completion_use_case().get_completion(user_id, program_id)
        assert completion.status is CompletionStatus.PENDING
        assert completion.started_at is None

    def test_activation_without_paid_payment_fails(
        self, container: Container, user_id: int, program_id: int
    ) -> None:
        enrollments = container.enrollment_use_case()
        enrollment = enrollments.enroll(user_id, program_id)
        container.payment_use_case().record_payment(enrollment.id.value, 500)

        with pytest.raises(PaymentRequiredError):
            enrollments.activate_enrollment(enrollment.id.value)

        assert enrollments.get_enrollment(enrollment.id.value).status is EnrollmentStatus.PENDING

    def test_confirmed_payment_does_not_activate_enrollment(
        self, container: Container, user_id: int, program_id: int
    ) -> None:
        enrollment = container.enrollment_use_case().enroll(user_id, program_id)
        payments = container.payment_use_case()
        payments.confirm_payment(payments.record_payment(enrollment.id.value, 500).id.value)

        fetched = container.enrollment_use_case().get_enrollment(enrollment.id.value)
        assert fetched.status is EnrollmentStatus.PENDING

    def test_enrollment_events_are_dispatched_after_commit(
        self, container: Container, notifier, user_id: int, program_id: int
    ) -> None:
        enrollments = container.enrollment_use_case()
        payments = container.payment_use_case()
        enrollment = enrollments.enroll(user_id, program_id)
        payment = payments.record_payment(enrollment.id.value, 500)
        payments.confirm_payment(payment.id.value)
        enrollments.activate_enrollment(enrollment.id.value)

        payment_events = notifier.of_type(PaymentStatusChanged)
        assert [(e.previous, e.current) for e in payment_events] == [
            (PaymentStatus.PENDING, PaymentStatus.PAID)
        ]
        enrollment_events = notifier.of_type(EnrollmentStatusChanged)
        assert len(enrollment_events) == 1
        assert enrollment_events[0].enrollment_id == enrollment.id
        assert enrollment_events[0].current is EnrollmentStatus.ACTIVE

    def test_enroll_unknown_user_or_program(
        self, container: Container, user_id: int, program_id: int
    ) -> None:
        enrollments = container.enrollment_use_case()
        with pytest.raises(UserNotFoundError):
            enrollments.enroll(9999, program_id)
        with pytest.raises(ProgramNotFoundError):
            enrollments.enroll(user_id, 9999)


class TestEnrollmentUniqueness:
    def test_second_enrollment_while_active_fails(
        self, container: Container, user_id: int, program_id: int
    ) -> None:
        enrollments = container.enrollment_use_case()
        payments = container.payment_use_case()
        enrollment = enrollments.enroll(user_id, program_id)
        payments.confirm_payment(payments.record_payment(enrollment.id.value, 500).id.value)
        enrollments.activate_enrollment(enrollment.id.value)

        with pytest.raises(ConflictError) as exc_info:
            enrollments.enroll(user_id, program_id)

        assert isinstance(exc_info.value, EnrollmentAlreadyExistsError)
        assert exc_info.value.existing_id == enrollment.id.value
        assert len(enrollments.list_enrollments(user_id)) == 1

    def test_second_pending_enrollment_fails(
        self, container: Container, user_id: int, program_id: int
    ) -> None:
        enrollments = container.enrollment_use_case()
        enrollments.enroll(user_id, program_id)

        with pytest.raises(EnrollmentAlreadyExistsError):
            enrollments.enroll(user_id, program_id)

    def test_cancelled_enrollment_does_not_block_a_new_one(
        self, container: Container, user_id: int, program_id: int
    ) -> None:
        enrollments = container.enrollment_use_case()
        first = enrollments.enroll(user_id, program_id)
        enrollments.cancel_enrollment(first.id.value)

        second = enrollments.enroll(user_id, program_id)

        assert second.id != first.id
        assert enrollments.find_open_enrollment(user_id, program_id).id == second.id
        statuses = [e.status for e in enrollments.list_enrollments(user_id)]
        assert statuses == [EnrollmentStatus.CANCELLED, EnrollmentStatus.PENDING]

    def test_store_rejects_duplicate_open_enrollment(
        self, container: Container, user_id: int, program_id: int
    ) -> None:
        """The partial unique index holds even when the application check is bypassed."""
        repository = container.enrollment_repository()
        container.enrollment_use_case().enroll(user_id, program_id)

        with pytest.raises(EnrollmentAlreadyExistsError):
            repository.save(Enrollment.create(UserId(user_id), ProgramId(program_id)))


class TestEnrollmentTransitions:
    def test_completed_enrollment_cannot_be_cancelled(
        self, container: Container, user_id: int, program_id: int
    ) -> None:
        enrollments = container.enrollment_use_case()
        payments = container.payment_use_case()
        enrollment = enrollments.enroll(user_id, program_id)
        payments.confirm_payment(payments.record_payment(enrollment.id.value, 500).id.value)
        enrollments.activate_enrollment(enrollment.id.value)
        enrollments.mark_enrollment_completed(enrollment.id.value)

        with pytest.raises(InvalidStatusTransitionError):
            enrollments.cancel_enrollment(enrollment.id.value)

    def test_pending_enrollment_cannot_be_completed(
        self, container: Container, user_id: int, program_id: int
    ) -> None:
        enrollments = container.enrollment_use_case()
        enrollment = enrollments.enroll(user_id, program_id)

        with pytest.raises(InvalidStatusTransitionError):
            enrollments.mark_enrollment_completed(enrollment.id.value)

    def test_unknown_enrollment(self, container: Container) -> None:
        with pytest.raises(EnrollmentNotFoundError):
            container.enrollment_use_case().cancel_enrollment(4242)


class TestPayments:
    @pytest.fixture
    def enrollment_id(self, container: Container, user_id: int, program_id: int) -> int:
        return container.enrollment_use_case().enroll(user_id, program_id).id.value

    @pytest.mark.parametrize("amount", [0, -5, True, 12.5])
    def test_amount_must_be_positive_integer(
        self, container: Container, enrollment_id: int, amount
    ) -> None:
        with pytest.raises(ValidationError):
            container.payment_use_case().record_payment(enrollment_id, amount)

    def test_refund_keeps_paid_at_and_enrollment(
        self, container: Container, enrollment_id: int
    ) -> None:
        payments = container.payment_use_case()
        payment = payments.confirm_payment(payments.record_payment(enrollment_id, 500).id.value)

        refunded = payments.refund_payment(payment.id.value)

        assert refunded.status is PaymentStatus.REFUNDED
        assert refunded.paid_at == payment.paid_at
        enrollment = container.enrollment_use_case().get_enrollment(enrollment_id)
        assert enrollment.status is EnrollmentStatus.PENDING

    def test_failed_payment_is_terminal(self, container: Container, enrollment_id: int) -> None:
        payments = container.payment_use_case()
        payment = payments.fail_payment(payments.record_payment(enrollment_id, 500).id.value)

        assert payment.status is PaymentStatus.FAILED
        with pytest.raises(InvalidStatusTransitionError):
            payments.confirm_payment(payment.id.value)

    def test_pending_payment_cannot_be_refunded(
        self, container: Container, enrollment_id: int
    ) -> None:
        payments = container.payment_use_case()
        payment = payments.record_payment(enrollment_id, 500)

        with pytest.raises(InvalidStatusTransitionError):
            payments.refund_payment(payment.id.value)

    def test_cancelled_enrollment_accepts_no_payment(
        self, container: Container, enrollment_id: int
    ) -> None:
        container.enrollment_use_case().cancel_enrollment(enrollment_id)

        with pytest.raises(EnrollmentClosedError):
            container.payment_use_case().record_payment(enrollment_id, 500)

    def test_payments_listed_oldest_first(self, container: Container, enrollment_id: int) -> None:
        payments = container.payment_use_case()
        first = payments.fail_payment(payments.record_payment(enrollment_id, 500).id.value)
        second = payments.record_payment(enrollment_id, 500)

        listed = payments.list_payments(enrollment_id)

        assert [p.id for p in listed] == [first.id, second.id]
