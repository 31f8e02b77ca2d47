"""Tests for the Enrollment and Payment aggregates."""

from datetime import UTC, datetime

import pytest

from academy.domain.commerce.entities.enrollment import Enrollment
from academy.domain.commerce.entities.payment import Payment
from academy.domain.commerce.entities.statuses import EnrollmentStatus, PaymentStatus
from academy.domain.commerce.events import EnrollmentStatusChanged, PaymentStatusChanged
from academy.domain.commerce.exceptions import PaymentRequiredError
from academy.domain.common.exceptions import InvalidStatusTransitionError, ValidationError
from academy.domain.common.value_objects.ids import EnrollmentId, PaymentId, ProgramId, UserId


def _enrollment(status: EnrollmentStatus = EnrollmentStatus.PENDING) -> Enrollment:
    now = datetime.now(UTC)
    return Enrollment.create_with_id(
        id=EnrollmentId(1),
        user_id=UserId(2),
        program_id=ProgramId(3),
        status=status,
        created_at=now,
        updated_at=now,
    )


class TestEnrollment:
    def test_new_enrollment_is_pending_and_unpersisted(self) -> None:
        enrollment = Enrollment.create(UserId(2), ProgramId(3))

        assert enrollment.status is EnrollmentStatus.PENDING
        assert enrollment.is_new()
        assert enrollment.is_open()

    def test_activation_requires_a_paid_payment(self) -> None:
        enrollment = _enrollment()

        with pytest.raises(PaymentRequiredError):
            enrollment.activate(has_paid_payment=False)
        assert enrollment.status is EnrollmentStatus.PENDING

    def test_activation_records_event(self) -> None:
        enrollment = _enrollment()

        enrollment.activate(has_paid_payment=True)

        events = enrollment.collect_events()
        assert len(events) == 1
        assert isinstance(events[0], EnrollmentStatusChanged)
        assert events[0].previous is EnrollmentStatus.PENDING
        assert events[0].current is EnrollmentStatus.ACTIVE
        assert enrollment.collect_events() == []

    def test_pending_cannot_complete(self) -> None:
        with pytest.raises(InvalidStatusTransitionError):
            _enrollment().complete()

    @pytest.mark.parametrize("status", [EnrollmentStatus.CANCELLED, EnrollmentStatus.COMPLETED])
    def test_terminal_states_reject_every_move(self, status: EnrollmentStatus) -> None:
        enrollment = _enrollment(status)

        assert enrollment.is_terminal()
        with pytest.raises(InvalidStatusTransitionError):
            enrollment.cancel()
        with pytest.raises(InvalidStatusTransitionError):
            enrollment.activate(has_paid_payment=True)

    def test_cancelled_enrollment_no_longer_blocks(self) -> None:
        enrollment = _enrollment(EnrollmentStatus.ACTIVE)
        enrollment.cancel()
        assert not enrollment.is_open()

    def test_unknown_status_is_rejected(self) -> None:
        with pytest.raises(ValidationError):
            _enrollment("paused")  # type: ignore[arg-type]


class TestPayment:
    def test_confirm_stamps_paid_at_once(self) -> None:
        payment = Payment.create(EnrollmentId(1), 4900)
        paid_at = datetime(2026, 1, 5, tzinfo=UTC)

        payment.confirm(paid_at)
        payment.refund()

        assert payment.status is PaymentStatus.REFUNDED
        assert payment.paid_at == paid_at
        events = payment.collect_events()
        assert [e.current for e in events if isinstance(e, PaymentStatusChanged)] == [
            PaymentStatus.PAID,
            PaymentStatus.REFUNDED,
        ]

    @pytest.mark.parametrize("amount", [0, -100, 12.5, True])
    def test_amount_must_be_a_positive_integer(self, amount: object) -> None:
        with pytest.raises(ValidationError):
            Payment.create(EnrollmentId(1), amount)  # type: ignore[arg-type]

    def test_pending_payment_cannot_be_refunded(self) -> None:
        with pytest.raises(InvalidStatusTransitionError):
            Payment.create(EnrollmentId(1), 100).refund()

    def test_paid_at_must_match_status(self) -> None:
        now = datetime.now(UTC)
        with pytest.raises(ValidationError):
            Payment.create_with_id(
                id=PaymentId(1),
                enrollment_id=EnrollmentId(1),
                amount=100,
                status=PaymentStatus.PAID,
                paid_at=None,
                created_at=now,
                updated_at=now,
            )
        with pytest.raises(ValidationError):
            Payment.create_with_id(
                id=PaymentId(1),
                enrollment_id=EnrollmentId(1),
                amount=100,
                status=PaymentStatus.PENDING,
                paid_at=now,
                created_at=now,
                updated_at=now,
            )
