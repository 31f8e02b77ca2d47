"""Enrollment and payment status domains with their transition tables."""

from academy.domain.common.status import StatusEnum, TransitionTable


class EnrollmentStatus(StatusEnum):
    PENDING = "pending"
    ACTIVE = "active"
    CANCELLED = "cancelled"
    COMPLETED = "completed"


class PaymentStatus(StatusEnum):
    PENDING = "pending"
    PAID = "paid"
    FAILED = "failed"
    REFUNDED = "refunded"


ENROLLMENT_TRANSITIONS: TransitionTable[EnrollmentStatus] = TransitionTable(
    "Enrollment",
    {
        EnrollmentStatus.PENDING: {EnrollmentStatus.ACTIVE, EnrollmentStatus.CANCELLED},
        EnrollmentStatus.ACTIVE: {EnrollmentStatus.COMPLETED, EnrollmentStatus.CANCELLED},
        EnrollmentStatus.COMPLETED: set(),
        EnrollmentStatus.CANCELLED: set(),
    },
)

PAYMENT_TRANSITIONS: TransitionTable[PaymentStatus] = TransitionTable(
    "Payment",
    {
        PaymentStatus.PENDING: {PaymentStatus.PAID, PaymentStatus.FAILED},
        PaymentStatus.PAID: {PaymentStatus.REFUNDED},
        PaymentStatus.FAILED: set(),
        PaymentStatus.REFUNDED: set(),
    },
)
