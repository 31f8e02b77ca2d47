"""
Payment aggregate root.

One row per payment attempt against an enrollment. Payments are never deleted.
"""

from dataclasses import dataclass, field
from datetime import datetime

from academy.domain.commerce.entities.statuses import PAYMENT_TRANSITIONS, PaymentStatus
from academy.domain.commerce.events import PaymentStatusChanged
from academy.domain.common.aggregate_root import AggregateRoot
from academy.domain.common.clock import utc_now
from academy.domain.common.exceptions import ValidationError
from academy.domain.common.value_objects.ids import EnrollmentId, PaymentId

_SETTLED = frozenset({PaymentStatus.PAID, PaymentStatus.REFUNDED})


def validate_amount(amount: int) -> None:
    """
    Check that a payment amount is a positive integer (minor units).

    Raises:
        ValidationError: If the amount is not a positive integer
    """
    if isinstance(amount, bool) or not isinstance(amount, int):
        raise ValidationError("Payment amount must be an integer", field="amount", value=amount)
    if amount <= 0:
        raise ValidationError("Payment amount must be positive", field="amount", value=amount)


@dataclass
class Payment(AggregateRoot[PaymentId]):
    """
    Payment aggregate root.

    State machine::

        pending -> paid -> refunded
        pending -> failed

    Business Rules:
    - Amount is a positive integer
    - paid_at is set exactly when entering paid and never changes afterwards
      (a refunded payment keeps it)
    - A refund does not touch the owning enrollment
    """

    id: PaymentId
    enrollment_id: EnrollmentId
    amount: int
    status: PaymentStatus = PaymentStatus.PENDING
    paid_at: datetime | None = None
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime = field(default_factory=utc_now)
    version: int = 1

    def __post_init__(self) -> None:
        """Validate invariants."""
        validate_amount(self.amount)
        self.status = PaymentStatus.parse(self.status)
        if self.status in _SETTLED and self.paid_at is None:
            raise ValidationError(
                f"A {self.status} payment must have paid_at set", field="paid_at"
            )
        if self.status not in _SETTLED and self.paid_at is not None:
            raise ValidationError(
                f"A {self.status} payment cannot have paid_at set",
                field="paid_at",
                value=self.paid_at.isoformat(),
            )

    def is_paid(self) -> bool:
        return self.status is PaymentStatus.PAID

    def confirm(self, paid_at: datetime | None = None) -> None:
        """
        Mark the payment as paid and stamp ``paid_at``.

        Raises:
            InvalidStatusTransitionError: If the payment is not pending
        """
        self._change_status(PaymentStatus.PAID)
        self.paid_at = paid_at or utc_now()

    def fail(self) -> None:
        """Mark a pending payment as failed."""
        self._change_status(PaymentStatus.FAILED)

    def refund(self) -> None:
        """
        Refund a paid payment. ``paid_at`` is kept as the historical record.

        Raises:
            InvalidStatusTransitionError: If the payment is not paid
        """
        self._change_status(PaymentStatus.REFUNDED)

    def _change_status(self, requested: PaymentStatus) -> None:
        PAYMENT_TRANSITIONS.ensure(self.id.value, self.status, requested)
        previous = self.status
        self.status = requested
        self.updated_at = utc_now()
        self._record_event(
            PaymentStatusChanged(
                payment_id=self.id,
                enrollment_id=self.enrollment_id,
                previous=previous,
                current=requested,
            )
        )

    @classmethod
    def create(cls, enrollment_id: EnrollmentId, amount: int) -> "Payment":
        """Factory for a new pending payment attempt."""
        now = utc_now()
        return cls(
            id=PaymentId.generate(),
            enrollment_id=enrollment_id,
            amount=amount,
            status=PaymentStatus.PENDING,
            created_at=now,
            updated_at=now,
        )

    @classmethod
    def create_with_id(
        cls,
        id: PaymentId,
        enrollment_id: EnrollmentId,
        amount: int,
        status: PaymentStatus,
        paid_at: datetime | None,
        created_at: datetime,
        updated_at: datetime,
        version: int = 1,
    ) -> "Payment":
        """Factory for reconstituting a payment from persistence."""
        return cls(
            id=id,
            enrollment_id=enrollment_id,
            amount=amount,
            status=status,
            paid_at=paid_at,
            created_at=created_at,
            updated_at=updated_at,
            version=version,
        )
