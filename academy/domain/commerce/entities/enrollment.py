"""
Enrollment aggregate root.

A user's purchase/registration relationship to a program.
"""

from dataclasses import dataclass, field
from datetime import datetime

from academy.domain.commerce.entities.statuses import ENROLLMENT_TRANSITIONS, EnrollmentStatus
from academy.domain.commerce.events import EnrollmentStatusChanged
from academy.domain.commerce.exceptions import PaymentRequiredError
from academy.domain.common.aggregate_root import AggregateRoot
from academy.domain.common.clock import utc_now
from academy.domain.common.value_objects.ids import EnrollmentId, ProgramId, UserId


@dataclass
class Enrollment(AggregateRoot[EnrollmentId]):
    """
    Enrollment aggregate root.

    State machine::

        pending -> active -> completed
        pending -> cancelled
        active  -> cancelled

    Business Rules:
    - A new enrollment starts pending
    - ``version`` is the row version this copy was read at; saving a stale copy
      raises ConcurrencyError
    - Activation requires at least one paid payment
    - Completion is driven by the progress engine and requires an active enrollment
    - completed and cancelled are terminal
    - At most one non-cancelled enrollment per (user, program), enforced by the
      use case and a partial unique index
    """

    id: EnrollmentId
    user_id: UserId
    program_id: ProgramId
    status: EnrollmentStatus = EnrollmentStatus.PENDING
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime = field(default_factory=utc_now)
    version: int = 1

    def __post_init__(self) -> None:
        self.status = EnrollmentStatus.parse(self.status)

    # Query methods

    def is_open(self) -> bool:
        """A cancelled enrollment may be superseded; every other state blocks a new one."""
        return self.status is not EnrollmentStatus.CANCELLED

    def is_terminal(self) -> bool:
        return ENROLLMENT_TRANSITIONS.is_terminal(self.status)

    def is_active(self) -> bool:
        return self.status is EnrollmentStatus.ACTIVE

    # Command methods (state changes)

    def activate(self, has_paid_payment: bool) -> None:
        """
        Move a pending enrollment to active.

        Args:
            has_paid_payment: Whether a paid payment exists for this enrollment

        Raises:
            InvalidStatusTransitionError: If the enrollment is not pending
            PaymentRequiredError: If no payment has been paid
        """
        ENROLLMENT_TRANSITIONS.ensure(self.id.value, self.status, EnrollmentStatus.ACTIVE)
        if not has_paid_payment:
            raise PaymentRequiredError(self.id.value)
        self._change_status(EnrollmentStatus.ACTIVE)

    def cancel(self) -> None:
        """
        Cancel a pending or active enrollment.

        Raises:
            InvalidStatusTransitionError: If the enrollment is already terminal
        """
        self._change_status(EnrollmentStatus.CANCELLED)

    def complete(self) -> None:
        """
        Mark an active enrollment completed.

        Raises:
            InvalidStatusTransitionError: If the enrollment is not active
        """
        self._change_status(EnrollmentStatus.COMPLETED)

    def _change_status(self, requested: EnrollmentStatus) -> None:
        ENROLLMENT_TRANSITIONS.ensure(self.id.value, self.status, requested)
        previous = self.status
        self.status = requested
        self.updated_at = utc_now()
        self._record_event(
            EnrollmentStatusChanged(
                enrollment_id=self.id,
                user_id=self.user_id,
                program_id=self.program_id,
                previous=previous,
                current=requested,
            )
        )

    # Factory methods

    @classmethod
    def create(cls, user_id: UserId, program_id: ProgramId) -> "Enrollment":
        """Factory for a new pending enrollment (purchase intent)."""
        now = utc_now()
        return cls(
            id=EnrollmentId.generate(),
            user_id=user_id,
            program_id=program_id,
            status=EnrollmentStatus.PENDING,
            created_at=now,
            updated_at=now,
        )

    @classmethod
    def create_with_id(
        cls,
        id: EnrollmentId,
        user_id: UserId,
        program_id: ProgramId,
        status: EnrollmentStatus,
        created_at: datetime,
        updated_at: datetime,
        version: int = 1,
    ) -> "Enrollment":
        """Factory for reconstituting an enrollment from persistence."""
        return cls(
            id=id,
            user_id=user_id,
            program_id=program_id,
            status=status,
            created_at=created_at,
            updated_at=updated_at,
            version=version,
        )
