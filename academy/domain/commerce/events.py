"""Commerce domain events."""

from dataclasses import dataclass

from academy.domain.commerce.entities.statuses import EnrollmentStatus, PaymentStatus
from academy.domain.common.domain_event import DomainEvent
from academy.domain.common.value_objects.ids import EnrollmentId, PaymentId, ProgramId, UserId


@dataclass(frozen=True)
class EnrollmentStatusChanged(DomainEvent):
    enrollment_id: EnrollmentId
    user_id: UserId
    program_id: ProgramId
    previous: EnrollmentStatus
    current: EnrollmentStatus


@dataclass(frozen=True)
class PaymentStatusChanged(DomainEvent):
    payment_id: PaymentId
    enrollment_id: EnrollmentId
    previous: PaymentStatus
    current: PaymentStatus
