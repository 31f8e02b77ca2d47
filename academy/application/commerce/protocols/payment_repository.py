"""Protocol for Payment repository."""

from typing import Protocol

from academy.domain.commerce.entities.payment import Payment
from academy.domain.common.value_objects.ids import EnrollmentId, PaymentId


class PaymentRepositoryProtocol(Protocol):
    """Protocol for Payment repository operations."""

    def find_by_id(self, payment_id: PaymentId, for_update: bool = False) -> Payment | None:
        ...

    def find_by_enrollment(self, enrollment_id: EnrollmentId) -> list[Payment]:
        """Get every payment attempt of an enrollment, oldest first."""
        ...

    def has_paid_payment(self, enrollment_id: EnrollmentId) -> bool:
        """Check whether at least one payment of the enrollment is paid."""
        ...

    def save(self, payment: Payment) -> Payment:
        ...
