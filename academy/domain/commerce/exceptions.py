"""Commerce domain exceptions."""

from academy.domain.common.exceptions import ConflictError, DuplicateError, NotFoundError


class EnrollmentNotFoundError(NotFoundError):
    """Raised when an enrollment cannot be found."""

    def __init__(self, enrollment_id: int) -> None:
        super().__init__("Enrollment", enrollment_id)


class PaymentNotFoundError(NotFoundError):
    """Raised when a payment cannot be found."""

    def __init__(self, payment_id: int) -> None:
        super().__init__("Payment", payment_id)


class EnrollmentAlreadyExistsError(DuplicateError):
    """Raised when the (user, program) pair already has a non-cancelled enrollment."""

    def __init__(self, user_id: int, program_id: int, existing_id: int | None = None) -> None:
        super().__init__("Enrollment", {"user_id": user_id, "program_id": program_id})
        if existing_id is not None:
            self.details["existing_enrollment_id"] = existing_id
        self.user_id = user_id
        self.program_id = program_id
        self.existing_id = existing_id


class PaymentRequiredError(ConflictError):
    """Raised when activating an enrollment that has no paid payment."""

    def __init__(self, enrollment_id: int) -> None:
        super().__init__(
            f"Enrollment {enrollment_id} has no paid payment",
            {"entity_type": "Enrollment", "entity_id": enrollment_id, "field": "payments"},
        )
        self.enrollment_id = enrollment_id


class EnrollmentClosedError(ConflictError):
    """Raised when recording a payment against a completed or cancelled enrollment."""

    def __init__(self, enrollment_id: int, status: str) -> None:
        super().__init__(
            f"Enrollment {enrollment_id} is {status} and accepts no payments",
            {"entity_type": "Enrollment", "entity_id": enrollment_id, "field": "status"},
        )
        self.enrollment_id = enrollment_id
        self.status = status
