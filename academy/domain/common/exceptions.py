"""
Domain layer exceptions.

Four kinds of failure surface from the domain and application layers:

- NotFoundError: a referenced id does not resolve
- ConflictError: a uniqueness rule or a status transition was violated
- ValidationError: a value is outside its allowed domain
- ConcurrencyError: the store detected a conflicting transaction (retryable)

Every error carries a message plus a ``details`` dict with the entity type,
id and offending field so callers can act on it.
"""


class DomainError(Exception):
    """
    Base exception for all domain errors.

    All domain exceptions should inherit from this class
    so they can be caught and handled uniformly.
    """

    retryable: bool = False

    def __init__(self, message: str, details: dict[str, object] | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} - {self.details}"
        return self.message


class ValidationError(DomainError):
    """
    Raised when a value is outside its allowed domain.

    Example: negative price, non-positive payment amount, unknown status.
    """

    def __init__(self, message: str, field: str | None = None, value: object = None) -> None:
        details: dict[str, object] = {}
        if field:
            details["field"] = field
        if value is not None:
            details["value"] = value
        super().__init__(message, details)
        self.field = field
        self.value = value


class NotFoundError(DomainError):
    """
    Raised when a referenced entity cannot be found.

    Example: enrolling a user into a program id that doesn't exist.
    """

    def __init__(self, entity_type: str, entity_id: object) -> None:
        message = f"{entity_type} with id {entity_id} not found"
        super().__init__(message, {"entity_type": entity_type, "entity_id": entity_id})
        self.entity_type = entity_type
        self.entity_id = entity_id


class ConflictError(DomainError):
    """
    Raised when an operation conflicts with the current state.

    Covers uniqueness violations and illegal status transitions.
    """


class DuplicateError(ConflictError):
    """Raised when a uniqueness rule would be broken."""

    def __init__(self, entity_type: str, key: dict[str, object]) -> None:
        rendered = ", ".join(f"{name}={value}" for name, value in key.items())
        super().__init__(
            f"{entity_type} already exists for {rendered}",
            {"entity_type": entity_type, **key},
        )
        self.entity_type = entity_type
        self.key = key


class InvalidStatusTransitionError(ConflictError):
    """Raised when a status change is not allowed by the transition table."""

    def __init__(
        self, entity_type: str, entity_id: object, current: object, requested: object
    ) -> None:
        super().__init__(
            f"{entity_type} {entity_id} cannot move from '{current}' to '{requested}'",
            {
                "entity_type": entity_type,
                "entity_id": entity_id,
                "field": "status",
                "current": str(current),
                "requested": str(requested),
            },
        )
        self.entity_type = entity_type
        self.entity_id = entity_id
        self.current = current
        self.requested = requested


class ConcurrencyError(DomainError):
    """
    Raised when the store detects a conflicting concurrent transaction.

    This is the only error kind that is safe to retry automatically.
    """

    retryable = True

    def __init__(
        self,
        message: str = "Concurrent modification detected",
        entity_type: str | None = None,
        entity_id: object = None,
    ) -> None:
        details: dict[str, object] = {}
        if entity_type:
            details["entity_type"] = entity_type
        if entity_id is not None:
            details["entity_id"] = entity_id
        super().__init__(message, details)
        self.entity_type = entity_type
        self.entity_id = entity_id
