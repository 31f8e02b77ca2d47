"""Progress domain exceptions."""

from academy.domain.common.exceptions import ConflictError, DuplicateError, NotFoundError


class CompletionNotFoundError(NotFoundError):
    """Raised when no completion record exists for a (user, program) pair."""

    def __init__(self, user_id: int, program_id: int) -> None:
        super().__init__("ProgramCompletion", f"user={user_id}, program={program_id}")
        self.details.update({"user_id": user_id, "program_id": program_id})
        self.user_id = user_id
        self.program_id = program_id


class CompletionNotStartedError(ConflictError):
    """Raised when advancing a completion that was never created for the pair."""

    def __init__(self, user_id: int, program_id: int) -> None:
        super().__init__(
            f"No completion record for user {user_id} in program {program_id}",
            {
                "entity_type": "ProgramCompletion",
                "user_id": user_id,
                "program_id": program_id,
                "field": "status",
            },
        )
        self.user_id = user_id
        self.program_id = program_id


class CompletionNotFinishedError(ConflictError):
    """Raised when issuing a certificate before the completion reached completed."""

    def __init__(self, user_id: int, program_id: int, status: str | None) -> None:
        super().__init__(
            f"Program {program_id} is not completed for user {user_id}",
            {
                "entity_type": "ProgramCompletion",
                "user_id": user_id,
                "program_id": program_id,
                "field": "status",
                "current": status,
            },
        )
        self.user_id = user_id
        self.program_id = program_id
        self.status = status


class CertificateAlreadyIssuedError(DuplicateError):
    """Raised when a certificate already exists for the (user, program) pair."""

    def __init__(self, user_id: int, program_id: int) -> None:
        super().__init__("Certificate", {"user_id": user_id, "program_id": program_id})
        self.user_id = user_id
        self.program_id = program_id


class CertificateNotFoundError(NotFoundError):
    """Raised when no certificate exists for a (user, program) pair."""

    def __init__(self, user_id: int, program_id: int) -> None:
        super().__init__("Certificate", f"user={user_id}, program={program_id}")
        self.details.update({"user_id": user_id, "program_id": program_id})
        self.user_id = user_id
        self.program_id = program_id
