"""Protocol for password hashing."""

from typing import Protocol


class PasswordHasherProtocol(Protocol):
    """Hashes and verifies user passwords."""

    def hash(self, password: str) -> str:
        ...

    def verify(self, password: str, password_hash: str) -> bool:
        """Return True if ``password`` matches ``password_hash``."""
        ...
