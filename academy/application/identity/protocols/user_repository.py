"""Protocol for User repository."""

from typing import Protocol

from academy.domain.common.value_objects.ids import UserId
from academy.domain.identity.entities.user import User


class UserRepositoryProtocol(Protocol):
    """Protocol for User repository operations."""

    def find_by_id(self, user_id: UserId) -> User | None:
        """
        Find a user by ID.

        Args:
            user_id: The user ID

        Returns:
            User entity if found, None otherwise
        """
        ...

    def find_by_email(self, email: str) -> User | None:
        """
        Find a user by normalized email.

        Args:
            email: Lower-cased email address

        Returns:
            User entity if found, None otherwise
        """
        ...

    def save(self, user: User) -> User:
        """
        Save a user entity (create or update).

        Raises:
            EmailAlreadyExistsError: If the store rejects the email as taken
        """
        ...
