"""Use case for user registration and credentials."""

import structlog

from academy.application.common.unit_of_work import UnitOfWork
from academy.application.identity.protocols.password_hasher import PasswordHasherProtocol
from academy.application.identity.protocols.teaching_group_repository import (
    TeachingGroupRepositoryProtocol,
)
from academy.application.identity.protocols.user_repository import UserRepositoryProtocol
from academy.domain.common.exceptions import ValidationError
from academy.domain.common.value_objects.ids import TeachingGroupId, UserId
from academy.domain.identity.entities.user import User, UserRole, normalize_email
from academy.domain.identity.exceptions import (
    EmailAlreadyExistsError,
    TeachingGroupNotFoundError,
    UserNotFoundError,
)

logger = structlog.get_logger(__name__)

MIN_PASSWORD_LENGTH = 8


class UserUseCase:
    """Use case for users. Authentication sessions live outside this package."""

    def __init__(
        self,
        user_repository: UserRepositoryProtocol,
        teaching_group_repository: TeachingGroupRepositoryProtocol,
        password_hasher: PasswordHasherProtocol,
        uow: UnitOfWork,
    ) -> None:
        self.user_repository = user_repository
        self.teaching_group_repository = teaching_group_repository
        self.password_hasher = password_hasher
        self.uow = uow

    def register_user(
        self,
        name: str,
        email: str,
        password: str,
        teaching_group_id: int,
        role: UserRole | str = UserRole.STUDENT,
    ) -> User:
        """
        Register a new user.

        Args:
            name: Display name
            email: Email address, stored lower-cased
            password: Plain password, only its hash is stored
            teaching_group_id: ID of the user's teaching group
            role: One of student, teacher, admin

        Returns:
            Created user domain entity

        Raises:
            ValidationError: If a value is invalid or the password is too short
            TeachingGroupNotFoundError: If the teaching group doesn't exist
            EmailAlreadyExistsError: If the email is already registered
        """
        normalized_email = normalize_email(email)
        role = UserRole.parse(role, field="role")
        if not password or len(password) < MIN_PASSWORD_LENGTH:
            raise ValidationError(
                f"Password must be at least {MIN_PASSWORD_LENGTH} characters", field="password"
            )

        group_id = TeachingGroupId(teaching_group_id)
        with self.uow:
            if not self.teaching_group_repository.find_by_id(group_id):
                raise TeachingGroupNotFoundError(teaching_group_id)
            if self.user_repository.find_by_email(normalized_email):
                raise EmailAlreadyExistsError(normalized_email)

            user = User.create(
                name=name,
                email=normalized_email,
                password_hash=self.password_hasher.hash(password),
                teaching_group_id=group_id,
                role=role,
            )
            user = self.user_repository.save(user)
            self.uow.commit()

        logger.info("user_registered", user_id=user.id.value, role=user.role.value)
        return user

    def change_role(self, user_id: int, role: UserRole | str) -> User:
        """
        Change a user's role.

        Raises:
            UserNotFoundError: If the user doesn't exist
            ValidationError: If the role is not in the closed set
        """
        with self.uow:
            user = self.get_user(user_id)
            previous = user.role
            user.change_role(role)
            user = self.user_repository.save(user)
            self.uow.commit()

        logger.info(
            "user_role_changed", user_id=user_id, previous=previous.value, role=user.role.value
        )
        return user

    def get_user(self, user_id: int) -> User:
        user = self.user_repository.find_by_id(UserId(user_id))
        if not user:
            raise UserNotFoundError(user_id)
        return user

    def verify_password(self, user_id: int, password: str) -> bool:
        """Check a plain password against the stored hash."""
        user = self.get_user(user_id)
        valid = self.password_hasher.verify(password, user.password_hash)
        if not valid:
            logger.info("password_verification_failed", user_id=user_id)
        return valid
