"""User entity for identity management."""

from dataclasses import dataclass, field
from datetime import datetime

from academy.domain.common.clock import utc_now
from academy.domain.common.entity import Entity
from academy.domain.common.exceptions import ValidationError
from academy.domain.common.status import StatusEnum
from academy.domain.common.value_objects.ids import TeachingGroupId, UserId

# Domain constraints
MAX_EMAIL_LENGTH = 254


class UserRole(StatusEnum):
    """Closed set of platform roles."""

    STUDENT = "student"
    TEACHER = "teacher"
    ADMIN = "admin"


def normalize_email(email: str) -> str:
    """
    Strip and lower-case an email address and check its basic shape.

    Raises:
        ValidationError: If the email is empty, too long or has no '@'
    """
    normalized = (email or "").strip().lower()
    if not normalized:
        raise ValidationError("Email cannot be empty", field="email", value=email)
    if len(normalized) > MAX_EMAIL_LENGTH:
        raise ValidationError(
            f"Email cannot exceed {MAX_EMAIL_LENGTH} characters", field="email", value=email
        )
    local, _, domain = normalized.partition("@")
    if not local or not domain:
        raise ValidationError(
            "Email must contain a local part and a domain", field="email", value=email
        )
    return normalized


@dataclass
class User(Entity[UserId]):
    """
    User entity.

    Business Rules:
    - Email must be unique (enforced at repository level)
    - Email is stored normalised (trimmed, lower-case)
    - Every user belongs to exactly one teaching group
    - Role is one of student, teacher, admin
    - Password hashing is an infrastructure concern; only the hash is held here
    """

    id: UserId
    name: str
    email: str
    password_hash: str
    teaching_group_id: TeachingGroupId
    role: UserRole = UserRole.STUDENT
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime = field(default_factory=utc_now)

    def __post_init__(self) -> None:
        """Validate invariants."""
        if not self.name or not self.name.strip():
            raise ValidationError("User name cannot be empty", field="name", value=self.name)
        normalize_email(self.email)
        if not self.password_hash:
            raise ValidationError("Password hash cannot be empty", field="password_hash")
        self.role = UserRole.parse(self.role, field="role")

    def is_student(self) -> bool:
        return self.role is UserRole.STUDENT

    def change_role(self, role: UserRole | str) -> None:
        """
        Change the user's role.

        Raises:
            ValidationError: If the role is not in the closed set
        """
        self.role = UserRole.parse(role, field="role")
        self.updated_at = utc_now()

    def update_password(self, new_password_hash: str) -> None:
        if not new_password_hash:
            raise ValidationError("Password hash cannot be empty", field="password_hash")
        self.password_hash = new_password_hash
        self.updated_at = utc_now()

    @classmethod
    def create(
        cls,
        name: str,
        email: str,
        password_hash: str,
        teaching_group_id: TeachingGroupId,
        role: UserRole | str = UserRole.STUDENT,
    ) -> "User":
        """
        Create a new user.

        Raises:
            ValidationError: If name, email or role is invalid
        """
        now = utc_now()
        return cls(
            id=UserId.generate(),
            name=name.strip() if name else name,
            email=normalize_email(email),
            password_hash=password_hash,
            teaching_group_id=teaching_group_id,
            role=UserRole.parse(role, field="role"),
            created_at=now,
            updated_at=now,
        )

    @classmethod
    def create_with_id(
        cls,
        id: UserId,
        name: str,
        email: str,
        password_hash: str,
        teaching_group_id: TeachingGroupId,
        role: UserRole,
        created_at: datetime,
        updated_at: datetime,
    ) -> "User":
        """Reconstitute a user from persistence."""
        return cls(
            id=id,
            name=name,
            email=email,
            password_hash=password_hash,
            teaching_group_id=teaching_group_id,
            role=role,
            created_at=created_at,
            updated_at=updated_at,
        )
