"""Identity domain exceptions."""

from academy.domain.common.exceptions import DuplicateError, NotFoundError


class UserNotFoundError(NotFoundError):
    """Raised when a user cannot be found."""

    def __init__(self, user_id: int) -> None:
        super().__init__("User", user_id)


class TeachingGroupNotFoundError(NotFoundError):
    """Raised when a teaching group cannot be found."""

    def __init__(self, teaching_group_id: int) -> None:
        super().__init__("TeachingGroup", teaching_group_id)


class EmailAlreadyExistsError(DuplicateError):
    """Raised when registering with an email that already exists."""

    def __init__(self, email: str) -> None:
        super().__init__("User", {"email": email})
        self.email = email


class TeachingGroupSlugTakenError(DuplicateError):
    """Raised when a teaching group slug is already used."""

    def __init__(self, slug: str) -> None:
        super().__init__("TeachingGroup", {"slug": slug})
        self.slug = slug
