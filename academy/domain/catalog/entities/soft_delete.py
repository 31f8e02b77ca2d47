"""Soft-delete behaviour shared by modules, courses and lessons."""

from datetime import datetime

from academy.domain.catalog.exceptions import AlreadyDeletedError, NotDeletedError
from academy.domain.common.clock import utc_now
from academy.domain.common.entity import EntityId


class SoftDeletable:
    """
    Mixin for catalog rows that are flagged instead of removed.

    Deleted rows stay referenceable by historical enrollments and
    completions; only active listings skip them.
    """

    id: EntityId
    is_deleted: bool
    updated_at: datetime

    def soft_delete(self) -> None:
        """
        Flag this row as deleted.

        Raises:
            AlreadyDeletedError: If the row is already deleted
        """
        if self.is_deleted:
            raise AlreadyDeletedError(self.__class__.__name__, self.id.value)
        self.is_deleted = True
        self.updated_at = utc_now()

    def restore(self) -> None:
        """
        Clear the deleted flag.

        Raises:
            NotDeletedError: If the row is not deleted
        """
        if not self.is_deleted:
            raise NotDeletedError(self.__class__.__name__, self.id.value)
        self.is_deleted = False
        self.updated_at = utc_now()
