"""Protocol for catalog Module repository."""

from typing import Protocol

from academy.domain.catalog.entities.module import Module
from academy.domain.common.value_objects.ids import ModuleId


class ModuleRepositoryProtocol(Protocol):
    """Protocol for Module repository operations."""

    def find_by_id(self, module_id: ModuleId) -> Module | None:
        """Find a module by ID, soft-deleted or not."""
        ...

    def find_all(self, include_deleted: bool = False) -> list[Module]:
        """
        Get modules ordered by name.

        Args:
            include_deleted: Whether soft-deleted modules are included
        """
        ...

    def save(self, module: Module) -> Module:
        ...
