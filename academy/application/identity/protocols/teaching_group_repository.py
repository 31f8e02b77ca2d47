"""Protocol for TeachingGroup repository."""

from typing import Protocol

from academy.domain.common.value_objects.ids import TeachingGroupId
from academy.domain.identity.entities.teaching_group import TeachingGroup


class TeachingGroupRepositoryProtocol(Protocol):
    """Protocol for TeachingGroup repository operations."""

    def find_by_id(self, teaching_group_id: TeachingGroupId) -> TeachingGroup | None:
        ...

    def find_by_slug(self, slug: str) -> TeachingGroup | None:
        ...

    def save(self, teaching_group: TeachingGroup) -> TeachingGroup:
        ...
