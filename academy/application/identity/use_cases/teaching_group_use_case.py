"""Use case for teaching group operations."""

import structlog

from academy.application.common.unit_of_work import UnitOfWork
from academy.application.identity.protocols.teaching_group_repository import (
    TeachingGroupRepositoryProtocol,
)
from academy.domain.common.value_objects.ids import TeachingGroupId
from academy.domain.identity.entities.teaching_group import TeachingGroup, normalize_slug
from academy.domain.identity.exceptions import (
    TeachingGroupNotFoundError,
    TeachingGroupSlugTakenError,
)

logger = structlog.get_logger(__name__)


class TeachingGroupUseCase:
    """Use case for creating and reading teaching groups."""

    def __init__(
        self, teaching_group_repository: TeachingGroupRepositoryProtocol, uow: UnitOfWork
    ) -> None:
        self.teaching_group_repository = teaching_group_repository
        self.uow = uow

    def create_teaching_group(self, slug: str) -> TeachingGroup:
        """
        Create a teaching group.

        Raises:
            ValidationError: If the slug is empty or malformed
            TeachingGroupSlugTakenError: If the slug is already used
        """
        normalized = normalize_slug(slug)
        with self.uow:
            if self.teaching_group_repository.find_by_slug(normalized):
                raise TeachingGroupSlugTakenError(normalized)
            group = self.teaching_group_repository.save(TeachingGroup.create(normalized))
            self.uow.commit()

        logger.info("teaching_group_created", teaching_group_id=group.id.value, slug=group.slug)
        return group

    def get_teaching_group(self, teaching_group_id: int) -> TeachingGroup:
        group = self.teaching_group_repository.find_by_id(TeachingGroupId(teaching_group_id))
        if not group:
            raise TeachingGroupNotFoundError(teaching_group_id)
        return group
