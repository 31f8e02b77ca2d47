"""Teaching group entity."""

import re
from dataclasses import dataclass, field
from datetime import datetime

from academy.domain.common.clock import utc_now
from academy.domain.common.entity import Entity
from academy.domain.common.exceptions import ValidationError
from academy.domain.common.value_objects.ids import TeachingGroupId

SLUG_PATTERN = re.compile(r"^[a-z0-9]+(?:[-_][a-z0-9]+)*$")
MAX_SLUG_LENGTH = 100


def normalize_slug(slug: str) -> str:
    """
    Lower-case and strip a slug, then validate its shape.

    Raises:
        ValidationError: If the slug is empty, too long or malformed
    """
    normalized = (slug or "").strip().lower()
    if not normalized:
        raise ValidationError("Slug cannot be empty", field="slug", value=slug)
    if len(normalized) > MAX_SLUG_LENGTH:
        raise ValidationError(
            f"Slug cannot exceed {MAX_SLUG_LENGTH} characters", field="slug", value=slug
        )
    if not SLUG_PATTERN.match(normalized):
        raise ValidationError(
            "Slug may only contain letters, digits, '-' and '_'", field="slug", value=slug
        )
    return normalized


@dataclass
class TeachingGroup(Entity[TeachingGroupId]):
    """A cohort of users taught together; identified publicly by its slug."""

    id: TeachingGroupId
    slug: str
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime = field(default_factory=utc_now)

    def __post_init__(self) -> None:
        normalize_slug(self.slug)

    @classmethod
    def create(cls, slug: str) -> "TeachingGroup":
        now = utc_now()
        return cls(
            id=TeachingGroupId.generate(),
            slug=normalize_slug(slug),
            created_at=now,
            updated_at=now,
        )

    @classmethod
    def create_with_id(
        cls, id: TeachingGroupId, slug: str, created_at: datetime, updated_at: datetime
    ) -> "TeachingGroup":
        return cls(id=id, slug=slug, created_at=created_at, updated_at=updated_at)
