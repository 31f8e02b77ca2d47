"""Tests for User and TeachingGroup normalization."""

import pytest

from academy.domain.common.exceptions import ValidationError
from academy.domain.common.value_objects.ids import TeachingGroupId
from academy.domain.identity.entities.teaching_group import TeachingGroup, normalize_slug
from academy.domain.identity.entities.user import User, UserRole, normalize_email


class TestUser:
    def test_email_is_normalized(self) -> None:
        user = User.create("Ada", "  Ada@Example.COM ", "hash", TeachingGroupId(1))
        assert user.email == "ada@example.com"
        assert user.role is UserRole.STUDENT
        assert user.is_student()

    @pytest.mark.parametrize("email", ["", "   ", "no-at-sign", "@example.com", "ada@"])
    def test_malformed_emails(self, email: str) -> None:
        with pytest.raises(ValidationError):
            normalize_email(email)

    def test_role_is_a_closed_set(self) -> None:
        user = User.create("Ada", "ada@example.com", "hash", TeachingGroupId(1), role="teacher")
        assert user.role is UserRole.TEACHER

        with pytest.raises(ValidationError):
            user.change_role("superuser")
        assert user.role is UserRole.TEACHER

    def test_password_hash_is_required(self) -> None:
        with pytest.raises(ValidationError):
            User.create("Ada", "ada@example.com", "", TeachingGroupId(1))


class TestTeachingGroup:
    def test_slug_is_lowercased(self) -> None:
        assert TeachingGroup.create(" Cohort-2026 ").slug == "cohort-2026"

    @pytest.mark.parametrize("slug", ["", "has space", "-leading", "trailing_", "a" * 101])
    def test_malformed_slugs(self, slug: str) -> None:
        with pytest.raises(ValidationError):
            normalize_slug(slug)
