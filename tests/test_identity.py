"""Tests for users, teaching groups and password handling."""

import pytest

from academy.core import Container
from academy.domain.common.exceptions import ConflictError, ValidationError
from academy.domain.identity.entities.user import UserRole
from academy.domain.identity.exceptions import (
    EmailAlreadyExistsError,
    TeachingGroupNotFoundError,
    TeachingGroupSlugTakenError,
)
from academy.infrastructure.identity.services.password_service import PasswordService


class TestUserRegistration:
    def test_register_normalizes_email_and_hashes_password(
        self, container: Container, teaching_group_id: int
    ) -> None:
        users = container.user_use_case()
        user = users.register_user(
            name="Grace",
            email="  Grace@Example.COM ",
            password="s3cret-pass",
            teaching_group_id=teaching_group_id,
        )

        assert user.email == "grace@example.com"
        assert user.role is UserRole.STUDENT
        assert user.password_hash != "s3cret-pass"
        assert users.verify_password(user.id.value, "s3cret-pass") is True
        assert users.verify_password(user.id.value, "wrong-pass") is False

    def test_email_is_unique_case_insensitively(
        self, container: Container, teaching_group_id: int
    ) -> None:
        users = container.user_use_case()
        users.register_user("A", "same@example.com", "password1", teaching_group_id)

        with pytest.raises(ConflictError) as exc_info:
            users.register_user("B", "SAME@example.com", "password2", teaching_group_id)

        assert isinstance(exc_info.value, EmailAlreadyExistsError)

    def test_short_password_is_rejected(
        self, container: Container, teaching_group_id: int
    ) -> None:
        with pytest.raises(ValidationError):
            container.user_use_case().register_user(
                "A", "a@example.com", "short", teaching_group_id
            )

    def test_unknown_teaching_group(self, container: Container) -> None:
        with pytest.raises(TeachingGroupNotFoundError):
            container.user_use_case().register_user("A", "a@example.com", "password1", 999)

    def test_unknown_role_is_rejected(
        self, container: Container, teaching_group_id: int
    ) -> None:
        with pytest.raises(ValidationError):
            container.user_use_case().register_user(
                "A", "a@example.com", "password1", teaching_group_id, role="janitor"
            )

    def test_change_role(self, container: Container, user_id: int) -> None:
        users = container.user_use_case()

        users.change_role(user_id, "teacher")

        assert users.get_user(user_id).role is UserRole.TEACHER


class TestTeachingGroups:
    def test_slug_is_unique(self, container: Container, teaching_group_id: int) -> None:
        groups = container.teaching_group_use_case()

        with pytest.raises(TeachingGroupSlugTakenError):
            groups.create_teaching_group("Cohort-2026")

        assert groups.get_teaching_group(teaching_group_id).slug == "cohort-2026"

    @pytest.mark.parametrize("slug", ["", "has space", "-leading"])
    def test_malformed_slug(self, container: Container, slug: str) -> None:
        with pytest.raises(ValidationError):
            container.teaching_group_use_case().create_teaching_group(slug)


class TestPasswordService:
    def test_pepper_is_applied(self) -> None:
        peppered = PasswordService(pepper="pepper")
        plain = PasswordService()
        password_hash = peppered.hash("correct-horse")

        assert peppered.verify("correct-horse", password_hash) is True
        assert plain.verify("correct-horse", password_hash) is False

    def test_hash_from_before_the_pepper_still_verifies(self) -> None:
        legacy_hash = PasswordService().hash("correct-horse")

        assert PasswordService(pepper="pepper").verify("correct-horse", legacy_hash) is True

    def test_malformed_hash_does_not_verify(self) -> None:
        assert PasswordService().verify("anything", "not-a-hash") is False
