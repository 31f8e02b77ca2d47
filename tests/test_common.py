"""Tests for retry, pagination, settings and the small infrastructure adapters."""

import pytest
from pydantic import ValidationError as SettingsValidationError
from sqlalchemy.exc import IntegrityError, OperationalError
from structlog.testing import capture_logs

from academy.application.common.pagination import MAX_PAGE_SIZE, PaginatedResult, Pagination
from academy.application.common.retry import retry_on_concurrency
from academy.config import Settings
from academy.domain.commerce.entities.statuses import EnrollmentStatus
from academy.domain.commerce.events import EnrollmentStatusChanged
from academy.domain.common.exceptions import ConcurrencyError, ValidationError
from academy.domain.common.value_objects.ids import EnrollmentId, ProgramId, UserId
from academy.infrastructure.common.persistence import is_serialization_failure
from academy.infrastructure.notifications.logging_notifier import LoggingNotifier
from academy.infrastructure.progress.services.certificate_file_generator import (
    UrlCertificateFileGenerator,
)


class FakeDriverError(Exception):
    def __init__(self, message: str, pgcode: str | None = None) -> None:
        super().__init__(message)
        self.pgcode = pgcode


class TestRetryOnConcurrency:
    def test_retries_until_success_with_exponential_backoff(self) -> None:
        delays: list[float] = []
        calls = {"n": 0}

        @retry_on_concurrency(max_retries=3, backoff_seconds=0.1, sleep=delays.append)
        def flaky() -> str:
            calls["n"] += 1
            if calls["n"] < 3:
                raise ConcurrencyError()
            return "done"

        assert flaky() == "done"
        assert calls["n"] == 3
        assert delays == [0.1, 0.2]

    def test_gives_up_after_max_retries(self) -> None:
        delays: list[float] = []

        @retry_on_concurrency(max_retries=2, backoff_seconds=0.01, sleep=delays.append)
        def always_conflicts() -> None:
            raise ConcurrencyError()

        with pytest.raises(ConcurrencyError):
            always_conflicts()
        assert len(delays) == 2

    def test_other_errors_are_not_retried(self) -> None:
        calls = {"n": 0}

        @retry_on_concurrency(sleep=lambda _: None)
        def invalid() -> None:
            calls["n"] += 1
            raise ValidationError("bad input")

        with pytest.raises(ValidationError):
            invalid()
        assert calls["n"] == 1

    def test_negative_retry_count_is_rejected(self) -> None:
        with pytest.raises(ValueError):
            retry_on_concurrency(max_retries=-1)


class TestPagination:
    def test_offset_and_pages(self) -> None:
        pagination = Pagination(page=3, page_size=10)
        result = PaginatedResult(items=[], total=25, pagination=pagination)

        assert pagination.offset == 20
        assert result.total_pages == 3
        assert not result.has_next
        assert result.has_previous

    @pytest.mark.parametrize(
        ("page", "page_size"), [(0, 10), (1, 0), (1, MAX_PAGE_SIZE + 1)]
    )
    def test_invalid_values(self, page: int, page_size: int) -> None:
        with pytest.raises(ValidationError):
            Pagination(page=page, page_size=page_size)


class TestSettings:
    def test_certificate_base_url_loses_trailing_slash(self) -> None:
        settings = Settings(CERTIFICATE_BASE_URL="https://certs.example.com/")
        assert settings.CERTIFICATE_BASE_URL == "https://certs.example.com"

    def test_retry_count_must_be_positive(self) -> None:
        with pytest.raises(SettingsValidationError):
            Settings(CONCURRENCY_MAX_RETRIES=0)

    def test_backoff_cannot_be_negative(self) -> None:
        with pytest.raises(SettingsValidationError):
            Settings(CONCURRENCY_BACKOFF_SECONDS=-1)


class TestSerializationFailureDetection:
    def test_postgres_serialization_failure(self) -> None:
        error = OperationalError("UPDATE", {}, FakeDriverError("could not serialize", "40001"))
        assert is_serialization_failure(error)

    def test_sqlite_lock(self) -> None:
        error = OperationalError("INSERT", {}, FakeDriverError("database is locked"))
        assert is_serialization_failure(error)

    def test_unique_violation_is_not_retryable(self) -> None:
        error = IntegrityError("INSERT", {}, FakeDriverError("duplicate key", "23505"))
        assert not is_serialization_failure(error)


class TestAdapters:
    def test_certificate_url_is_deterministic(self) -> None:
        generator = UrlCertificateFileGenerator("https://certs.example.com/")

        url = generator.generate(UserId(1), ProgramId(10))

        assert url == "https://certs.example.com/users/1/programs/10.pdf"
        assert generator.generate(UserId(1), ProgramId(10)) == url

    def test_logging_notifier_writes_flat_event(self) -> None:
        event = EnrollmentStatusChanged(
            enrollment_id=EnrollmentId(5),
            user_id=UserId(1),
            program_id=ProgramId(10),
            previous=EnrollmentStatus.PENDING,
            current=EnrollmentStatus.ACTIVE,
        )

        with capture_logs() as logs:
            LoggingNotifier().notify(event)

        assert logs[0]["event"] == "domain_event"
        assert logs[0]["event_type"] == "EnrollmentStatusChanged"
        assert logs[0]["enrollment_id"] == 5
        assert logs[0]["current"] == "active"
