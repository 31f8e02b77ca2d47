"""Tests for the ProgramCompletion and Certificate aggregates."""

from datetime import UTC, datetime, timedelta

import pytest

from academy.domain.common.exceptions import InvalidStatusTransitionError, ValidationError
from academy.domain.common.value_objects.ids import ProgramCompletionId, ProgramId, UserId
from academy.domain.progress.entities.certificate import Certificate
from academy.domain.progress.entities.program_completion import ProgramCompletion
from academy.domain.progress.entities.statuses import CompletionStatus
from academy.domain.progress.events import CertificateIssued, CompletionStatusChanged


class TestProgramCompletion:
    def test_start_sets_started_at(self) -> None:
        completion = ProgramCompletion.create(UserId(1), ProgramId(2))
        started = datetime(2026, 3, 1, tzinfo=UTC)

        completion.start(started)

        assert completion.status is CompletionStatus.ACTIVE
        assert completion.started_at == started
        assert completion.finished_at is None

    def test_finish_sets_finished_at(self) -> None:
        completion = ProgramCompletion.create(UserId(1), ProgramId(2))
        started = datetime(2026, 3, 1, tzinfo=UTC)
        completion.start(started)

        completion.finish(started + timedelta(days=30))

        assert completion.is_completed()
        assert completion.finished_at == started + timedelta(days=30)
        assert [
            e.current for e in completion.collect_events() if isinstance(e, CompletionStatusChanged)
        ] == [CompletionStatus.ACTIVE, CompletionStatus.COMPLETED]

    def test_finish_before_start_is_rejected(self) -> None:
        completion = ProgramCompletion.create(UserId(1), ProgramId(2))
        started = datetime(2026, 3, 1, tzinfo=UTC)
        completion.start(started)

        with pytest.raises(ValidationError):
            completion.finish(started - timedelta(seconds=1))
        assert completion.status is CompletionStatus.ACTIVE

    def test_pending_cannot_skip_to_completed(self) -> None:
        with pytest.raises(InvalidStatusTransitionError):
            ProgramCompletion.create(UserId(1), ProgramId(2)).finish()

    def test_completed_is_terminal(self) -> None:
        completion = ProgramCompletion.create(UserId(1), ProgramId(2))
        completion.start()
        completion.finish()

        assert completion.is_terminal()
        with pytest.raises(InvalidStatusTransitionError):
            completion.cancel()

    def test_reconstituted_chronology_is_checked(self) -> None:
        now = datetime.now(UTC)
        with pytest.raises(ValidationError):
            ProgramCompletion.create_with_id(
                id=ProgramCompletionId(1),
                user_id=UserId(1),
                program_id=ProgramId(2),
                status=CompletionStatus.COMPLETED,
                started_at=now,
                finished_at=now - timedelta(hours=1),
                created_at=now,
                updated_at=now,
            )


class TestCertificate:
    def test_url_is_required(self) -> None:
        with pytest.raises(ValidationError):
            Certificate.create(UserId(1), ProgramId(2), "   ")

    def test_record_issued(self) -> None:
        certificate = Certificate.create(UserId(1), ProgramId(2), " https://c.example/1.pdf ")

        certificate.record_issued()

        assert certificate.url == "https://c.example/1.pdf"
        (event,) = certificate.collect_events()
        assert isinstance(event, CertificateIssued)
        assert event.url == certificate.url
