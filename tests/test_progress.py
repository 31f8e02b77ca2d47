"""Tests for program completion and certificate issuance."""

import pytest
from structlog.testing import capture_logs

from academy.core import Container
from academy.domain.commerce.entities.statuses import EnrollmentStatus
from academy.domain.common.exceptions import (
    ConflictError,
    InvalidStatusTransitionError,
    ValidationError,
)
from academy.domain.common.value_objects.ids import ProgramId, UserId
from academy.domain.progress.entities.certificate import Certificate
from academy.domain.progress.entities.program_completion import ProgramCompletion
from academy.domain.progress.entities.statuses import CompletionStatus
from academy.domain.progress.events import CertificateIssued, CompletionStatusChanged
from academy.domain.progress.exceptions import (
    CertificateAlreadyIssuedError,
    CertificateNotFoundError,
    CompletionNotFinishedError,
    CompletionNotStartedError,
)
from academy.models import Certificate as CertificateORM


@pytest.fixture
def enrollment_id(container: Container, user_id: int, program_id: int) -> int:
    """An active (paid) enrollment, which also opens a pending completion."""
    enrollments = container.enrollment_use_case()
    payments = container.payment_use_case()
    enrollment = enrollments.enroll(user_id, program_id)
    payments.confirm_payment(payments.record_payment(enrollment.id.value, 500).id.value)
    enrollments.activate_enrollment(enrollment.id.value)
    return enrollment.id.value


def _certificate_rows(db_session) -> int:
    return db_session.query(CertificateORM).count()


class TestAdvanceCompletion:
    def test_completing_without_a_record_fails(
        self, container: Container, user_id: int, program_id: int
    ) -> None:
        with pytest.raises(ConflictError) as exc_info:
            container.completion_use_case().advance_completion(user_id, program_id, "completed")

        assert isinstance(exc_info.value, CompletionNotStartedError)

    def test_pending_completion_cannot_jump_to_completed(
        self, container: Container, enrollment_id: int, user_id: int, program_id: int
    ) -> None:
        with pytest.raises(InvalidStatusTransitionError):
            container.completion_use_case().advance_completion(user_id, program_id, "completed")

        completion = container.completion_use_case().get_completion(user_id, program_id)
        assert completion.status is CompletionStatus.PENDING

    def test_starting_sets_started_at(
        self, container: Container, enrollment_id: int, user_id: int, program_id: int
    ) -> None:
        completion = container.completion_use_case().advance_completion(
            user_id, program_id, CompletionStatus.ACTIVE
        )

        assert completion.status is CompletionStatus.ACTIVE
        assert completion.started_at is not None
        assert completion.finished_at is None

    def test_unknown_status_is_rejected(
        self, container: Container, enrollment_id: int, user_id: int, program_id: int
    ) -> None:
        with pytest.raises(ValidationError):
            container.completion_use_case().advance_completion(user_id, program_id, "graduated")

    def test_completing_closes_enrollment_and_issues_certificate(
        self,
        container: Container,
        notifier,
        db_session,
        enrollment_id: int,
        user_id: int,
        program_id: int,
    ) -> None:
        completions = container.completion_use_case()
        completions.advance_completion(user_id, program_id, "active")

        completion = completions.advance_completion(user_id, program_id, "completed")

        assert completion.status is CompletionStatus.COMPLETED
        assert completion.finished_at >= completion.started_at
        enrollment = container.enrollment_use_case().get_enrollment(enrollment_id)
        assert enrollment.status is EnrollmentStatus.COMPLETED

        certificate = container.certificate_use_case().get_certificate(user_id, program_id)
        assert certificate.url.endswith(f"/users/{user_id}/programs/{program_id}.pdf")
        assert _certificate_rows(db_session) == 1

        issued = notifier.of_type(CertificateIssued)
        assert len(issued) == 1
        assert issued[0].certificate_id == certificate.id
        statuses = [e.current for e in notifier.of_type(CompletionStatusChanged)]
        assert statuses == [CompletionStatus.ACTIVE, CompletionStatus.COMPLETED]

    def test_completed_is_terminal(
        self, container: Container, enrollment_id: int, user_id: int, program_id: int
    ) -> None:
        completions = container.completion_use_case()
        completions.advance_completion(user_id, program_id, "active")
        completions.advance_completion(user_id, program_id, "completed")

        with pytest.raises(InvalidStatusTransitionError):
            completions.advance_completion(user_id, program_id, "cancelled")


class TestCertificates:
    def test_second_issue_for_the_pair_fails_without_duplicate_row(
        self,
        container: Container,
        db_session,
        enrollment_id: int,
        user_id: int,
        program_id: int,
    ) -> None:
        completions = container.completion_use_case()
        completions.advance_completion(user_id, program_id, "active")
        completions.advance_completion(user_id, program_id, "completed")

        with pytest.raises(ConflictError) as exc_info:
            container.certificate_use_case().issue_certificate(user_id, program_id)

        assert isinstance(exc_info.value, CertificateAlreadyIssuedError)
        assert _certificate_rows(db_session) == 1

    def test_certificate_requires_a_completed_program(
        self, container: Container, enrollment_id: int, user_id: int, program_id: int
    ) -> None:
        container.completion_use_case().advance_completion(user_id, program_id, "active")

        with pytest.raises(CompletionNotFinishedError):
            container.certificate_use_case().issue_certificate(user_id, program_id)

    def test_certificate_without_any_completion(
        self, container: Container, user_id: int, program_id: int
    ) -> None:
        with pytest.raises(CompletionNotFinishedError):
            container.certificate_use_case().issue_certificate(user_id, program_id)

    def test_existing_certificate_does_not_undo_completion(
        self,
        container: Container,
        db_session,
        enrollment_id: int,
        user_id: int,
        program_id: int,
    ) -> None:
        """A certificate issued by hand first turns the automatic issuance into a no-op."""
        container.certificate_repository().save(
            Certificate.create(UserId(user_id), ProgramId(program_id), "https://x/manual.pdf")
        )
        db_session.commit()
        completions = container.completion_use_case()
        completions.advance_completion(user_id, program_id, "active")

        completion = completions.advance_completion(user_id, program_id, "completed")

        assert completion.status is CompletionStatus.COMPLETED
        certificate = container.certificate_use_case().get_certificate(user_id, program_id)
        assert certificate.url == "https://x/manual.pdf"
        assert _certificate_rows(db_session) == 1

    def test_explicit_url_is_kept(
        self, container: Container, db_session, user_id: int, program_id: int
    ) -> None:
        completion = ProgramCompletion.create(UserId(user_id), ProgramId(program_id))
        completion.advance_to(CompletionStatus.ACTIVE)
        completion.advance_to(CompletionStatus.COMPLETED)
        container.completion_repository().save(completion)
        db_session.commit()

        certificate = container.certificate_use_case().issue_certificate(
            user_id, program_id, url="https://files.example.com/c.pdf"
        )

        assert certificate.url == "https://files.example.com/c.pdf"
        assert certificate.id.value > 0

    def test_missing_certificate(self, container: Container, user_id: int) -> None:
        with pytest.raises(CertificateNotFoundError):
            container.certificate_use_case().get_certificate(user_id, 12345)
        assert container.certificate_use_case().list_certificates(user_id) == []


class TestCompletionWithoutActiveEnrollment:
    """Finishing a program issues the certificate whatever state the enrollment is in."""

    def test_cancelled_enrollment_stays_cancelled(
        self, container: Container, enrollment_id: int, user_id: int, program_id: int
    ) -> None:
        completions = container.completion_use_case()
        container.enrollment_use_case().cancel_enrollment(enrollment_id)
        completions.advance_completion(user_id, program_id, "active")

        with capture_logs() as logs:
            completions.advance_completion(user_id, program_id, "completed")

        enrollment = container.enrollment_use_case().get_enrollment(enrollment_id)
        assert enrollment.status is EnrollmentStatus.CANCELLED
        certificate = container.certificate_use_case().get_certificate(user_id, program_id)
        assert certificate.url.endswith(f"/users/{user_id}/programs/{program_id}.pdf")
        assert any(log["event"] == "no_active_enrollment_to_complete" for log in logs)

    def test_pending_enrollment_stays_pending(
        self, container: Container, db_session, user_id: int, program_id: int
    ) -> None:
        enrollment_id = container.enrollment_use_case().enroll(user_id, program_id).id.value
        completion = ProgramCompletion.create(UserId(user_id), ProgramId(program_id))
        completion.advance_to(CompletionStatus.ACTIVE)
        container.completion_repository().save(completion)

        container.completion_use_case().advance_completion(user_id, program_id, "completed")

        enrollment = container.enrollment_use_case().get_enrollment(enrollment_id)
        assert enrollment.status is EnrollmentStatus.PENDING
        assert _certificate_rows(db_session) == 1
