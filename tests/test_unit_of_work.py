"""Tests for transactions, nesting, event dispatch and optimistic locking."""

import pytest
from sqlalchemy import text
from structlog.testing import capture_logs

from academy.core import Container
from academy.domain.catalog.entities.program import Program
from academy.domain.commerce.entities.statuses import EnrollmentStatus, PaymentStatus
from academy.domain.common.exceptions import ConcurrencyError
from academy.domain.common.value_objects.ids import EnrollmentId, PaymentId
from academy.infrastructure.common.unit_of_work import FRAMES_KEY, SqlAlchemyUnitOfWork
from academy.models import Program as ProgramORM


def _program_names(db_session) -> list[str]:
    return sorted(name for (name,) in db_session.query(ProgramORM.name))


class ExplodingNotifier:
    def notify(self, event) -> None:
        raise RuntimeError("notifier down")


class TestTransactionBoundaries:
    def test_exception_rolls_back(self, container: Container, db_session) -> None:
        uow = container.uow()
        repository = container.program_repository()

        with pytest.raises(RuntimeError), uow:
            repository.save(Program.create("Doomed", 100, "course"))
            raise RuntimeError("boom")

        assert _program_names(db_session) == []
        assert db_session.info.get(FRAMES_KEY) == []

    def test_leaving_without_commit_rolls_back(self, container: Container, db_session) -> None:
        repository = container.program_repository()

        with container.uow():
            repository.save(Program.create("Uncommitted", 100, "course"))

        assert _program_names(db_session) == []

    def test_inner_failure_keeps_outer_work(self, container: Container, db_session) -> None:
        repository = container.program_repository()
        outer = container.uow()
        inner = container.uow()

        with outer:
            repository.save(Program.create("Outer", 100, "course"))
            with pytest.raises(RuntimeError), inner:
                repository.save(Program.create("Inner", 100, "course"))
                raise RuntimeError("inner failed")
            outer.commit()

        assert _program_names(db_session) == ["Outer"]

    def test_inner_commit_is_undone_by_outer_rollback(
        self, container: Container, db_session
    ) -> None:
        repository = container.program_repository()
        outer = container.uow()
        inner = container.uow()

        with outer:
            with inner:
                repository.save(Program.create("Inner", 100, "course"))
                inner.commit()
            outer.rollback()

        assert _program_names(db_session) == []

    def test_unit_of_work_is_not_reentrant(self, container: Container) -> None:
        uow = container.uow()
        with uow, pytest.raises(RuntimeError):
            uow.__enter__()

    def test_commit_outside_context_fails(self, container: Container) -> None:
        with pytest.raises(RuntimeError):
            container.uow().commit()


class TestEventDispatch:
    def test_events_wait_for_the_outermost_commit(
        self, container: Container, notifier, user_id: int, program_id: int
    ) -> None:
        enrollment_id = container.enrollment_use_case().enroll(user_id, program_id).id.value
        outer = container.uow()

        with outer:
            container.enrollment_use_case().cancel_enrollment(enrollment_id)
            assert notifier.events == []
            outer.commit()

        assert len(notifier.events) == 1
        assert notifier.events[0].current is EnrollmentStatus.CANCELLED

    def test_rolled_back_events_are_dropped(
        self, container: Container, notifier, user_id: int, program_id: int
    ) -> None:
        enrollment_id = container.enrollment_use_case().enroll(user_id, program_id).id.value

        with container.uow():
            container.enrollment_use_case().cancel_enrollment(enrollment_id)

        assert notifier.events == []
        enrollment = container.enrollment_use_case().get_enrollment(enrollment_id)
        assert enrollment.status is EnrollmentStatus.PENDING

    def test_failing_notifier_does_not_undo_commit(
        self, container: Container, db_session, user_id: int, program_id: int
    ) -> None:
        enrollment_id = container.enrollment_use_case().enroll(user_id, program_id).id.value
        uow = SqlAlchemyUnitOfWork(db_session, notifier=ExplodingNotifier())
        use_case = container.enrollment_use_case(uow=uow)

        with capture_logs() as logs:
            cancelled = use_case.cancel_enrollment(enrollment_id)

        assert cancelled.status is EnrollmentStatus.CANCELLED
        assert any(log["event"] == "domain_event_dispatch_failed" for log in logs)
        stored = container.enrollment_use_case().get_enrollment(enrollment_id)
        assert stored.status is EnrollmentStatus.CANCELLED


class TestOptimisticLocking:
    def test_stale_version_raises_concurrency_error(
        self, container: Container, db_session, user_id: int, program_id: int
    ) -> None:
        enrollment_id = container.enrollment_use_case().enroll(user_id, program_id).id.value
        repository = container.enrollment_repository()
        enrollment = repository.find_by_id(EnrollmentId(enrollment_id))

        # Another writer bumps the version behind the session's back
        db_session.execute(
            text("UPDATE enrollments SET version = version + 1 WHERE id = :id"),
            {"id": enrollment_id},
        )
        enrollment.cancel()

        with pytest.raises(ConcurrencyError):
            repository.save(enrollment)

    def test_version_increments_on_update(
        self, container: Container, db_session, user_id: int, program_id: int
    ) -> None:
        enrollments = container.enrollment_use_case()
        enrollment_id = enrollments.enroll(user_id, program_id).id.value
        enrollments.cancel_enrollment(enrollment_id)

        version = db_session.execute(
            text("SELECT version FROM enrollments WHERE id = :id"), {"id": enrollment_id}
        ).scalar_one()
        assert version == 2

    def test_stale_copy_cannot_overwrite_a_concurrent_change(
        self, container: Container, db_session, user_id: int, program_id: int
    ) -> None:
        enrollment_id = container.enrollment_use_case().enroll(user_id, program_id).id.value
        repository = container.enrollment_repository()
        stale = repository.find_by_id(EnrollmentId(enrollment_id))
        assert stale.version == 1

        db_session.execute(
            text(
                "UPDATE enrollments SET status = 'cancelled', version = version + 1 "
                "WHERE id = :id"
            ),
            {"id": enrollment_id},
        )
        stale.activate(has_paid_payment=True)

        with pytest.raises(ConcurrencyError):
            repository.save(stale)

        row = db_session.execute(
            text("SELECT status, version FROM enrollments WHERE id = :id"), {"id": enrollment_id}
        ).one()
        assert tuple(row) == ("cancelled", 2)

    def test_saved_copy_carries_the_new_version(
        self, container: Container, user_id: int, program_id: int
    ) -> None:
        enrollment_id = container.enrollment_use_case().enroll(user_id, program_id).id.value
        repository = container.enrollment_repository()
        enrollment = repository.find_by_id(EnrollmentId(enrollment_id))

        enrollment.activate(has_paid_payment=True)
        saved = repository.save(enrollment)
        enrollment.cancel()
        repository.save(enrollment)

        assert saved.version == 2
        assert repository.find_by_id(EnrollmentId(enrollment_id)).version == 3

    def test_stale_payment_is_rejected(
        self, container: Container, db_session, user_id: int, program_id: int
    ) -> None:
        enrollment_id = container.enrollment_use_case().enroll(user_id, program_id).id.value
        payment_id = container.payment_use_case().record_payment(enrollment_id, 500).id.value
        repository = container.payment_repository()
        stale = repository.find_by_id(PaymentId(payment_id))

        container.payment_use_case().fail_payment(payment_id)
        stale.confirm()

        with pytest.raises(ConcurrencyError):
            repository.save(stale)
        assert repository.find_by_id(PaymentId(payment_id)).status is PaymentStatus.FAILED
