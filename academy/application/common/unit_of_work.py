"""
Unit of Work interface.

The Unit of Work pattern maintains a list of objects affected by a business
transaction and coordinates the writing out of changes and the resolution
of concurrency problems.

Example:
    class EnrollmentUseCase:
        def __init__(self, repo: EnrollmentRepositoryProtocol, uow: UnitOfWork) -> None:
            self.repo = repo
            self.uow = uow

        def cancel_enrollment(self, enrollment_id: int) -> Enrollment:
            with self.uow:
                enrollment = self.repo.find_by_id(EnrollmentId(enrollment_id), for_update=True)
                enrollment.cancel()
                saved = self.repo.save(enrollment)
                self.uow.track(enrollment)
                self.uow.commit()
                return saved

Units of work nest: an inner ``with uow`` joins the outer transaction, and
only the outermost ``commit`` reaches the store.
"""

from abc import ABC, abstractmethod
from types import TracebackType
from typing import Self

from academy.domain.common import AggregateRoot, DomainEvent


class UnitOfWork(ABC):
    """
    Unit of Work interface (Port).

    The Unit of Work:
    - Manages database transactions
    - Ensures atomicity of operations (any exception rolls back everything)
    - Collects domain events from tracked aggregates and dispatches them
      after a successful commit
    - Can be used as a context manager

    Infrastructure layer provides concrete implementations
    (e.g., SqlAlchemyUnitOfWork).
    """

    @abstractmethod
    def commit(self) -> None:
        """
        Commit the current transaction.

        This persists all changes made within the unit of work.
        After commit, domain events are dispatched.

        Raises:
            ConcurrencyError: If the store rejected the transaction
        """
        raise NotImplementedError

    @abstractmethod
    def rollback(self) -> None:
        """
        Rollback the current transaction.

        This discards all changes made within the unit of work.
        """
        raise NotImplementedError

    @abstractmethod
    def track(self, aggregate: AggregateRoot) -> None:
        """Register an aggregate whose recorded events are dispatched on commit."""
        raise NotImplementedError

    @abstractmethod
    def serializable(self) -> Self:
        """
        Request SERIALIZABLE isolation for the next transaction.

        Used by the uniqueness-sensitive paths (enrollment creation,
        certificate issuance). Backends without the level ignore it.
        """
        raise NotImplementedError

    def __enter__(self) -> Self:
        """Enter the unit of work context."""
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """
        Exit the unit of work context.

        If an exception occurred, rollback. Otherwise, do nothing
        (commit must be called explicitly).
        """
        if exc_type is not None:
            self.rollback()

    def collect_events(self) -> list[DomainEvent]:
        """Collect domain events from tracked aggregates."""
        return []
