"""SQLAlchemy implementation of the Unit of Work port."""

from dataclasses import dataclass, field
from types import TracebackType
from typing import Self

import structlog
from sqlalchemy.exc import DBAPIError, PendingRollbackError
from sqlalchemy.orm import Session, SessionTransaction
from sqlalchemy.orm.exc import StaleDataError

from academy.application.common.notifier import NotifierProtocol
from academy.application.common.unit_of_work import UnitOfWork
from academy.domain.common import AggregateRoot, DomainEvent
from academy.domain.common.exceptions import ConcurrencyError
from academy.infrastructure.common.persistence import is_serialization_failure

logger = structlog.get_logger(__name__)

# Key under which open units of work are stacked in ``Session.info``
FRAMES_KEY = "academy_uow_frames"


@dataclass
class _Frame:
    savepoint: SessionTransaction | None
    tracked: list[AggregateRoot] = field(default_factory=list)
    finished: bool = False


class SqlAlchemyUnitOfWork(UnitOfWork):
    """
    Unit of Work bound to a SQLAlchemy session.

    Units of work sharing a session nest: the outermost one owns the real
    transaction, inner ones run inside a SAVEPOINT. An inner failure rolls
    back only its savepoint, and its tracked aggregates are dropped. Events
    are dispatched once, after the outermost commit succeeds.

    Leaving the ``with`` block without committing rolls the frame back.
    """

    def __init__(
        self,
        db: Session,
        notifier: NotifierProtocol | None = None,
        serializable_isolation: bool = True,
    ) -> None:
        self.db = db
        self.notifier = notifier
        self.serializable_isolation = serializable_isolation
        self._frame: _Frame | None = None
        self._serializable_requested = False

    @property
    def _frames(self) -> list[_Frame]:
        return self.db.info.setdefault(FRAMES_KEY, [])

    def serializable(self) -> Self:
        self._serializable_requested = True
        return self

    def __enter__(self) -> Self:
        if self._frame is not None:
            raise RuntimeError("Unit of work is already active")

        frames = self._frames
        if frames:
            frame = _Frame(savepoint=self.db.begin_nested())
        else:
            if self._serializable_requested:
                self._apply_serializable_isolation()
            frame = _Frame(savepoint=None)
        frames.append(frame)
        self._frame = frame
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        frame = self._frame
        try:
            if frame is not None and not frame.finished:
                self.rollback()
        finally:
            if frame is not None and frame in self._frames:
                self._frames.remove(frame)
            self._frame = None
            self._serializable_requested = False

    def track(self, aggregate: AggregateRoot) -> None:
        self._require_frame().tracked.append(aggregate)

    def commit(self) -> None:
        """
        Commit this frame.

        An inner frame releases its savepoint and hands its tracked aggregates
        to the enclosing frame. The outermost frame commits the transaction
        and dispatches domain events.

        Raises:
            ConcurrencyError: If the store rejected the transaction
        """
        frame = self._require_frame()

        if frame.savepoint is not None:
            try:
                frame.savepoint.commit()
            except (StaleDataError, DBAPIError) as e:
                self._raise_concurrency(e)
            frame.finished = True
            parent = self._frames[self._frames.index(frame) - 1]
            parent.tracked.extend(frame.tracked)
            return

        try:
            self.db.commit()
        except (StaleDataError, PendingRollbackError) as e:
            self.db.rollback()
            frame.finished = True
            logger.warning("transaction_commit_conflict", error=str(e))
            raise ConcurrencyError() from e
        except DBAPIError as e:
            self.db.rollback()
            frame.finished = True
            self._raise_concurrency(e)
        frame.finished = True
        self._dispatch(self.collect_events())

    def rollback(self) -> None:
        frame = self._require_frame()
        if frame.savepoint is not None:
            if frame.savepoint.is_active:
                frame.savepoint.rollback()
        else:
            self.db.rollback()
        frame.tracked.clear()
        frame.finished = True

    def collect_events(self) -> list[DomainEvent]:
        if self._frame is None:
            return []
        events: list[DomainEvent] = []
        for aggregate in self._frame.tracked:
            events.extend(aggregate.collect_events())
        self._frame.tracked.clear()
        return events

    def _dispatch(self, events: list[DomainEvent]) -> None:
        if self.notifier is None:
            return
        for event in events:
            try:
                self.notifier.notify(event)
            except Exception:
                # The transaction is already committed; a failing notifier never undoes it
                logger.exception(
                    "domain_event_dispatch_failed",
                    event_type=event.event_type,
                    event_id=str(event.event_id),
                )

    def _apply_serializable_isolation(self) -> None:
        if not self.serializable_isolation:
            return
        if self.db.get_bind().dialect.name == "sqlite":
            # SQLite transactions are already serializable
            return
        if self.db.in_transaction():
            logger.debug("serializable_isolation_skipped", reason="transaction_already_open")
            return
        self.db.connection(execution_options={"isolation_level": "SERIALIZABLE"})

    def _require_frame(self) -> _Frame:
        if self._frame is None:
            raise RuntimeError("Unit of work is not active; use it as a context manager")
        return self._frame

    def _raise_concurrency(self, error: Exception) -> None:
        if isinstance(error, StaleDataError) or (
            isinstance(error, DBAPIError) and is_serialization_failure(error)
        ):
            logger.warning("transaction_commit_conflict", error=str(error))
            raise ConcurrencyError() from error
        raise error
