"""
ProgramCompletion aggregate root.

Progress-tracking record for one (user, program) pair, distinct from the
enrollment. It models the student's advancement through the program.
"""

from dataclasses import dataclass, field
from datetime import datetime

from academy.domain.common.aggregate_root import AggregateRoot
from academy.domain.common.clock import utc_now
from academy.domain.common.exceptions import ValidationError
from academy.domain.common.value_objects.ids import ProgramCompletionId, ProgramId, UserId
from academy.domain.progress.entities.statuses import COMPLETION_TRANSITIONS, CompletionStatus
from academy.domain.progress.events import CompletionStatusChanged


def _ensure_chronology(started_at: datetime | None, finished_at: datetime | None) -> None:
    if started_at is not None and finished_at is not None and finished_at < started_at:
        raise ValidationError(
            "finished_at cannot be earlier than started_at",
            field="finished_at",
            value=finished_at.isoformat(),
        )


@dataclass
class ProgramCompletion(AggregateRoot[ProgramCompletionId]):
    """
    ProgramCompletion aggregate root.

    State machine::

        pending -> active -> completed
        pending -> cancelled
        active  -> cancelled

    Business Rules:
    - Unique per (user, program)
    - started_at is set on entering active, unless already set
    - finished_at is set on entering completed and is never earlier than started_at
    - completed and cancelled are terminal
    """

    id: ProgramCompletionId
    user_id: UserId
    program_id: ProgramId
    status: CompletionStatus = CompletionStatus.PENDING
    started_at: datetime | None = None
    finished_at: datetime | None = None
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime = field(default_factory=utc_now)
    version: int = 1

    def __post_init__(self) -> None:
        """Validate invariants."""
        self.status = CompletionStatus.parse(self.status)
        _ensure_chronology(self.started_at, self.finished_at)

    def is_completed(self) -> bool:
        return self.status is CompletionStatus.COMPLETED

    def is_terminal(self) -> bool:
        return COMPLETION_TRANSITIONS.is_terminal(self.status)

    def advance_to(self, requested: CompletionStatus, now: datetime | None = None) -> None:
        """
        Move the completion to ``requested``, stamping started_at/finished_at.

        Args:
            requested: Target status
            now: Timestamp to record (defaults to the current UTC time)

        Raises:
            InvalidStatusTransitionError: If the move is not allowed
            ValidationError: If finishing would put finished_at before started_at
        """
        requested = CompletionStatus.parse(requested)
        COMPLETION_TRANSITIONS.ensure(self.id.value, self.status, requested)
        now = now or utc_now()

        started_at = self.started_at
        finished_at = self.finished_at
        if requested is CompletionStatus.ACTIVE and started_at is None:
            started_at = now
        if requested is CompletionStatus.COMPLETED:
            finished_at = now
        _ensure_chronology(started_at, finished_at)

        previous = self.status
        self.status = requested
        self.started_at = started_at
        self.finished_at = finished_at
        self.updated_at = utc_now()
        self._record_event(
            CompletionStatusChanged(
                completion_id=self.id,
                user_id=self.user_id,
                program_id=self.program_id,
                previous=previous,
                current=requested,
            )
        )

    def start(self, now: datetime | None = None) -> None:
        self.advance_to(CompletionStatus.ACTIVE, now)

    def finish(self, now: datetime | None = None) -> None:
        self.advance_to(CompletionStatus.COMPLETED, now)

    def cancel(self) -> None:
        self.advance_to(CompletionStatus.CANCELLED)

    @classmethod
    def create(cls, user_id: UserId, program_id: ProgramId) -> "ProgramCompletion":
        """Factory for the pending record created when an enrollment becomes active."""
        now = utc_now()
        return cls(
            id=ProgramCompletionId.generate(),
            user_id=user_id,
            program_id=program_id,
            status=CompletionStatus.PENDING,
            created_at=now,
            updated_at=now,
        )

    @classmethod
    def create_with_id(
        cls,
        id: ProgramCompletionId,
        user_id: UserId,
        program_id: ProgramId,
        status: CompletionStatus,
        started_at: datetime | None,
        finished_at: datetime | None,
        created_at: datetime,
        updated_at: datetime,
        version: int = 1,
    ) -> "ProgramCompletion":
        """Factory for reconstituting a completion from persistence."""
        return cls(
            id=id,
            user_id=user_id,
            program_id=program_id,
            status=status,
            started_at=started_at,
            finished_at=finished_at,
            created_at=created_at,
            updated_at=updated_at,
            version=version,
        )
