"""Program completion status domain."""

from academy.domain.common.status import StatusEnum, TransitionTable


class CompletionStatus(StatusEnum):
    PENDING = "pending"
    ACTIVE = "active"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


COMPLETION_TRANSITIONS: TransitionTable[CompletionStatus] = TransitionTable(
    "ProgramCompletion",
    {
        CompletionStatus.PENDING: {CompletionStatus.ACTIVE, CompletionStatus.CANCELLED},
        CompletionStatus.ACTIVE: {CompletionStatus.COMPLETED, CompletionStatus.CANCELLED},
        CompletionStatus.COMPLETED: set(),
        CompletionStatus.CANCELLED: set(),
    },
)
