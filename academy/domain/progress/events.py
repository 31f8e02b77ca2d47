"""Progress domain events."""

from dataclasses import dataclass

from academy.domain.common.domain_event import DomainEvent
from academy.domain.common.value_objects.ids import (
    CertificateId,
    ProgramCompletionId,
    ProgramId,
    UserId,
)
from academy.domain.progress.entities.statuses import CompletionStatus


@dataclass(frozen=True)
class CompletionStatusChanged(DomainEvent):
    completion_id: ProgramCompletionId
    user_id: UserId
    program_id: ProgramId
    previous: CompletionStatus
    current: CompletionStatus


@dataclass(frozen=True)
class CertificateIssued(DomainEvent):
    certificate_id: CertificateId
    user_id: UserId
    program_id: ProgramId
    url: str
