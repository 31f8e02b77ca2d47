"""Protocol for the domain event notification collaborator."""

from typing import Protocol

from academy.domain.common.domain_event import DomainEvent


class NotifierProtocol(Protocol):
    """Receives domain events after the transaction that produced them commits."""

    def notify(self, event: DomainEvent) -> None:
        ...
