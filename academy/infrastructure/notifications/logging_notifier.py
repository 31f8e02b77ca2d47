"""Notifier that writes domain events to the structured log."""

import structlog

from academy.domain.common import DomainEvent

logger = structlog.get_logger(__name__)


class LoggingNotifier:
    def notify(self, event: DomainEvent) -> None:
        logger.info("domain_event", **event.to_dict())
