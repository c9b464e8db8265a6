"""Event Sinks: EventPublisher implementations.

Invariants:
    - Publishing never raises into the ledger call that produced the event
"""

import logging

from scavenger.core.events import LedgerEvent

logger = logging.getLogger(__name__)


class LoggingEventPublisher:
    """Writes every event to the log at INFO with its payload as extra fields."""

    def publish(self, event: LedgerEvent) -> None:
        payload = event.to_dict()
        logger.info(f"event:{event.topic}", extra={"event": payload})


class InMemoryEventLog:
    """Keeps published events in order. Used by tests and embedders."""

    def __init__(self):
        self.events: list[LedgerEvent] = []

    def publish(self, event: LedgerEvent) -> None:
        self.events.append(event)

    def topics(self) -> list[str]:
        return [e.topic for e in self.events]
