"""Host Capabilities: authentication assertion and logical clocks.

Invariants:
    - PrincipalAuthenticator raises UnauthorizedError unless the principal matches exactly
    - A missing principal never authenticates as anyone
    - Every clock is non-decreasing across calls on the same instance

Design Decisions:
    - The principal is resolved by the outer layer (HTTP header, signed envelope)
      and handed in per call; signature verification is not done here
    - SystemClock clamps to the last value so a wall-clock step backwards
      cannot reorder timestamps
"""

import threading
import time
from typing import Callable

from scavenger.core.domain_types import Address, Timestamp
from scavenger.core.errors import UnauthorizedError


class PrincipalAuthenticator:
    """Authenticates calls made by one known principal."""

    def __init__(self, principal: Address | None):
        self.principal = principal

    def require_authenticated_as(self, address: Address) -> None:
        if self.principal is None or self.principal != address:
            raise UnauthorizedError(address)


class SystemClock:
    """Unix-seconds clock, clamped to be non-decreasing."""

    def __init__(self, source: Callable[[], float] = time.time):
        self._source = source
        self._last = 0
        self._lock = threading.Lock()

    def now(self) -> Timestamp:
        with self._lock:
            self._last = max(self._last, int(self._source()))
            return Timestamp(self._last)


class ManualClock:
    """Clock that only moves when told to. Used by tests and replays."""

    def __init__(self, start: int = 0):
        self._now = start

    def now(self) -> Timestamp:
        return Timestamp(self._now)

    def advance(self, ticks: int = 1) -> Timestamp:
        if ticks < 0:
            raise ValueError("clock cannot move backwards")
        self._now += ticks
        return Timestamp(self._now)
