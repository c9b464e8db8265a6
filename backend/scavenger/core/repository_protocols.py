"""Boundary Protocols: contracts between the ledger core and its host.

Invariants:
    - Core NEVER imports from shell; dependency arrows point inward only
    - All IO operations accessed through Protocol types
    - Implementations provided by the shell via constructor injection

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Store and material access are async because implementations do IO;
      authentication and the clock are synchronous host facts
"""

from typing import Protocol

from scavenger.core.domain_types import Address, WasteId, Timestamp, StorageKey
from scavenger.core.events import LedgerEvent
from scavenger.core.records import Material


class KeyValueStore(Protocol):
    """Durable opaque-key storage. Single-key atomicity only."""
    async def get(self, key: StorageKey) -> bytes | None: ...
    async def set(self, key: StorageKey, value: bytes) -> None: ...
    async def has(self, key: StorageKey) -> bool: ...


class Authenticator(Protocol):
    """Asserts that the invoking principal is `address`.

    Raises UnauthorizedError otherwise; the whole call fails.
    """
    def require_authenticated_as(self, address: Address) -> None: ...


class LogicalClock(Protocol):
    """Non-decreasing tick source shared by every call on one ledger."""
    def now(self) -> Timestamp: ...


class MaterialRegistry(Protocol):
    """Single source of truth for current material ownership."""
    async def get_material(self, waste_id: WasteId) -> Material | None: ...
    async def set_owner(self, waste_id: WasteId, new_owner: Address) -> Material: ...


class EventPublisher(Protocol):
    """Receives ledger events after the state they describe is written."""
    def publish(self, event: LedgerEvent) -> None: ...


class UnitOfWork(Protocol):
    """Commit/rollback boundary around one public call (AsyncSession satisfies it)."""
    async def commit(self) -> None: ...
    async def rollback(self) -> None: ...
