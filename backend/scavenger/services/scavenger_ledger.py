"""Scavenger Ledger: the public surface over registry, materials and transfers.

Invariants:
    - Every public call holds the ledger lock for its whole duration; calls never interleave
    - A mutation's writes are committed once, after the call succeeds, inside the lock
    - A failed call (commit failures included) rolls the unit of work back;
      callers observe no partial state
    - Events raised during a mutation reach the publisher only after commit succeeds
    - get_transfers_from / get_transfers_to always return [] (no secondary index exists)

Design Decisions:
    - One asyncio.Lock per ledger instance; the HTTP layer passes a process-wide
      lock so concurrent requests serialize the same way a single-caller host would
    - UnitOfWork is optional: the in-memory store writes through immediately
    - Services publish into a per-ledger queue; _mutation drains it on success
      and discards it on failure
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from scavenger.core.domain_types import Address, WasteId, Role, WasteType
from scavenger.core.errors import NotRegisteredError, InvalidMaterialError
from scavenger.core.events import LedgerEvent
from scavenger.core.records import Participant, Material, Transfer
from scavenger.core.repository_protocols import (
    KeyValueStore, Authenticator, LogicalClock, MaterialRegistry,
    EventPublisher, UnitOfWork,
)
from scavenger.services.material_registry import KvMaterialRegistry
from scavenger.services.participant_registry import ParticipantRegistry
from scavenger.services.transfer_ledger import TransferLedger
from scavenger.services.transfer_orchestrator import TransferOrchestrator

logger = logging.getLogger(__name__)


class _PendingEvents:
    """EventPublisher that holds events until the surrounding call commits."""

    def __init__(self):
        self._queued: list[LedgerEvent] = []

    def publish(self, event: LedgerEvent) -> None:
        self._queued.append(event)

    def discard(self) -> None:
        self._queued.clear()

    def flush_to(self, target: EventPublisher | None) -> None:
        queued, self._queued = self._queued, []
        if target is None:
            return
        for event in queued:
            target.publish(event)


class ScavengerLedger:
    """Participant registry and ownership-transfer ledger behind one lock."""

    def __init__(
        self,
        store: KeyValueStore,
        auth: Authenticator,
        clock: LogicalClock,
        materials: MaterialRegistry | None = None,
        events: EventPublisher | None = None,
        unit_of_work: UnitOfWork | None = None,
        lock: asyncio.Lock | None = None,
    ):
        self._auth = auth
        self._clock = clock
        self._uow = unit_of_work
        self._lock = lock or asyncio.Lock()
        self._events = events
        self._pending = _PendingEvents()
        self._kv_materials = KvMaterialRegistry(store)
        self.materials: MaterialRegistry = materials or self._kv_materials
        self.participants = ParticipantRegistry(store, auth, clock, self._pending)
        self.ledger = TransferLedger(store)
        self.orchestrator = TransferOrchestrator(
            self.participants, self.materials, self.ledger, auth, clock,
            self._pending,
        )

    @asynccontextmanager
    async def _mutation(self) -> AsyncIterator[None]:
        async with self._lock:
            try:
                yield
                if self._uow is not None:
                    await self._uow.commit()
            except Exception:
                self._pending.discard()
                if self._uow is not None:
                    await self._uow.rollback()
                raise
            self._pending.flush_to(self._events)

    # ─── Participants ───────────────────────────────────────────

    async def register_participant(
        self,
        address: Address,
        role: Role,
        name: str = "",
        latitude: int = 0,
        longitude: int = 0,
    ) -> Participant:
        async with self._mutation():
            return await self.participants.register(
                address, role, name, latitude, longitude,
            )

    async def is_participant_registered(self, address: Address) -> bool:
        async with self._lock:
            return await self.participants.is_registered(address)

    async def get_participant(self, address: Address) -> Participant | None:
        async with self._lock:
            return await self.participants.get(address)

    async def update_role(self, address: Address, new_role: Role) -> Participant:
        async with self._mutation():
            return await self.participants.update_role(address, new_role)

    # ─── Materials ──────────────────────────────────────────────

    async def submit_material(
        self,
        submitter: Address,
        waste_type: WasteType,
        weight: int,
        description: str = "",
    ) -> Material:
        """Create a material owned by a registered submitter.

        Always writes to the KV-backed registry, even when a different
        MaterialRegistry was injected for ownership reads and writes.
        """
        async with self._mutation():
            self._auth.require_authenticated_as(submitter)
            if not await self.participants.is_registered(submitter):
                raise NotRegisteredError(submitter)
            if weight <= 0:
                raise InvalidMaterialError(
                    f"Material weight must be positive, got {weight}", "weight",
                )
            return await self._kv_materials.create(
                submitter, waste_type, weight, self._clock.now(), description,
            )

    async def get_material(self, waste_id: WasteId) -> Material | None:
        async with self._lock:
            return await self.materials.get_material(waste_id)

    # ─── Transfers ──────────────────────────────────────────────

    async def transfer_waste(
        self,
        waste_id: WasteId,
        from_address: Address,
        to_address: Address,
        note: str = "",
    ) -> Material:
        async with self._mutation():
            return await self.orchestrator.transfer(
                waste_id, from_address, to_address, note,
            )

    async def get_transfer_history(self, waste_id: WasteId) -> list[Transfer]:
        async with self._lock:
            return await self.ledger.history(waste_id)

    async def get_transfers_from(self, address: Address) -> list[Transfer]:
        # TODO: needs a (sender, waste_id) index written by TransferLedger.append
        return []

    async def get_transfers_to(self, address: Address) -> list[Transfer]:
        # TODO: needs a (receiver, waste_id) index written by TransferLedger.append
        return []
