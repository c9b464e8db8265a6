"""Transfer Orchestrator: authorizes a transfer, moves ownership, records history.

Invariants:
    - Guard order is fixed: auth -> sender registered -> receiver registered
      -> material exists -> sender owns material
    - Every guard runs before the first write; a rejected call writes nothing
    - Owner write happens first, history append second
    - The Material Registry stays the single source of current ownership

Design Decisions:
    - Impure shell around a pure guard chain (core/enforce_transfer.py): reads are
      gathered into a TransferContext, validated, then writes run
    - Without a transactional store a crash between the two writes leaves the
      owner updated and history one transfer short; the SQL store commits both
      in one transaction
"""

import logging

from scavenger.core.domain_types import Address, WasteId
from scavenger.core.enforce_transfer import TransferContext, validate_transfer
from scavenger.core.events import WasteTransferred
from scavenger.core.records import Material
from scavenger.core.repository_protocols import (
    Authenticator, LogicalClock, MaterialRegistry, EventPublisher,
)
from scavenger.services.participant_registry import ParticipantRegistry
from scavenger.services.transfer_ledger import TransferLedger

logger = logging.getLogger(__name__)


class TransferOrchestrator:
    """Coordinates one ownership transfer across registry, materials and ledger."""

    def __init__(
        self,
        participants: ParticipantRegistry,
        materials: MaterialRegistry,
        ledger: TransferLedger,
        auth: Authenticator,
        clock: LogicalClock,
        events: EventPublisher | None = None,
    ):
        self._participants = participants
        self._materials = materials
        self._ledger = ledger
        self._auth = auth
        self._clock = clock
        self._events = events

    async def _gather_context(
        self, waste_id: WasteId, from_address: Address, to_address: Address,
    ) -> TransferContext:
        return TransferContext(
            waste_id=waste_id,
            from_address=from_address,
            to_address=to_address,
            sender_registered=await self._participants.is_registered(from_address),
            receiver_registered=await self._participants.is_registered(to_address),
            material=await self._materials.get_material(waste_id),
        )

    async def transfer(
        self,
        waste_id: WasteId,
        from_address: Address,
        to_address: Address,
        note: str = "",
    ) -> Material:
        self._auth.require_authenticated_as(from_address)

        ctx = await self._gather_context(waste_id, from_address, to_address)
        error = validate_transfer(ctx)
        if error:
            logger.warning(
                f"Transfer rejected: {error.message}",
                extra={"waste_id": waste_id, "error_code": error.code},
            )
            raise error

        updated = await self._materials.set_owner(waste_id, to_address)
        transfer = await self._ledger.append(
            waste_id, from_address, to_address, note, self._clock.now(),
        )
        logger.info(
            "Ownership transferred",
            extra={"waste_id": waste_id, "address": to_address},
        )
        if self._events is not None:
            self._events.publish(WasteTransferred(
                waste_id=waste_id,
                from_address=from_address,
                to_address=to_address,
                transferred_at=transfer.transferred_at,
            ))
        return updated
