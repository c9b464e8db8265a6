"""Transfer Orchestrator: guard ordering, side effects, and the ownership gate.

Tests cover:
    - auth is checked before anything else
    - sender, receiver, material, ownership guards fire in that order
    - a rejected transfer leaves owner and history untouched
    - a successful transfer updates the owner first and appends one record
"""

import pytest

from scavenger.core.domain_types import Address, WasteId, Role
from scavenger.core.errors import (
    UnauthorizedError, SenderNotRegisteredError, ReceiverNotRegisteredError,
    MaterialNotFoundError, NotOwnerError,
)
from scavenger.core.events import WasteTransferred
from scavenger.infrastructure.host import PrincipalAuthenticator
from scavenger.services.material_registry import KvMaterialRegistry
from scavenger.services.participant_registry import ParticipantRegistry
from scavenger.services.transfer_ledger import TransferLedger
from scavenger.services.transfer_orchestrator import TransferOrchestrator

from tests.services.actors import ALICE, BOB, CAROL


@pytest.fixture
def orchestrator_for(store, clock, events):
    def _build(caller: Address | None) -> TransferOrchestrator:
        auth = PrincipalAuthenticator(caller)
        return TransferOrchestrator(
            ParticipantRegistry(store, auth, clock, events),
            KvMaterialRegistry(store),
            TransferLedger(store),
            auth, clock, events,
        )
    return _build


async def _snapshot(store, waste_id):
    material = await KvMaterialRegistry(store).get_material(waste_id)
    history = await TransferLedger(store).history(waste_id)
    return material, history


async def test_transfer_moves_owner_and_appends_history(
    seeded, orchestrator_for, store, clock,
):
    clock.advance(5)
    updated = await orchestrator_for(ALICE).transfer(seeded.id, ALICE, BOB, "pickup")

    assert updated.owner == BOB
    material, history = await _snapshot(store, seeded.id)
    assert material.owner == BOB
    assert len(history) == 1
    assert (history[0].from_address, history[0].to_address) == (ALICE, BOB)
    assert history[0].transferred_at == clock.now()
    assert history[0].note == "pickup"


async def test_unauthenticated_caller_rejected_first(orchestrator_for, seeded, store):
    before = await _snapshot(store, seeded.id)
    with pytest.raises(UnauthorizedError):
        # BOB is the caller but claims to send as ALICE; material id is bogus too
        await orchestrator_for(BOB).transfer(WasteId(404), ALICE, BOB)
    assert await _snapshot(store, seeded.id) == before


async def test_sender_checked_before_receiver(orchestrator_for):
    stranger = Address("GSTRANGER")
    with pytest.raises(SenderNotRegisteredError):
        await orchestrator_for(stranger).transfer(WasteId(1), stranger, CAROL)


async def test_receiver_must_be_registered(seeded, orchestrator_for, store):
    before = await _snapshot(store, seeded.id)
    with pytest.raises(ReceiverNotRegisteredError):
        await orchestrator_for(ALICE).transfer(seeded.id, ALICE, CAROL)
    assert await _snapshot(store, seeded.id) == before


async def test_missing_material_rejected(seeded, orchestrator_for):
    with pytest.raises(MaterialNotFoundError):
        await orchestrator_for(ALICE).transfer(WasteId(999), ALICE, BOB)


async def test_not_owner_rejected_without_side_effects(seeded, orchestrator_for, store):
    before = await _snapshot(store, seeded.id)
    with pytest.raises(NotOwnerError):
        await orchestrator_for(BOB).transfer(seeded.id, BOB, ALICE)
    assert await _snapshot(store, seeded.id) == before


async def test_previous_owner_cannot_transfer_again(seeded, orchestrator_for, store):
    await orchestrator_for(ALICE).transfer(seeded.id, ALICE, BOB, "note")
    with pytest.raises(NotOwnerError):
        await orchestrator_for(ALICE).transfer(seeded.id, ALICE, BOB, "note2")
    _, history = await _snapshot(store, seeded.id)
    assert len(history) == 1


async def test_chain_of_custody_order(seeded, orchestrator_for, as_caller, store, clock):
    await as_caller(CAROL).register_participant(CAROL, Role.MANUFACTURER)
    await orchestrator_for(ALICE).transfer(seeded.id, ALICE, BOB, "t1")
    clock.advance()
    await orchestrator_for(BOB).transfer(seeded.id, BOB, CAROL, "t2")

    material, history = await _snapshot(store, seeded.id)
    assert material.owner == CAROL
    assert [(t.from_address, t.to_address, t.note) for t in history] == [
        (ALICE, BOB, "t1"), (BOB, CAROL, "t2"),
    ]
    assert history[0].transferred_at <= history[1].transferred_at


async def test_transfer_publishes_event_after_append(seeded, orchestrator_for, events):
    await orchestrator_for(ALICE).transfer(seeded.id, ALICE, BOB)
    last = events.events[-1]
    assert isinstance(last, WasteTransferred)
    assert (last.waste_id, last.from_address, last.to_address) == (seeded.id, ALICE, BOB)


async def test_rejected_transfer_publishes_nothing(seeded, orchestrator_for, events):
    count = len(events.events)
    with pytest.raises(NotOwnerError):
        await orchestrator_for(BOB).transfer(seeded.id, BOB, ALICE)
    assert len(events.events) == count
