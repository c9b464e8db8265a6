"""Service test fixtures: in-memory store, manual clock, event log, ledger factory.

Invariants:
    - Every test gets a fresh InMemoryKeyValueStore shared by all callers in that test
    - as_caller(address) builds a ScavengerLedger authenticated as `address`
    - The clock starts at 100 and only moves when a test advances it
"""

import pytest

from scavenger.core.domain_types import Address, Role, WasteType
from scavenger.infrastructure.event_sinks import InMemoryEventLog
from scavenger.infrastructure.host import ManualClock, PrincipalAuthenticator
from scavenger.infrastructure.kv_store import InMemoryKeyValueStore
from scavenger.services.scavenger_ledger import ScavengerLedger

from tests.services.actors import ALICE, BOB


@pytest.fixture
def store():
    return InMemoryKeyValueStore()


@pytest.fixture
def clock():
    return ManualClock(start=100)


@pytest.fixture
def events():
    return InMemoryEventLog()


@pytest.fixture
def as_caller(store, clock, events):
    def _build(address: Address | None) -> ScavengerLedger:
        return ScavengerLedger(
            store, PrincipalAuthenticator(address), clock, events=events,
        )
    return _build


@pytest.fixture
async def seeded(as_caller):
    """ALICE (recycler) and BOB (collector) registered; ALICE owns material 1."""
    await as_caller(ALICE).register_participant(ALICE, Role.RECYCLER, "Alice")
    await as_caller(BOB).register_participant(BOB, Role.COLLECTOR, "Bob")
    material = await as_caller(ALICE).submit_material(ALICE, WasteType.PLASTIC, 2500)
    return material
