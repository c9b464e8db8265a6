"""API Dependencies: per-request ledger assembly.

Invariants:
    - One ScavengerLedger per request, bound to that request's AsyncSession
    - All requests share one process-wide lock, so ledger calls never interleave
    - The caller principal comes from the X-Participant-Address header; absent header
      means an unauthenticated caller (reads still work, mutations fail)

Design Decisions:
    - Clock is a process singleton: timestamps stay non-decreasing across requests
"""

import asyncio
from functools import lru_cache

from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession

from scavenger.config import get_settings
from scavenger.core.domain_types import Address
from scavenger.core.repository_protocols import LogicalClock
from scavenger.infrastructure.database import get_db
from scavenger.infrastructure.event_sinks import LoggingEventPublisher
from scavenger.infrastructure.host import PrincipalAuthenticator, SystemClock, ManualClock
from scavenger.infrastructure.kv_store import SqlKeyValueStore
from scavenger.services.scavenger_ledger import ScavengerLedger

_ledger_lock = asyncio.Lock()
_event_publisher = LoggingEventPublisher()


@lru_cache
def get_clock() -> LogicalClock:
    if get_settings().clock_mode == "manual":
        return ManualClock()
    return SystemClock()


def get_caller(
    x_participant_address: str | None = Header(default=None),
) -> Address | None:
    if x_participant_address is None or not x_participant_address.strip():
        return None
    return Address(x_participant_address.strip())


async def get_ledger(
    db: AsyncSession = Depends(get_db),
    caller: Address | None = Depends(get_caller),
) -> ScavengerLedger:
    return ScavengerLedger(
        SqlKeyValueStore(db),
        PrincipalAuthenticator(caller),
        get_clock(),
        events=_event_publisher,
        unit_of_work=db,
        lock=_ledger_lock,
    )
