"""Transfer Ledger: per-material append-only sequence of Transfer records.

Invariants:
    - append is the only write; there is no delete, update, or truncate
    - history returns the full stored sequence in append order, empty if none
    - Sequences for different waste ids live under different keys and never interact
    - No validation here: callers authorize before appending

Design Decisions:
    - Whole sequence stored as one blob under ("transfers", waste_id): append is a
      read-modify-write, O(n) in history length
"""

import logging

from scavenger.core.domain_types import Address, WasteId, Timestamp, transfers_key
from scavenger.core.records import Transfer, encode_transfers, decode_transfers
from scavenger.core.repository_protocols import KeyValueStore

logger = logging.getLogger(__name__)


class TransferLedger:
    """Records transfers. Trusts its caller for policy."""

    def __init__(self, store: KeyValueStore):
        self._store = store

    async def append(
        self,
        waste_id: WasteId,
        from_address: Address,
        to_address: Address,
        note: str,
        now: Timestamp,
    ) -> Transfer:
        transfers = await self.history(waste_id)
        transfer = Transfer(
            waste_id=waste_id,
            from_address=from_address,
            to_address=to_address,
            transferred_at=now,
            note=note,
        )
        transfers.append(transfer)
        await self._store.set(transfers_key(waste_id), encode_transfers(transfers))
        logger.debug(
            f"Transfer #{len(transfers)} recorded", extra={"waste_id": waste_id},
        )
        return transfer

    async def history(self, waste_id: WasteId) -> list[Transfer]:
        key = transfers_key(waste_id)
        raw = await self._store.get(key)
        if raw is None:
            return []
        return decode_transfers(key, raw)
