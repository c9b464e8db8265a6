"""Key/Value Stores: the two KeyValueStore implementations the ledger runs on.

Invariants:
    - get returns None for absent keys, never raises for absence
    - set replaces the whole value for a key
    - Values are returned exactly as stored (bytes in, bytes out)

Design Decisions:
    - SqlKeyValueStore binds to a caller-owned AsyncSession and only flushes; the
      caller commits once per public call so all writes of a call land together
    - InMemoryKeyValueStore backs tests and embedded use without a database
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from scavenger.core.domain_types import StorageKey
from scavenger.models.kv_entry import KvEntry

logger = logging.getLogger(__name__)


class InMemoryKeyValueStore:
    """Dict-backed store. Process-local, lost on exit."""

    def __init__(self):
        self._data: dict[StorageKey, bytes] = {}

    async def get(self, key: StorageKey) -> bytes | None:
        return self._data.get(key)

    async def set(self, key: StorageKey, value: bytes) -> None:
        self._data[key] = bytes(value)

    async def has(self, key: StorageKey) -> bool:
        return key in self._data

    def __len__(self) -> int:
        return len(self._data)


class SqlKeyValueStore:
    """Store backed by the kv_entries table through an AsyncSession."""

    def __init__(self, session: AsyncSession):
        self._session = session

    async def _entry(self, key: StorageKey) -> KvEntry | None:
        return await self._session.get(KvEntry, (key[0], key[1]))

    async def get(self, key: StorageKey) -> bytes | None:
        entry = await self._entry(key)
        return entry.value if entry is not None else None

    async def set(self, key: StorageKey, value: bytes) -> None:
        entry = await self._entry(key)
        if entry is None:
            self._session.add(KvEntry(namespace=key[0], key=key[1], value=value))
        else:
            entry.value = value
        await self._session.flush()

    async def has(self, key: StorageKey) -> bool:
        return await self._entry(key) is not None
