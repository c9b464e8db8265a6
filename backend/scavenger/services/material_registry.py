"""Material Registry: KV-backed owner of material records and current ownership.

Invariants:
    - Ids are assigned from a stored counter, starting at 1, never reused
    - set_owner changes only the owner field
    - set_owner on a missing id raises MaterialNotFoundError

Design Decisions:
    - Lives beside the ledger on the same store so owner updates and history
      appends share one unit of work under the SQL store
"""

import logging

from scavenger.core.domain_types import (
    Address, WasteId, Timestamp, WasteType, material_key, MATERIAL_SEQ_KEY,
)
from scavenger.core.errors import MaterialNotFoundError, CorruptRecordError
from scavenger.core.records import Material, encode_material, decode_material
from scavenger.core.repository_protocols import KeyValueStore

logger = logging.getLogger(__name__)


class KvMaterialRegistry:
    """MaterialRegistry implementation over a KeyValueStore."""

    def __init__(self, store: KeyValueStore):
        self._store = store

    async def _next_id(self) -> WasteId:
        raw = await self._store.get(MATERIAL_SEQ_KEY)
        try:
            next_id = int(raw.decode("ascii")) if raw is not None else 1
        except (UnicodeDecodeError, ValueError) as e:
            raise CorruptRecordError(MATERIAL_SEQ_KEY, str(e)) from e
        await self._store.set(MATERIAL_SEQ_KEY, str(next_id + 1).encode("ascii"))
        return WasteId(next_id)

    async def create(
        self,
        owner: Address,
        waste_type: WasteType,
        weight: int,
        now: Timestamp,
        description: str = "",
    ) -> Material:
        material = Material(
            id=await self._next_id(),
            owner=owner,
            waste_type=waste_type,
            weight=weight,
            submitted_at=now,
            description=description,
        )
        await self._store.set(material_key(material.id), encode_material(material))
        logger.info(
            f"Material submitted ({waste_type.value}, {weight}g)",
            extra={"waste_id": material.id, "address": owner},
        )
        return material

    async def get_material(self, waste_id: WasteId) -> Material | None:
        key = material_key(waste_id)
        raw = await self._store.get(key)
        if raw is None:
            return None
        return decode_material(key, raw)

    async def set_owner(self, waste_id: WasteId, new_owner: Address) -> Material:
        material = await self.get_material(waste_id)
        if material is None:
            raise MaterialNotFoundError(waste_id)
        updated = material.with_owner(new_owner)
        await self._store.set(material_key(waste_id), encode_material(updated))
        return updated
