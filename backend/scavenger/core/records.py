"""Ledger Records: immutable value objects and their byte encoding.

Invariants:
    - Participant, Material, Transfer are frozen; mutation produces a new value
    - encode_* produces compact UTF-8 JSON, enums stored by value
    - decode_* raises CorruptRecordError on any malformed payload (never returns partial data)
    - A transfer sequence decodes to a list in stored order

Design Decisions:
    - dataclasses + json over ORM rows: records travel through an opaque key/value
      store, so the core owns its own wire format
    - replace() for role/owner changes keeps frozen semantics explicit
"""

import json
from dataclasses import asdict, dataclass, replace

from scavenger.core.domain_types import (
    Address, WasteId, Timestamp, Role, WasteType, StorageKey,
)
from scavenger.core.errors import CorruptRecordError


@dataclass(frozen=True)
class Participant:
    """A registered actor. Only `role` changes after registration."""
    address: Address
    role: Role
    registered_at: Timestamp
    name: str = ""
    latitude: int = 0
    longitude: int = 0

    def with_role(self, role: Role) -> "Participant":
        return replace(self, role=role)


@dataclass(frozen=True)
class Material:
    """A tracked unit of waste. The ledger reads and writes only id and owner."""
    id: WasteId
    owner: Address
    waste_type: WasteType
    weight: int
    submitted_at: Timestamp
    description: str = ""

    def with_owner(self, owner: Address) -> "Material":
        return replace(self, owner=owner)


@dataclass(frozen=True)
class Transfer:
    """One ownership change for a material."""
    waste_id: WasteId
    from_address: Address
    to_address: Address
    transferred_at: Timestamp
    note: str = ""


def _dumps(payload: object) -> bytes:
    return json.dumps(payload, separators=(",", ":"), ensure_ascii=False).encode("utf-8")


def _loads(key: StorageKey, raw: bytes) -> object:
    try:
        return json.loads(raw.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise CorruptRecordError(key, str(e)) from e


# ─── Participant ────────────────────────────────────────────────

def encode_participant(participant: Participant) -> bytes:
    data = asdict(participant)
    data["role"] = participant.role.value
    return _dumps(data)


def decode_participant(key: StorageKey, raw: bytes) -> Participant:
    data = _loads(key, raw)
    try:
        return Participant(
            address=Address(data["address"]),
            role=Role(data["role"]),
            registered_at=Timestamp(int(data["registered_at"])),
            name=data.get("name", ""),
            latitude=int(data.get("latitude", 0)),
            longitude=int(data.get("longitude", 0)),
        )
    except (KeyError, TypeError, ValueError) as e:
        raise CorruptRecordError(key, f"bad participant payload: {e}") from e


# ─── Material ───────────────────────────────────────────────────

def encode_material(material: Material) -> bytes:
    data = asdict(material)
    data["waste_type"] = material.waste_type.value
    return _dumps(data)


def decode_material(key: StorageKey, raw: bytes) -> Material:
    data = _loads(key, raw)
    try:
        return Material(
            id=WasteId(int(data["id"])),
            owner=Address(data["owner"]),
            waste_type=WasteType(data["waste_type"]),
            weight=int(data["weight"]),
            submitted_at=Timestamp(int(data["submitted_at"])),
            description=data.get("description", ""),
        )
    except (KeyError, TypeError, ValueError) as e:
        raise CorruptRecordError(key, f"bad material payload: {e}") from e


# ─── Transfer sequence ──────────────────────────────────────────

def _transfer_to_dict(transfer: Transfer) -> dict:
    return {
        "waste_id": transfer.waste_id,
        "from": transfer.from_address,
        "to": transfer.to_address,
        "transferred_at": transfer.transferred_at,
        "note": transfer.note,
    }


def encode_transfers(transfers: list[Transfer]) -> bytes:
    return _dumps([_transfer_to_dict(t) for t in transfers])


def decode_transfers(key: StorageKey, raw: bytes) -> list[Transfer]:
    data = _loads(key, raw)
    if not isinstance(data, list):
        raise CorruptRecordError(key, "transfer sequence is not a list")
    try:
        return [
            Transfer(
                waste_id=WasteId(int(item["waste_id"])),
                from_address=Address(item["from"]),
                to_address=Address(item["to"]),
                transferred_at=Timestamp(int(item["transferred_at"])),
                note=item.get("note", ""),
            )
            for item in data
        ]
    except (KeyError, TypeError, ValueError) as e:
        raise CorruptRecordError(key, f"bad transfer payload: {e}") from e
