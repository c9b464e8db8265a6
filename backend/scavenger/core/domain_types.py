"""Domain Types: rich types that replace bare primitives across the ledger.

Invariants:
    - Address wraps the opaque actor identifier; WasteId wraps the material id
    - Timestamp is a logical clock value (non-decreasing, no wall-clock meaning)
    - Role is a closed set; capability predicates live on the enum, not in callers
    - All valid states encoded as Enums, no raw string matching

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: stored by value inside JSON payloads without custom encoders
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

Address = NewType("Address", str)
WasteId = NewType("WasteId", int)


# ─── Value Types ─────────────────────────────────────────────────

Timestamp = NewType("Timestamp", int)       # logical clock tick
Microdegrees = NewType("Microdegrees", int)  # degrees * 1_000_000


# ─── Enums ───────────────────────────────────────────────────────

class Role(str, Enum):
    """Participant roles in the recycling supply chain."""
    RECYCLER = "recycler"
    COLLECTOR = "collector"
    MANUFACTURER = "manufacturer"

    @property
    def can_collect(self) -> bool:
        return self in (Role.RECYCLER, Role.COLLECTOR)

    @property
    def can_process_recyclables(self) -> bool:
        return self is Role.RECYCLER

    @property
    def can_manufacture(self) -> bool:
        return self is Role.MANUFACTURER


class WasteType(str, Enum):
    """Material categories accepted by the material registry."""
    PAPER = "paper"
    PET_PLASTIC = "pet_plastic"
    PLASTIC = "plastic"
    METAL = "metal"
    GLASS = "glass"


class StorageNamespace(str, Enum):
    """Key spaces inside the key/value store."""
    PARTICIPANT = "participant"
    TRANSFERS = "transfers"
    MATERIAL = "material"
    MATERIAL_SEQ = "material_seq"


StorageKey = tuple[str, str]


def participant_key(address: Address) -> StorageKey:
    return (StorageNamespace.PARTICIPANT.value, address)


def transfers_key(waste_id: WasteId) -> StorageKey:
    return (StorageNamespace.TRANSFERS.value, str(waste_id))


def material_key(waste_id: WasteId) -> StorageKey:
    return (StorageNamespace.MATERIAL.value, str(waste_id))


MATERIAL_SEQ_KEY: StorageKey = (StorageNamespace.MATERIAL_SEQ.value, "next")
