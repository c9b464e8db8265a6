"""Ledger Events: notifications published after a successful mutation.

Invariants:
    - Events are published only after the state they describe has been written
    - A failed call publishes nothing
    - topic is stable and short ("reg", "xfer") so subscribers can filter cheaply
"""

from dataclasses import dataclass

from scavenger.core.domain_types import Address, WasteId, Timestamp, Role


@dataclass(frozen=True)
class ParticipantRegistered:
    address: Address
    role: Role
    name: str
    latitude: int
    longitude: int

    topic = "reg"

    def to_dict(self) -> dict:
        return {
            "topic": self.topic,
            "address": self.address,
            "role": self.role.value,
            "name": self.name,
            "latitude": self.latitude,
            "longitude": self.longitude,
        }


@dataclass(frozen=True)
class WasteTransferred:
    waste_id: WasteId
    from_address: Address
    to_address: Address
    transferred_at: Timestamp

    topic = "xfer"

    def to_dict(self) -> dict:
        return {
            "topic": self.topic,
            "waste_id": self.waste_id,
            "from": self.from_address,
            "to": self.to_address,
            "transferred_at": self.transferred_at,
        }


LedgerEvent = ParticipantRegistered | WasteTransferred
