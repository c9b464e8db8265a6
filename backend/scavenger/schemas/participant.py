"""Participant Schemas: Pydantic models with field-level validation for participant routes.

Invariants:
    - address: 1-128 chars, stripped, non-empty
    - latitude within +/-90_000_000 microdegrees, longitude within +/-180_000_000
    - Responses expose capability predicates derived from the role
"""

from pydantic import BaseModel, Field, field_validator

from scavenger.core.domain_types import Role
from scavenger.core.records import Participant


def _strip_address(v: str) -> str:
    v = v.strip()
    if not v:
        raise ValueError("address cannot be empty or whitespace")
    return v


class ParticipantCreate(BaseModel):
    """Participant registration: the caller must be authenticated as `address`."""
    address: str = Field(min_length=1, max_length=128)
    role: Role
    name: str = Field("", max_length=200)
    latitude: int = Field(0, ge=-90_000_000, le=90_000_000)
    longitude: int = Field(0, ge=-180_000_000, le=180_000_000)

    @field_validator("address")
    @classmethod
    def strip_address(cls, v: str) -> str:
        return _strip_address(v)


class RoleUpdate(BaseModel):
    role: Role


class ParticipantResponse(BaseModel):
    """Participant response: stored fields plus role capabilities."""
    address: str
    role: Role
    name: str
    latitude: int
    longitude: int
    registered_at: int
    can_collect: bool
    can_process_recyclables: bool
    can_manufacture: bool

    @classmethod
    def from_record(cls, participant: Participant) -> "ParticipantResponse":
        return cls(
            address=participant.address,
            role=participant.role,
            name=participant.name,
            latitude=participant.latitude,
            longitude=participant.longitude,
            registered_at=participant.registered_at,
            can_collect=participant.role.can_collect,
            can_process_recyclables=participant.role.can_process_recyclables,
            can_manufacture=participant.role.can_manufacture,
        )


class RegistrationStatus(BaseModel):
    address: str
    registered: bool
