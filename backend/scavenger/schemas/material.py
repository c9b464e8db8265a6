"""Material & Transfer Schemas: request/response models for material routes.

Invariants:
    - weight is positive (grams)
    - note is at most 1000 chars
    - Transfer responses keep the stored order of the ledger
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from scavenger.core.domain_types import WasteType
from scavenger.core.records import Material, Transfer


class MaterialCreate(BaseModel):
    """Material submission: owned by the authenticated submitter."""
    waste_type: WasteType
    weight: int = Field(gt=0)
    description: str = Field("", max_length=1000)


class MaterialResponse(BaseModel):
    id: int
    owner: str
    waste_type: WasteType
    weight: int
    description: str
    submitted_at: int

    @classmethod
    def from_record(cls, material: Material) -> "MaterialResponse":
        return cls(
            id=material.id,
            owner=material.owner,
            waste_type=material.waste_type,
            weight=material.weight,
            description=material.description,
            submitted_at=material.submitted_at,
        )


class TransferCreate(BaseModel):
    """Transfer request: the caller must be authenticated as `from`."""
    model_config = ConfigDict(populate_by_name=True)

    from_address: str = Field(alias="from", min_length=1, max_length=128)
    to_address: str = Field(alias="to", min_length=1, max_length=128)
    note: str = Field("", max_length=1000)

    @field_validator("from_address", "to_address")
    @classmethod
    def strip_address(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("address cannot be empty or whitespace")
        return v


class TransferResponse(BaseModel):
    """One ledger entry; serialized with "from"/"to" keys."""
    model_config = ConfigDict(populate_by_name=True)

    waste_id: int
    from_address: str = Field(alias="from")
    to_address: str = Field(alias="to")
    transferred_at: int
    note: str

    @classmethod
    def from_record(cls, transfer: Transfer) -> "TransferResponse":
        return cls(
            waste_id=transfer.waste_id,
            from_address=transfer.from_address,
            to_address=transfer.to_address,
            transferred_at=transfer.transferred_at,
            note=transfer.note,
        )


class TransferHistory(BaseModel):
    waste_id: int
    transfers: list[TransferResponse] = []
