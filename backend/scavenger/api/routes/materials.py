"""Material Routes: submission, lookup, ownership transfer and transfer history.

Invariants:
    - Transfer guards run in the ledger; this module only maps HTTP to ledger calls
    - History is returned in stored order, [] for materials never transferred
"""

import logging

from fastapi import APIRouter, Depends, status

from scavenger.api.dependencies import get_ledger, get_caller
from scavenger.core.domain_types import Address, WasteId
from scavenger.core.errors import MaterialNotFoundError, UnauthorizedError
from scavenger.schemas.material import (
    MaterialCreate, MaterialResponse, TransferCreate, TransferResponse, TransferHistory,
)
from scavenger.services.scavenger_ledger import ScavengerLedger

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/materials", tags=["materials"])


@router.post(
    "", response_model=MaterialResponse,
    status_code=status.HTTP_201_CREATED,
)
async def submit_material(
    body: MaterialCreate,
    ledger: ScavengerLedger = Depends(get_ledger),
    caller: Address | None = Depends(get_caller),
):
    """Submit a material owned by the calling participant."""
    if caller is None:
        raise UnauthorizedError("<anonymous>")
    material = await ledger.submit_material(
        caller,
        body.waste_type, body.weight, body.description,
    )
    return MaterialResponse.from_record(material)


@router.get("/{waste_id}", response_model=MaterialResponse)
async def get_material(
    waste_id: int, ledger: ScavengerLedger = Depends(get_ledger),
):
    material = await ledger.get_material(WasteId(waste_id))
    if material is None:
        raise MaterialNotFoundError(waste_id)
    return MaterialResponse.from_record(material)


@router.post("/{waste_id}/transfers", response_model=MaterialResponse)
async def transfer_waste(
    waste_id: int, body: TransferCreate,
    ledger: ScavengerLedger = Depends(get_ledger),
):
    """Move ownership from `from` to `to`. Returns the updated material."""
    material = await ledger.transfer_waste(
        WasteId(waste_id),
        Address(body.from_address),
        Address(body.to_address),
        body.note,
    )
    return MaterialResponse.from_record(material)


@router.get("/{waste_id}/transfers", response_model=TransferHistory)
async def get_transfer_history(
    waste_id: int, ledger: ScavengerLedger = Depends(get_ledger),
):
    transfers = await ledger.get_transfer_history(WasteId(waste_id))
    return TransferHistory(
        waste_id=waste_id,
        transfers=[TransferResponse.from_record(t) for t in transfers],
    )
