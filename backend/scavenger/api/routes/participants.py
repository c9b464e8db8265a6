"""Participant Routes: registration, lookup and role updates.

Invariants:
    - Mutations require X-Participant-Address to equal the target address
    - Reads need no authentication
    - transfers/sent and transfers/received are always empty (no reverse index)
"""

import logging

from fastapi import APIRouter, Depends, status

from scavenger.api.dependencies import get_ledger
from scavenger.core.domain_types import Address
from scavenger.core.errors import NotRegisteredError
from scavenger.schemas.material import TransferResponse
from scavenger.schemas.participant import (
    ParticipantCreate, ParticipantResponse, RoleUpdate, RegistrationStatus,
)
from scavenger.services.scavenger_ledger import ScavengerLedger

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/participants", tags=["participants"])


@router.post(
    "", response_model=ParticipantResponse,
    status_code=status.HTTP_201_CREATED,
)
async def register_participant(
    body: ParticipantCreate, ledger: ScavengerLedger = Depends(get_ledger),
):
    participant = await ledger.register_participant(
        Address(body.address), body.role, body.name, body.latitude, body.longitude,
    )
    return ParticipantResponse.from_record(participant)


@router.get("/{address}", response_model=ParticipantResponse)
async def get_participant(
    address: str, ledger: ScavengerLedger = Depends(get_ledger),
):
    participant = await ledger.get_participant(Address(address))
    if participant is None:
        raise NotRegisteredError(address)
    return ParticipantResponse.from_record(participant)


@router.get("/{address}/registered", response_model=RegistrationStatus)
async def is_participant_registered(
    address: str, ledger: ScavengerLedger = Depends(get_ledger),
):
    registered = await ledger.is_participant_registered(Address(address))
    return RegistrationStatus(address=address, registered=registered)


@router.patch("/{address}/role", response_model=ParticipantResponse)
async def update_role(
    address: str, body: RoleUpdate,
    ledger: ScavengerLedger = Depends(get_ledger),
):
    participant = await ledger.update_role(Address(address), body.role)
    return ParticipantResponse.from_record(participant)


@router.get("/{address}/transfers/sent", response_model=list[TransferResponse])
async def get_transfers_from(
    address: str, ledger: ScavengerLedger = Depends(get_ledger),
):
    transfers = await ledger.get_transfers_from(Address(address))
    return [TransferResponse.from_record(t) for t in transfers]


@router.get("/{address}/transfers/received", response_model=list[TransferResponse])
async def get_transfers_to(
    address: str, ledger: ScavengerLedger = Depends(get_ledger),
):
    transfers = await ledger.get_transfers_to(Address(address))
    return [TransferResponse.from_record(t) for t in transfers]
