"""Transfer Guard Enforcement: validates every condition before ownership moves.

Invariants:
    - All functions are PURE: no IO, no async, no DB, no side effects
    - Return the error on violation, None on success
    - validate_transfer chains all checks in fixed order; first error wins:
      sender registered -> receiver registered -> material exists -> sender owns material
    - Authentication is asserted by the caller before the snapshot is taken

Design Decisions:
    - Pure functions over a TransferContext snapshot: testable without stores or mocks
    - Return errors (not raise): the orchestrator decides when to raise, so the
      chain reads as a single `or` expression
"""

from dataclasses import dataclass

from scavenger.core.domain_types import Address, WasteId
from scavenger.core.errors import (
    ScavengerError,
    SenderNotRegisteredError,
    ReceiverNotRegisteredError,
    MaterialNotFoundError,
    NotOwnerError,
)
from scavenger.core.records import Material


@dataclass(frozen=True)
class TransferContext:
    """Everything the guards need, read once before any write."""
    waste_id: WasteId
    from_address: Address
    to_address: Address
    sender_registered: bool
    receiver_registered: bool
    material: Material | None


def check_sender_registered(ctx: TransferContext) -> ScavengerError | None:
    if not ctx.sender_registered:
        return SenderNotRegisteredError(ctx.from_address)
    return None


def check_receiver_registered(ctx: TransferContext) -> ScavengerError | None:
    if not ctx.receiver_registered:
        return ReceiverNotRegisteredError(ctx.to_address)
    return None


def check_material_exists(ctx: TransferContext) -> ScavengerError | None:
    if ctx.material is None:
        return MaterialNotFoundError(ctx.waste_id)
    return None


def check_sender_owns_material(ctx: TransferContext) -> ScavengerError | None:
    """Sender must be the current owner. Assumes the material exists."""
    if ctx.material is not None and ctx.material.owner != ctx.from_address:
        return NotOwnerError(ctx.waste_id, ctx.from_address)
    return None


def validate_transfer(ctx: TransferContext) -> ScavengerError | None:
    """Chain all transfer guards. Returns first error or None."""
    return (
        check_sender_registered(ctx)
        or check_receiver_registered(ctx)
        or check_material_exists(ctx)
        or check_sender_owns_material(ctx)
    )
