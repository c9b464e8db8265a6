"""Participant Registry: Address -> Participant, with auth-gated mutations.

Invariants:
    - At most one record per address (register fails with AlreadyRegisteredError)
    - registered_at is written once and carried through every role update
    - Mutations assert authentication before reading the store
    - One KV write per successful mutation; failed calls write nothing

Design Decisions:
    - Keyed directly by address: existence and authorization checks are one lookup each
"""

import logging

from scavenger.core.domain_types import Address, Role, participant_key
from scavenger.core.errors import AlreadyRegisteredError, NotRegisteredError
from scavenger.core.events import ParticipantRegistered
from scavenger.core.records import Participant, encode_participant, decode_participant
from scavenger.core.repository_protocols import (
    KeyValueStore, Authenticator, LogicalClock, EventPublisher,
)

logger = logging.getLogger(__name__)


class ParticipantRegistry:
    """Registers participants and updates their roles."""

    def __init__(
        self,
        store: KeyValueStore,
        auth: Authenticator,
        clock: LogicalClock,
        events: EventPublisher | None = None,
    ):
        self._store = store
        self._auth = auth
        self._clock = clock
        self._events = events

    async def register(
        self,
        address: Address,
        role: Role,
        name: str = "",
        latitude: int = 0,
        longitude: int = 0,
    ) -> Participant:
        self._auth.require_authenticated_as(address)
        key = participant_key(address)
        if await self._store.has(key):
            logger.warning(
                "Registration rejected: already registered",
                extra={"address": address, "error_code": "ALREADY_REGISTERED"},
            )
            raise AlreadyRegisteredError(address)

        participant = Participant(
            address=address,
            role=role,
            registered_at=self._clock.now(),
            name=name,
            latitude=latitude,
            longitude=longitude,
        )
        await self._store.set(key, encode_participant(participant))
        logger.info(
            f"Participant registered as {role.value}", extra={"address": address},
        )
        if self._events is not None:
            self._events.publish(ParticipantRegistered(
                address=address, role=role, name=name,
                latitude=latitude, longitude=longitude,
            ))
        return participant

    async def is_registered(self, address: Address) -> bool:
        return await self._store.has(participant_key(address))

    async def get(self, address: Address) -> Participant | None:
        key = participant_key(address)
        raw = await self._store.get(key)
        if raw is None:
            return None
        return decode_participant(key, raw)

    async def update_role(self, address: Address, new_role: Role) -> Participant:
        """Overwrite the role only; registered_at and profile fields are preserved."""
        self._auth.require_authenticated_as(address)
        current = await self.get(address)
        if current is None:
            logger.warning(
                "Role update rejected: not registered",
                extra={"address": address, "error_code": "NOT_REGISTERED"},
            )
            raise NotRegisteredError(address)

        updated = current.with_role(new_role)
        await self._store.set(participant_key(address), encode_participant(updated))
        logger.info(
            f"Participant role changed {current.role.value} -> {new_role.value}",
            extra={"address": address},
        )
        return updated
