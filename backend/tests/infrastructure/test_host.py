"""Host Capabilities: authenticator and clocks."""

import pytest

from scavenger.core.domain_types import Address
from scavenger.core.errors import UnauthorizedError
from scavenger.infrastructure.host import PrincipalAuthenticator, SystemClock, ManualClock


def test_authenticator_accepts_matching_principal():
    PrincipalAuthenticator(Address("a")).require_authenticated_as(Address("a"))


def test_authenticator_rejects_other_principal():
    with pytest.raises(UnauthorizedError) as exc:
        PrincipalAuthenticator(Address("a")).require_authenticated_as(Address("b"))
    assert exc.value.address == "b"


def test_missing_principal_never_authenticates():
    with pytest.raises(UnauthorizedError):
        PrincipalAuthenticator(None).require_authenticated_as(Address(""))


def test_system_clock_never_goes_backwards():
    ticks = iter([1000.0, 999.0, 1001.5])
    clock = SystemClock(source=lambda: next(ticks))
    assert [clock.now(), clock.now(), clock.now()] == [1000, 1000, 1001]


def test_manual_clock_advances_only_forward():
    clock = ManualClock(start=5)
    assert clock.now() == 5
    assert clock.advance(3) == 8
    with pytest.raises(ValueError):
        clock.advance(-1)
    assert clock.now() == 8
