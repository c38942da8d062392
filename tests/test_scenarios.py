"""
tests/test_scenarios.py
=======================

End‑to‑end roster stories run against the in‑memory store.
"""

from datetime import datetime

import pytest

from ringside import lifecycle
from ringside.actions import RosterActions
from ringside.eligibility import is_bookable
from ringside.errors import (
    AlreadyOpenError,
    CannotBeDebutedError,
    CannotBeEmployedError,
    CannotBeInjuredError,
    CannotBeRetiredError,
    ReasonCode,
)
from ringside.models import OwnerType, TrackKind
from ringside.roster import RosterMember
from ringside.store import InMemoryPeriodStore

NOW = datetime(2024, 6, 1)


def _roster(owner_id, owner_type=OwnerType.WRESTLER):
    store = InMemoryPeriodStore()
    return RosterMember(owner_id, owner_type, store, clock=lambda: NOW), RosterActions(store)


def test_suspend_and_reinstate_employed_wrestler():
    w1, actions = _roster("W1")
    employment = w1.track(TrackKind.EMPLOYMENT).open(datetime(2024, 1, 1))
    assert w1.track(TrackKind.EMPLOYMENT).current() == employment

    actions.suspend(w1, datetime(2024, 2, 1))
    assert not is_bookable(w1)

    actions.reinstate(w1, datetime(2024, 3, 1))
    assert w1.track(TrackKind.SUSPENSION).most_recent_past().ended_at == datetime(2024, 3, 1)
    assert is_bookable(w1)


def test_employing_employed_wrestler_fails():
    w2, actions = _roster("W2")
    actions.employ(w2, datetime(2024, 1, 1))
    with pytest.raises(CannotBeEmployedError) as info:
        actions.employ(w2)
    assert info.value.reason is ReasonCode.ALREADY_EMPLOYED


def test_stable_can_never_be_injured():
    s1, actions = _roster("S1", OwnerType.STABLE)
    with pytest.raises(CannotBeInjuredError) as info:
        actions.injure(s1)
    assert info.value.reason is ReasonCode.NOT_INJURABLE

    actions.debut(s1, datetime(2024, 1, 1))
    assert lifecycle.check("injure", s1).reason is ReasonCode.NOT_INJURABLE


def test_second_open_employment_fails():
    w3, _ = _roster("W3")
    track = w3.track(TrackKind.EMPLOYMENT)
    track.open(datetime(2024, 1, 1))
    with pytest.raises(AlreadyOpenError):
        track.open(datetime(2024, 6, 1))


def test_title_debuts_once():
    t1, actions = _roster("T1", OwnerType.TITLE)
    period = actions.debut(t1)
    assert period.started_at == NOW
    assert t1.is_currently_active()
    with pytest.raises(CannotBeDebutedError) as info:
        actions.debut(t1)
    assert info.value.reason is ReasonCode.ALREADY_DEBUTED


def test_never_employed_wrestler_cannot_retire():
    w4, actions = _roster("W4")
    with pytest.raises(CannotBeRetiredError) as info:
        actions.retire(w4)
    assert info.value.reason is ReasonCode.UNEMPLOYED
