"""
tests/test_actions.py
=====================

Unit tests for ringside.actions.RosterActions and ringside.events
"""

from datetime import datetime

import pytest

from ringside.actions import RosterActions
from ringside.eligibility import is_bookable
from ringside.errors import (
    CannotBeEmployedError,
    CannotBeHealedError,
    CannotBeInjuredError,
    CannotBeRetiredError,
    CannotBeSuspendedError,
    ReasonCode,
)
from ringside.events import EventDispatcher, StatusChanged
from ringside.models import Operation, OwnerType, TrackKind
from ringside.roster import RosterMember
from ringside.store import InMemoryPeriodStore

NOW = datetime(2024, 6, 1)


def _setup(owner_type=OwnerType.WRESTLER, owner_id="W1"):
    store = InMemoryPeriodStore()
    seen = []
    bus = EventDispatcher()
    bus.subscribe(seen.append)
    member = RosterMember(owner_id, owner_type, store, clock=lambda: NOW)
    return RosterActions(store, events=bus), member, seen


def test_employ_publishes_event():
    actions, w, seen = _setup()
    period = actions.employ(w, datetime(2024, 1, 1))
    assert w.is_employed()
    assert seen == [StatusChanged("W1", OwnerType.WRESTLER, Operation.EMPLOY, datetime(2024, 1, 1), period)]


def test_default_moment_is_clock():
    actions, w, _ = _setup()
    assert actions.employ(w).started_at == NOW


def test_rejected_transition_writes_nothing_and_publishes_nothing():
    actions, w, seen = _setup()
    with pytest.raises(CannotBeHealedError):
        actions.heal(w)
    assert len(w.store) == 0
    assert seen == []


def test_release_closes_suspension_and_injury():
    actions, w, _ = _setup()
    actions.employ(w, datetime(2024, 1, 1))
    actions.injure(w, datetime(2024, 2, 1))
    w.store.insert("W1", OwnerType.WRESTLER, TrackKind.SUSPENSION, datetime(2024, 3, 1))
    actions.release(w, datetime(2024, 4, 1))
    assert not w.is_employed()
    assert not w.is_injured()
    assert not w.is_suspended()
    assert w.is_released()


def test_retire_then_unretire():
    actions, w, seen = _setup()
    actions.employ(w, datetime(2024, 1, 1))
    actions.injure(w, datetime(2024, 2, 1))
    actions.retire(w, datetime(2024, 3, 1))
    assert w.is_retired()
    assert not w.is_employed()
    assert not w.is_injured()

    actions.unretire(w, datetime(2024, 4, 1))
    assert not w.is_retired()
    assert w.is_employed()
    assert [e.operation for e in seen] == [
        Operation.EMPLOY, Operation.INJURE, Operation.RETIRE, Operation.UNRETIRE
    ]


def test_employ_closes_open_retirement():
    actions, w, _ = _setup()
    w.store.insert("W1", OwnerType.WRESTLER, TrackKind.RETIREMENT, datetime(2020, 1, 1))
    actions.employ(w, datetime(2024, 1, 1))
    assert w.is_employed()
    assert not w.is_retired()


def test_team_employment_cascades_to_unemployed_members():
    store = InMemoryPeriodStore()
    seen = []
    bus = EventDispatcher()
    bus.subscribe(seen.append)
    a = RosterMember("A", OwnerType.WRESTLER, store, clock=lambda: NOW)
    b = RosterMember("B", OwnerType.WRESTLER, store, clock=lambda: NOW)
    team = RosterMember("TT1", OwnerType.TAG_TEAM, store, clock=lambda: NOW, members=lambda _: [a, b])
    actions = RosterActions(store, events=bus)
    actions.employ(b, datetime(2023, 1, 1))
    seen.clear()

    actions.employ(team, datetime(2024, 1, 1))
    assert team.is_employed() and a.is_employed() and b.is_employed()
    # b keeps its earlier employment
    assert b.track(TrackKind.EMPLOYMENT).current().started_at == datetime(2023, 1, 1)
    assert [(e.owner_id, e.operation) for e in seen] == [("A", Operation.EMPLOY), ("TT1", Operation.EMPLOY)]


def test_team_suspension_cascades_to_members():
    store = InMemoryPeriodStore()
    clock = lambda: NOW  # noqa: E731
    a = RosterMember("A", OwnerType.WRESTLER, store, clock=clock)
    b = RosterMember("B", OwnerType.WRESTLER, store, clock=clock)
    team = RosterMember("TT1", OwnerType.TAG_TEAM, store, clock=clock, members=lambda _: [a, b])
    actions = RosterActions(store)
    for m in (a, b, team):
        actions.employ(m, datetime(2024, 1, 1))

    actions.suspend(team, datetime(2024, 2, 1))
    assert team.is_suspended() and a.is_suspended() and b.is_suspended()

    actions.reinstate(team, datetime(2024, 3, 1))
    assert not (team.is_suspended() or a.is_suspended() or b.is_suspended())
    assert is_bookable(team)


def test_team_suspension_rejected_by_member_state():
    store = InMemoryPeriodStore()
    a = RosterMember("A", OwnerType.WRESTLER, store, clock=lambda: NOW)
    team = RosterMember("TT1", OwnerType.TAG_TEAM, store, clock=lambda: NOW, members=lambda _: [a])
    actions = RosterActions(store)
    actions.employ(a, datetime(2024, 1, 1))
    actions.employ(team, datetime(2024, 1, 1))
    actions.injure(a, datetime(2024, 2, 1))
    with pytest.raises(CannotBeSuspendedError) as info:
        actions.suspend(team)
    assert info.value.reason is ReasonCode.MEMBER_INJURED
    assert not team.is_suspended()


def test_title_lifecycle():
    actions, title, seen = _setup(OwnerType.TITLE, "T1")
    actions.debut(title, datetime(2024, 1, 1))
    actions.deactivate(title, datetime(2024, 2, 1))
    assert not title.is_currently_active()
    actions.reactivate(title, datetime(2024, 3, 1))
    assert title.is_currently_active()
    actions.retire(title, datetime(2024, 4, 1))
    assert title.is_retired()
    assert not title.is_currently_active()
    assert len(seen) == 4


def test_run_dispatches_by_operation():
    actions, w, _ = _setup()
    actions.run("employ", w, datetime(2024, 1, 1))
    assert w.is_employed()


def test_failing_listener_is_logged_and_reraised(caplog):
    actions, w, _ = _setup()

    def broken(event):
        raise RuntimeError("listener down")

    actions.events.subscribe(broken)
    with pytest.raises(RuntimeError):
        actions.employ(w, datetime(2024, 1, 1))
    # the transition itself had already committed
    assert w.is_employed()
    assert any(r.levelname == "ERROR" for r in caplog.records)


# ---------------------------------------------------------------------
# Moments after the clock
# ---------------------------------------------------------------------
LATER = datetime(2024, 9, 1)


def test_future_suspension_is_rejected_and_leaves_track_free():
    actions, w, seen = _setup()
    actions.employ(w, datetime(2024, 1, 1))
    with pytest.raises(CannotBeSuspendedError) as info:
        actions.suspend(w, LATER)
    assert info.value.reason is ReasonCode.SCHEDULED_IN_FUTURE
    assert not w.store.exists("W1", OwnerType.WRESTLER, TrackKind.SUSPENSION)

    actions.suspend(w)
    assert w.is_suspended()
    assert [e.operation for e in seen] == [Operation.EMPLOY, Operation.SUSPEND]


def test_future_retirement_is_rejected_and_member_stays_employed():
    actions, w, _ = _setup()
    actions.employ(w, datetime(2024, 1, 1))
    with pytest.raises(CannotBeRetiredError) as info:
        actions.retire(w, LATER)
    assert info.value.reason is ReasonCode.SCHEDULED_IN_FUTURE
    assert w.is_employed()
    assert not w.is_released()
    assert not w.is_retired()


def test_future_injury_is_rejected():
    actions, w, _ = _setup()
    actions.employ(w, datetime(2024, 1, 1))
    with pytest.raises(CannotBeInjuredError):
        actions.injure(w, LATER)
    assert not w.is_injured()


def test_future_employment_is_scheduled():
    actions, w, seen = _setup()
    actions.employ(w, LATER)
    assert not w.is_employed()
    assert w.has_future_employment()
    assert seen[0].occurred_at == LATER


def test_future_employment_of_retired_member_is_rejected():
    actions, w, _ = _setup()
    w.store.insert("W1", OwnerType.WRESTLER, TrackKind.RETIREMENT, datetime(2020, 1, 1))
    with pytest.raises(CannotBeEmployedError) as info:
        actions.employ(w, LATER)
    assert info.value.reason is ReasonCode.SCHEDULED_IN_FUTURE
    assert w.is_retired()
