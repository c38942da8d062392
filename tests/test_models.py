"""
tests/test_models.py
====================

Unit tests for the dataclasses and enums defined in ringside.models.

Run:  pytest -q
"""

from datetime import datetime, timedelta

import pytest

from ringside.models import OwnerType, Period, TrackKind, TransitionResult, Operation
from ringside.errors import ReasonCode


def _period(started, ended=None):
    return Period(1, "W1", OwnerType.WRESTLER, TrackKind.EMPLOYMENT, started, ended)


def test_new_period_is_open():
    assert _period(datetime(2024, 1, 1)).is_open


def test_end_before_start_raises():
    with pytest.raises(ValueError):
        _period(datetime(2024, 2, 1), datetime(2024, 1, 1))


def test_current_vs_future():
    p = _period(datetime(2024, 3, 1))
    assert p.is_current(datetime(2024, 3, 1))
    assert not p.is_future(datetime(2024, 3, 1))
    assert p.is_future(datetime(2024, 2, 1))
    assert not p.is_current(datetime(2024, 2, 1))


def test_closed_period_is_neither_current_nor_future():
    p = _period(datetime(2024, 1, 1), datetime(2024, 2, 1))
    assert not p.is_current(datetime(2024, 1, 15))
    assert not p.is_future(datetime(2023, 1, 1))


def test_duration_of_open_period_uses_as_of():
    p = _period(datetime(2024, 1, 1))
    assert p.duration(datetime(2024, 1, 11)) == timedelta(days=10)


def test_closed_at_returns_new_value():
    p = _period(datetime(2024, 1, 1))
    closed = p.closed_at(datetime(2024, 1, 5))
    assert p.is_open
    assert closed.ended_at == datetime(2024, 1, 5)
    assert closed.id == p.id


def test_str_on_enums():
    """Enum __str__ returns its value (nicer REPL)."""
    assert str(OwnerType.TAG_TEAM) == "tag_team"
    assert str(TrackKind.INJURY) == "injury"


def test_owner_type_labels():
    assert OwnerType.TAG_TEAM.label == "Tag Team"
    assert OwnerType.STABLE.plural_label == "Stables"


def test_transition_result_truthiness():
    assert TransitionResult.permit(Operation.EMPLOY)
    rejected = TransitionResult.reject(Operation.EMPLOY, ReasonCode.ALREADY_EMPLOYED)
    assert not rejected
    assert rejected.reason is ReasonCode.ALREADY_EMPLOYED
