"""
tests/test_store.py
===================

Unit tests for ringside.store.InMemoryPeriodStore
"""

from datetime import datetime

import pytest

from ringside.errors import AlreadyOpenError, MultipleOpenPeriodsError, NoOpenPeriodError
from ringside.models import OwnerType, Period, TrackKind
from ringside.store import InMemoryPeriodStore, PeriodStore

W = OwnerType.WRESTLER
EMP = TrackKind.EMPLOYMENT


def _demo_store():
    store = InMemoryPeriodStore()
    store.insert("W1", W, EMP, datetime(2023, 1, 1))
    store.close_open("W1", W, EMP, datetime(2023, 6, 1))
    store.insert("W1", W, EMP, datetime(2024, 1, 1))
    store.close_open("W1", W, EMP, datetime(2024, 2, 1))
    store.insert("W1", W, EMP, datetime(2024, 5, 1))
    return store


def test_satisfies_protocol():
    assert isinstance(InMemoryPeriodStore(), PeriodStore)


def test_find_open_and_future_split_on_as_of():
    store = _demo_store()
    assert store.find_open("W1", W, EMP, datetime(2024, 6, 1)).started_at == datetime(2024, 5, 1)
    assert store.find_open("W1", W, EMP, datetime(2024, 4, 1)) is None
    assert store.find_open_future("W1", W, EMP, datetime(2024, 4, 1)).started_at == datetime(2024, 5, 1)


def test_most_recent_closed_and_earliest():
    store = _demo_store()
    assert store.find_most_recent_closed("W1", W, EMP).ended_at == datetime(2024, 2, 1)
    assert store.find_earliest("W1", W, EMP).started_at == datetime(2023, 1, 1)


def test_find_all_is_oldest_first():
    starts = [p.started_at for p in _demo_store().find_all("W1", W, EMP)]
    assert starts == sorted(starts)
    assert len(starts) == 3


def test_keys_are_isolated():
    store = _demo_store()
    assert not store.exists("W1", W, TrackKind.INJURY)
    assert not store.exists("W1", OwnerType.MANAGER, EMP)
    assert not store.exists("W2", W, EMP)


def test_string_keys_are_coerced():
    store = _demo_store()
    assert store.exists("W1", "wrestler", "employment")


def test_second_open_row_is_refused():
    store = _demo_store()
    with pytest.raises(AlreadyOpenError):
        store.insert("W1", W, EMP, datetime(2025, 1, 1))


def test_close_without_open_row_raises():
    with pytest.raises(NoOpenPeriodError):
        InMemoryPeriodStore().close_open("W1", W, EMP, datetime(2024, 1, 1))


def test_corrupted_rows_fail_loudly():
    rows = [
        Period(1, "W1", W, EMP, datetime(2024, 1, 1)),
        Period(2, "W1", W, EMP, datetime(2024, 2, 1)),
    ]
    store = InMemoryPeriodStore(rows)
    with pytest.raises(MultipleOpenPeriodsError):
        store.find_open("W1", W, EMP, datetime(2024, 6, 1))


def test_seeded_store_continues_ids():
    store = InMemoryPeriodStore([Period(7, "W1", W, EMP, datetime(2024, 1, 1), datetime(2024, 2, 1))])
    assert store.insert("W1", W, EMP, datetime(2024, 3, 1)).id == 8


def test_transaction_rolls_back_on_error():
    store = _demo_store()
    with pytest.raises(RuntimeError):
        with store.transaction():
            store.close_open("W1", W, EMP, datetime(2024, 6, 1))
            raise RuntimeError("boom")
    assert store.find_open("W1", W, EMP, datetime(2024, 6, 1)) is not None


def test_len_and_iter():
    store = _demo_store()
    assert len(store) == 3
    assert {p.id for p in store} == {1, 2, 3}
