"""
ringside.store
==============

The Period Store contract plus an in‑memory implementation.

:class:`PeriodStore` is the only seam between the status engine and
persistence.  :class:`InMemoryPeriodStore` is dictionary‑backed and uses
only the standard library so that tracks and validators can be
unit‑tested without a database.  :class:`ringside.store_db.DBPeriodStore`
is the SQLModel‑backed drop‑in replacement.
"""

from __future__ import annotations

import itertools
import logging
import threading
from contextlib import contextmanager
from datetime import datetime
from typing import Dict, Iterator, List, Optional, Protocol, Sequence, Tuple, runtime_checkable

from .errors import AlreadyOpenError, MultipleOpenPeriodsError, NoOpenPeriodError
from .models import OwnerType, Period, TrackKind

logger = logging.getLogger(__name__)

Key = Tuple[str, OwnerType, TrackKind]


@runtime_checkable
class PeriodStore(Protocol):
    """Create/query time‑bounded records for one owner and track."""

    def find_open(self, owner_id: str, owner_type: OwnerType, track: TrackKind,
                  as_of: datetime) -> Optional[Period]: ...

    def find_open_future(self, owner_id: str, owner_type: OwnerType, track: TrackKind,
                         as_of: datetime) -> Optional[Period]: ...

    def find_most_recent_closed(self, owner_id: str, owner_type: OwnerType,
                                track: TrackKind) -> Optional[Period]: ...

    def find_earliest(self, owner_id: str, owner_type: OwnerType,
                      track: TrackKind) -> Optional[Period]: ...

    def find_all(self, owner_id: str, owner_type: OwnerType,
                 track: TrackKind) -> List[Period]: ...

    def exists(self, owner_id: str, owner_type: OwnerType, track: TrackKind) -> bool: ...

    def insert(self, owner_id: str, owner_type: OwnerType, track: TrackKind,
               started_at: datetime) -> Period: ...

    def close_open(self, owner_id: str, owner_type: OwnerType, track: TrackKind,
                   ended_at: datetime) -> Period: ...

    def transaction(self): ...


def single(rows: Sequence[Period], key: Key) -> Optional[Period]:
    """Return the only row, ``None`` for none, and fail loudly for more."""
    if len(rows) > 1:
        owner_id, owner_type, track = key
        raise MultipleOpenPeriodsError(
            f"{len(rows)} open {track} periods found for {owner_type} {owner_id!r}"
        )
    return rows[0] if rows else None


class InMemoryPeriodStore:
    """
    Dictionary‑backed period store.

    Periods are kept per ``(owner_id, owner_type, track)`` key in insertion
    order.  Like the relational store, :meth:`insert` refuses a second open
    row for a key, mirroring the partial unique index.

    Example
    -------
    >>> from datetime import datetime
    >>> store = InMemoryPeriodStore()
    >>> p = store.insert("W1", OwnerType.WRESTLER, TrackKind.EMPLOYMENT, datetime(2024, 1, 1))
    >>> store.exists("W1", OwnerType.WRESTLER, TrackKind.EMPLOYMENT)
    True
    """

    def __init__(self, periods: Sequence[Period] = ()) -> None:
        self._periods: Dict[Key, List[Period]] = {}
        self._ids = itertools.count(1)
        self._lock = threading.RLock()
        for period in periods:
            self._periods.setdefault(self._key(period.owner_id, period.owner_type, period.track), []).append(period)
        if periods:
            self._ids = itertools.count(max(p.id for p in periods) + 1)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    @staticmethod
    def _key(owner_id: str, owner_type: OwnerType, track: TrackKind) -> Key:
        return (owner_id, OwnerType(owner_type), TrackKind(track))

    def _rows(self, owner_id: str, owner_type: OwnerType, track: TrackKind) -> List[Period]:
        return self._periods.get(self._key(owner_id, owner_type, track), [])

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def find_open(self, owner_id, owner_type, track, as_of):
        rows = [p for p in self._rows(owner_id, owner_type, track) if p.is_current(as_of)]
        return single(rows, self._key(owner_id, owner_type, track))

    def find_open_future(self, owner_id, owner_type, track, as_of):
        rows = [p for p in self._rows(owner_id, owner_type, track) if p.is_future(as_of)]
        return single(rows, self._key(owner_id, owner_type, track))

    def find_most_recent_closed(self, owner_id, owner_type, track):
        closed = [p for p in self._rows(owner_id, owner_type, track) if not p.is_open]
        return max(closed, key=lambda p: p.ended_at, default=None)

    def find_earliest(self, owner_id, owner_type, track):
        return min(self._rows(owner_id, owner_type, track), key=lambda p: p.started_at, default=None)

    def find_all(self, owner_id, owner_type, track):
        return sorted(self._rows(owner_id, owner_type, track), key=lambda p: p.started_at)

    def exists(self, owner_id, owner_type, track) -> bool:
        return bool(self._rows(owner_id, owner_type, track))

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------
    def insert(self, owner_id, owner_type, track, started_at) -> Period:
        key = self._key(owner_id, owner_type, track)
        with self._lock:
            rows = self._periods.setdefault(key, [])
            if any(p.is_open for p in rows):
                raise AlreadyOpenError(f"{track} is already open for {owner_type} {owner_id!r}")
            period = Period(next(self._ids), owner_id, key[1], key[2], started_at)
            rows.append(period)
        logger.debug(f"Inserted {period}")
        return period

    def close_open(self, owner_id, owner_type, track, ended_at) -> Period:
        key = self._key(owner_id, owner_type, track)
        with self._lock:
            rows = self._periods.get(key, [])
            open_rows = [i for i, p in enumerate(rows) if p.is_open]
            if not open_rows:
                raise NoOpenPeriodError(f"{track} is not open for {owner_type} {owner_id!r}")
            if len(open_rows) > 1:
                raise MultipleOpenPeriodsError(f"{len(open_rows)} open {track} periods for {owner_type} {owner_id!r}")
            index = open_rows[0]
            rows[index] = rows[index].closed_at(ended_at)
            closed = rows[index]
        logger.debug(f"Closed {closed}")
        return closed

    @contextmanager
    def transaction(self) -> Iterator["InMemoryPeriodStore"]:
        """Serialise a unit of work; restore the previous rows on error."""
        with self._lock:
            snapshot = {key: list(rows) for key, rows in self._periods.items()}
            try:
                yield self
            except BaseException:
                self._periods = snapshot
                raise

    # ------------------------------------------------------------------
    # Dunder helpers for convenience
    # ------------------------------------------------------------------
    def __iter__(self) -> Iterator[Period]:
        for rows in self._periods.values():
            yield from rows

    def __len__(self) -> int:
        return sum(len(rows) for rows in self._periods.values())
