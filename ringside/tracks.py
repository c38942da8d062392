"""
ringside.tracks
===============

Temporal queries over one status track for one owner.

A :class:`StatusTrack` answers "what is current, what is scheduled, what
ended last" from the rows of a :class:`~ringside.store.PeriodStore` and is
the only legal way to open or close periods on that track.  Nothing is
cached: every call reads the store again.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, List, Optional

from .errors import AlreadyOpenError, InvalidRangeError, InvariantViolation, NoOpenPeriodError
from .models import OwnerType, Period, StatusFact, TrackKind
from .store import PeriodStore

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


class StatusTrack:
    """
    Read/write access to a single ``(owner, track)`` history.

    Example
    -------
    >>> from datetime import datetime
    >>> from ringside.store import InMemoryPeriodStore
    >>> t = StatusTrack(InMemoryPeriodStore(), "W1", OwnerType.WRESTLER, TrackKind.EMPLOYMENT)
    >>> p = t.open(datetime(2024, 1, 1))
    >>> t.current() == p
    True
    """

    def __init__(self, store: PeriodStore, owner_id: str, owner_type: OwnerType,
                 kind: TrackKind, clock: Optional[Clock] = None) -> None:
        self.store = store
        self.owner_id = owner_id
        self.owner_type = OwnerType(owner_type)
        self.kind = TrackKind(kind)
        self._clock = clock or datetime.now

    def __repr__(self) -> str:
        return f"StatusTrack({self.owner_type}:{self.owner_id}, {self.kind})"

    def now(self) -> datetime:
        return self._clock()

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------
    def current(self) -> Optional[Period]:
        """Open period that has already started, if any."""
        return self._guarded(self.store.find_open, self.now())

    def future(self) -> Optional[Period]:
        """Open period scheduled to start after now, if any."""
        return self._guarded(self.store.find_open_future, self.now())

    def most_recent_past(self) -> Optional[Period]:
        return self.store.find_most_recent_closed(self.owner_id, self.owner_type, self.kind)

    def first(self) -> Optional[Period]:
        return self.store.find_earliest(self.owner_id, self.owner_type, self.kind)

    def history(self) -> List[Period]:
        """Every period on the track, oldest first."""
        return self.store.find_all(self.owner_id, self.owner_type, self.kind)

    def has_any(self) -> bool:
        return self.store.exists(self.owner_id, self.owner_type, self.kind)

    def is_active(self) -> bool:
        return self.current() is not None

    def has_future(self) -> bool:
        return self.future() is not None

    def started_on(self, moment: datetime) -> bool:
        """True if the current period started on the same day as *moment*."""
        current = self.current()
        return current is not None and current.started_at.date() == moment.date()

    def started_before(self, moment: datetime) -> bool:
        """True if the current period started at or before *moment*."""
        current = self.current()
        return current is not None and current.started_at <= moment

    def fact(self) -> StatusFact:
        """Snapshot of current / future / most recent past for this track."""
        return StatusFact(
            current=self.current(),
            future=self.future(),
            most_recent_past=self.most_recent_past(),
            has_any=self.has_any(),
        )

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------
    def open(self, started_at: datetime) -> Period:
        """
        Start a new period at *started_at*.

        Raises
        ------
        AlreadyOpenError
            If a current or scheduled period is already open.
        """
        existing = self.current() or self.future()
        if existing is not None:
            self._fail(AlreadyOpenError(
                f"{self.kind} already open for {self.owner_type} {self.owner_id!r} since {existing.started_at:%Y-%m-%d}"
            ))
        try:
            period = self.store.insert(self.owner_id, self.owner_type, self.kind, started_at)
        except InvariantViolation as exc:
            self._fail(exc)
        logger.info(f"Opened {self.kind} for {self.owner_type} {self.owner_id!r} at {started_at}")
        return period

    def close(self, ended_at: datetime) -> Period:
        """
        End the current period at *ended_at*.

        Raises
        ------
        NoOpenPeriodError
            If there is no current period.
        InvalidRangeError
            If *ended_at* precedes the current period's start.
        """
        current = self.current()
        if current is None:
            self._fail(NoOpenPeriodError(f"{self.kind} is not open for {self.owner_type} {self.owner_id!r}"))
        if ended_at < current.started_at:
            self._fail(InvalidRangeError(
                f"{self.kind} for {self.owner_type} {self.owner_id!r} cannot end at {ended_at} "
                f"before it started at {current.started_at}"
            ))
        period = self.store.close_open(self.owner_id, self.owner_type, self.kind, ended_at)
        logger.info(f"Closed {self.kind} for {self.owner_type} {self.owner_id!r} at {ended_at}")
        return period

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _guarded(self, finder, as_of: datetime) -> Optional[Period]:
        try:
            return finder(self.owner_id, self.owner_type, self.kind, as_of)
        except InvariantViolation as exc:
            self._fail(exc)

    def _fail(self, exc: InvariantViolation):
        logger.error(f"Invariant violation on {self!r}: {exc}")
        raise exc
