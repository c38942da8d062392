"""
ringside.store_db
=================

SQLModel‑backed implementation of the :class:`~ringside.store.PeriodStore`
contract.

This adapter wraps the ``status_periods`` table from :pymod:`ringside.db`
so that any code built on :class:`~ringside.store.InMemoryPeriodStore` can
switch to a persistent store without changing its calls.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator, List, Optional

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from .db import PeriodDB, SessionLocal, track_query, utcnow
from .errors import AlreadyOpenError, MultipleOpenPeriodsError, NoOpenPeriodError
from .models import OwnerType, Period, TrackKind
from .store import single

logger = logging.getLogger(__name__)


class DBPeriodStore:
    """
    Drop‑in replacement for :class:`~ringside.store.InMemoryPeriodStore`.

    Outside :meth:`transaction` every write commits on its own.  Inside it,
    writes are only flushed and the outermost block commits (or rolls back
    on error), so a check‑then‑write sequence is one unit of work.
    """

    def __init__(self, session: Optional[Session] = None) -> None:
        self._session: Session = session or SessionLocal()
        self._depth = 0

    @property
    def session(self) -> Session:
        return self._session

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _open_rows(self, owner_id, owner_type, track) -> List[PeriodDB]:
        return list(self._session.exec(
            track_query(owner_id, owner_type, track).where(PeriodDB.ended_at.is_(None))
        ).all())

    def _write(self) -> None:
        """Flush inside a unit of work, commit outside one."""
        try:
            if self._depth:
                self._session.flush()
            else:
                self._session.commit()
        except IntegrityError as exc:
            if not self._depth:
                self._session.rollback()
            raise AlreadyOpenError(f"Open period already stored: {exc.orig}") from exc

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def find_open(self, owner_id, owner_type, track, as_of):
        rows = [r for r in self._open_rows(owner_id, owner_type, track) if r.started_at <= as_of]
        return single([r.to_period() for r in rows], (owner_id, OwnerType(owner_type), TrackKind(track)))

    def find_open_future(self, owner_id, owner_type, track, as_of):
        rows = [r for r in self._open_rows(owner_id, owner_type, track) if r.started_at > as_of]
        return single([r.to_period() for r in rows], (owner_id, OwnerType(owner_type), TrackKind(track)))

    def find_most_recent_closed(self, owner_id, owner_type, track):
        row = self._session.exec(
            track_query(owner_id, owner_type, track)
            .where(PeriodDB.ended_at.is_not(None))
            .order_by(PeriodDB.ended_at.desc())
        ).first()
        return row.to_period() if row else None

    def find_earliest(self, owner_id, owner_type, track):
        row = self._session.exec(
            track_query(owner_id, owner_type, track).order_by(PeriodDB.started_at)
        ).first()
        return row.to_period() if row else None

    def find_all(self, owner_id, owner_type, track):
        rows = self._session.exec(
            track_query(owner_id, owner_type, track).order_by(PeriodDB.started_at)
        ).all()
        return [row.to_period() for row in rows]

    def exists(self, owner_id, owner_type, track) -> bool:
        return self._session.exec(track_query(owner_id, owner_type, track)).first() is not None

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------
    def insert(self, owner_id, owner_type, track, started_at) -> Period:
        row = PeriodDB(
            owner_id=owner_id,
            owner_type=OwnerType(owner_type).value,
            track=TrackKind(track).value,
            started_at=started_at,
        )
        self._session.add(row)
        self._write()
        logger.debug(f"Inserted status_periods row {row.id} for {owner_type} {owner_id!r} {track}")
        return row.to_period()

    def close_open(self, owner_id, owner_type, track, ended_at) -> Period:
        rows = self._open_rows(owner_id, owner_type, track)
        if not rows:
            raise NoOpenPeriodError(f"{track} is not open for {owner_type} {owner_id!r}")
        if len(rows) > 1:
            raise MultipleOpenPeriodsError(f"{len(rows)} open {track} periods for {owner_type} {owner_id!r}")
        row = rows[0]
        row.ended_at = ended_at
        row.updated_at = utcnow()
        self._session.add(row)
        self._write()
        logger.debug(f"Closed status_periods row {row.id} at {ended_at}")
        return row.to_period()

    @contextmanager
    def transaction(self) -> Iterator["DBPeriodStore"]:
        """One unit of work; nested blocks join the outermost one."""
        self._depth += 1
        try:
            yield self
        except BaseException:
            self._depth -= 1
            if not self._depth:
                self._session.rollback()
            raise
        else:
            self._depth -= 1
            if not self._depth:
                self._session.commit()

    # ------------------------------------------------------ dunder helpers
    def __iter__(self) -> Iterator[Period]:
        for row in self._session.exec(select(PeriodDB).order_by(PeriodDB.id)).all():
            yield row.to_period()

    def __len__(self) -> int:
        return len(self._session.exec(select(PeriodDB.id)).all())

    # ----------------------------------------------------- context manager
    def __enter__(self) -> "DBPeriodStore":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self._session.close()
