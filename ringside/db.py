"""
ringside.db
===========

SQL persistence layer for Ringside.

This module exposes:

* ``engine`` – a global SQLModel engine built from ``settings.database_url``
* ``SessionLocal`` – a session factory used via ``with SessionLocal() as s:``
* ``PeriodDB`` – the polymorphic ``status_periods`` table
* ``create_all()`` – helper to create tables at first run
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy import Column, DateTime, Index, text
from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool
from sqlmodel import Field, Session, SQLModel, create_engine, select

from .models import OwnerType, Period, TrackKind
from .settings import settings

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Engine
# ---------------------------------------------------------------------------
def make_engine(url: Optional[str] = None, echo: Optional[bool] = None) -> Engine:
    """
    Create an engine; defaults come from :pydata:`ringside.settings.settings`.

    An in‑memory SQLite URL gets a single shared connection so that every
    session sees the same database.
    """
    url = url or settings.database_url
    kwargs = {}
    if url in ("sqlite://", "sqlite:///:memory:"):
        kwargs = {"connect_args": {"check_same_thread": False}, "poolclass": StaticPool}
    return create_engine(url, echo=settings.db_echo if echo is None else echo, **kwargs)


engine = make_engine()


# ---------------------------------------------------------------------------
# Session factory
# ---------------------------------------------------------------------------
def SessionLocal(bind: Optional[Engine] = None) -> Session:  # noqa: N802
    """Return a new Session bound to *bind* or the global engine."""
    return Session(bind or engine)


# ---------------------------------------------------------------------------
# ORM model that mirrors ringside.models.Period
# ---------------------------------------------------------------------------
def utcnow() -> datetime:
    """Current UTC time as a naive datetime, matching every other column."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class PeriodDB(SQLModel, table=True):
    """
    One row per period, for every owner type and track.

    At most one row per ``(owner_id, owner_type, track)`` may be open; the
    partial unique index ``uq_status_periods_open`` enforces it.
    """

    __tablename__ = "status_periods"
    __table_args__ = (
        Index(
            "uq_status_periods_open",
            "owner_id", "owner_type", "track",
            unique=True,
            sqlite_where=text("ended_at IS NULL"),
            postgresql_where=text("ended_at IS NULL"),
        ),
        Index("ix_status_periods_lookup", "owner_id", "owner_type", "track"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    owner_id: str
    owner_type: str
    track: str
    # naive moments throughout; no tz conversion on the way in or out
    started_at: datetime = Field(sa_column=Column(DateTime(timezone=False), nullable=False))
    ended_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime(timezone=False), nullable=True))
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime(timezone=False), nullable=False))
    updated_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime(timezone=False), nullable=False))

    # ---------------------------------------------------------------------
    # Converters
    # ---------------------------------------------------------------------
    @classmethod
    def from_period(cls, period: Period) -> "PeriodDB":
        """Create a DB row from an in‑memory period (``id`` left to the DB if falsy)."""
        return cls(
            id=period.id or None,
            owner_id=period.owner_id,
            owner_type=OwnerType(period.owner_type).value,
            track=TrackKind(period.track).value,
            started_at=period.started_at,
            ended_at=period.ended_at,
        )

    def to_period(self) -> Period:
        """Convert the DB row back into a frozen :class:`Period`."""
        return Period(
            id=self.id,
            owner_id=self.owner_id,
            owner_type=OwnerType(self.owner_type),
            track=TrackKind(self.track),
            started_at=self.started_at,
            ended_at=self.ended_at,
        )


# ---------------------------------------------------------------------------
# Convenience CRUD helpers
# ---------------------------------------------------------------------------
def track_query(owner_id: str, owner_type: OwnerType, track: TrackKind):
    """``SELECT`` for every row of one owner's track."""
    return select(PeriodDB).where(
        PeriodDB.owner_id == owner_id,
        PeriodDB.owner_type == OwnerType(owner_type).value,
        PeriodDB.track == TrackKind(track).value,
    )


def add_period(s: Session, period: Period) -> Period:
    """Insert *period* and return it with its database id."""
    row = PeriodDB.from_period(period)
    s.add(row)
    s.commit()
    s.refresh(row)
    return row.to_period()


def get_period(s: Session, period_id: int) -> Optional[Period]:
    """Return a period by id or *None* if missing."""
    row = s.get(PeriodDB, period_id)
    return row.to_period() if row else None


def periods_for(s: Session, owner_id: str, owner_type: OwnerType) -> List[Period]:
    """Every period of one owner, across tracks, oldest first."""
    rows = s.exec(
        select(PeriodDB)
        .where(PeriodDB.owner_id == owner_id, PeriodDB.owner_type == OwnerType(owner_type).value)
        .order_by(PeriodDB.started_at)
    ).all()
    return [row.to_period() for row in rows]


def all_periods(s: Session) -> List[Period]:
    """Return every period in the database."""
    return [row.to_period() for row in s.exec(select(PeriodDB)).all()]


# ---------------------------------------------------------------------------
# Utility: create tables
# ---------------------------------------------------------------------------
def create_all(bind: Optional[Engine] = None) -> None:
    """Create all tables for imported SQLModel subclasses, including PeriodDB."""
    SQLModel.metadata.create_all(bind or engine)
    logger.info(f"Schema ensured on {(bind or engine).url}")


# ---------------------------------------------------------------------------
# Lightweight CLI
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    """
    Quick bootstrap helper.

    Examples
    --------
    $ python -m ringside.db --create        # first‑time table creation
    """
    import argparse
    import textwrap

    from .settings import configure_logging

    parser = argparse.ArgumentParser(
        prog="python -m ringside.db",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description=textwrap.dedent(
            """\
            Ringside DB utilities
            ---------------------
            --create   Create all SQLModel tables (safe if they already exist)
            """
        ),
    )
    parser.add_argument("--create", action="store_true", help="create tables")
    args = parser.parse_args()

    configure_logging()
    if args.create:
        create_all()
        print("✅ ringside schema initialised")
    else:
        parser.print_help()
