"""
ringside.models
===============

Dataclasses and enums describing status periods and the roster members
that own them.  These objects are intentionally lightweight; they carry
**no** external‑library dependencies so that importing `ringside` stays
fast and the validation engine can be unit‑tested without a database.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime, timedelta
from enum import Enum
from typing import Optional


class OwnerType(str, Enum):
    """Closed set of roster entities that own status tracks."""
    WRESTLER = "wrestler"
    MANAGER = "manager"
    REFEREE = "referee"
    TAG_TEAM = "tag_team"
    TITLE = "title"
    STABLE = "stable"

    def __str__(self) -> str:        # nicer REPL display
        return self.value

    @property
    def label(self) -> str:
        return _LABELS[self][0]

    @property
    def plural_label(self) -> str:
        return _LABELS[self][1]


_LABELS = {
    OwnerType.WRESTLER: ("Wrestler", "Wrestlers"),
    OwnerType.MANAGER: ("Manager", "Managers"),
    OwnerType.REFEREE: ("Referee", "Referees"),
    OwnerType.TAG_TEAM: ("Tag Team", "Tag Teams"),
    OwnerType.TITLE: ("Title", "Titles"),
    OwnerType.STABLE: ("Stable", "Stables"),
}


class Category(str, Enum):
    """Individual people vs. teams/championships."""
    INDIVIDUAL = "individual"
    TEAM = "team"

    def __str__(self) -> str:
        return self.value


class TrackKind(str, Enum):
    """Independent status histories an owner may carry."""
    EMPLOYMENT = "employment"
    INJURY = "injury"
    SUSPENSION = "suspension"
    RETIREMENT = "retirement"
    ACTIVITY = "activity"

    def __str__(self) -> str:
        return self.value


class Operation(str, Enum):
    """State transitions gated by :pymod:`ringside.lifecycle`."""
    EMPLOY = "employ"
    RELEASE = "release"
    INJURE = "injure"
    HEAL = "heal"
    SUSPEND = "suspend"
    REINSTATE = "reinstate"
    RETIRE = "retire"
    UNRETIRE = "unretire"
    DEBUT = "debut"
    REACTIVATE = "reactivate"
    DEACTIVATE = "deactivate"

    def __str__(self) -> str:
        return self.value


class StrategyId(str, Enum):
    """Validation strategies selected per category."""
    INDIVIDUAL_SUSPENSION = "individual_suspension"
    TEAM_SUSPENSION = "team_suspension"
    INDIVIDUAL_RETIREMENT = "individual_retirement"
    TEAM_RETIREMENT = "team_retirement"


# ---------------------------------------------------------------------
# Derived (never stored) statuses
# ---------------------------------------------------------------------
class EmploymentStatus(str, Enum):
    UNEMPLOYED = "unemployed"
    FUTURE_EMPLOYMENT = "future_employment"
    EMPLOYED = "employed"
    RELEASED = "released"
    RETIRED = "retired"


class RosterStatus(str, Enum):
    """Single display status for an employment‑tracked owner."""
    UNEMPLOYED = "unemployed"
    FUTURE_EMPLOYMENT = "future_employment"
    BOOKABLE = "bookable"
    INJURED = "injured"
    SUSPENDED = "suspended"
    RELEASED = "released"
    RETIRED = "retired"


class ActivationStatus(str, Enum):
    """Single display status for an activity‑tracked owner."""
    UNACTIVATED = "unactivated"
    FUTURE_ACTIVATION = "future_activation"
    ACTIVE = "active"
    INACTIVE = "inactive"
    RETIRED = "retired"


@dataclass(frozen=True)
class Period:
    """
    One interval of a status track for one owner.

    Parameters
    ----------
    id : int
        Store‑assigned identifier.
    owner_id : str
        Opaque identifier of the owning roster member.
    owner_type : OwnerType
        Which kind of roster member owns the period.
    track : TrackKind
        Which status history the period belongs to.
    started_at : datetime.datetime
        Start of the interval (required).
    ended_at : datetime.datetime | None, default=None
        End of the interval; ``None`` means open / ongoing.
    """
    id: int
    owner_id: str
    owner_type: OwnerType
    track: TrackKind
    started_at: datetime
    ended_at: Optional[datetime] = None

    def __post_init__(self):
        if self.ended_at is not None and self.ended_at < self.started_at:
            raise ValueError("ended_at cannot precede started_at")

    # Convenience helpers -------------------------------------------------
    @property
    def is_open(self) -> bool:
        return self.ended_at is None

    def is_current(self, as_of: datetime) -> bool:
        """Open and already started at *as_of*."""
        return self.is_open and self.started_at <= as_of

    def is_future(self, as_of: datetime) -> bool:
        """Open but scheduled to start after *as_of*."""
        return self.is_open and self.started_at > as_of

    def duration(self, as_of: Optional[datetime] = None) -> timedelta:
        """Length of the period; open periods are measured up to *as_of*."""
        end = self.ended_at or as_of or datetime.now()
        return max(end - self.started_at, timedelta(0))

    def closed_at(self, ended_at: datetime) -> "Period":
        """Return a copy of this period ending at *ended_at*."""
        return replace(self, ended_at=ended_at)


@dataclass(frozen=True)
class StatusFact:
    """Read‑side projection of one track for one owner at one instant."""
    current: Optional[Period] = None
    future: Optional[Period] = None
    most_recent_past: Optional[Period] = None
    has_any: bool = False


@dataclass(frozen=True)
class TransitionResult:
    """
    Outcome of a transition check.

    ``reason`` holds a :class:`ringside.errors.ReasonCode` whenever
    ``allowed`` is false.
    """
    operation: Operation
    allowed: bool
    reason: Optional[Enum] = None

    @classmethod
    def permit(cls, operation: Operation) -> "TransitionResult":
        return cls(operation, True)

    @classmethod
    def reject(cls, operation: Operation, reason: Enum) -> "TransitionResult":
        return cls(operation, False, reason)

    def __bool__(self) -> bool:
        return self.allowed
