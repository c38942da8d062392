"""
ringside.roster
===============

A roster member composed explicitly from its status tracks.

:class:`RosterMember` holds one :class:`~ringside.tracks.StatusTrack` per
track registered for its owner type in
:pydata:`ringside.category.TRACK_REGISTRY`.  The predicates below are the
vocabulary that validators, strategies and the eligibility composer are
written in.

Titles and stables are activated rather than employed, so the
employment‑flavoured predicates read whichever *service track* the owner
carries (Employment, or Activity for titles and stables).
"""

from __future__ import annotations

from datetime import datetime
from typing import Callable, Dict, Optional, Sequence, Union

from .category import category_of, owner_type_of, service_track_for, tracks_for, can_be_injured
from .errors import UnsupportedOperationError
from .models import Category, OwnerType, TrackKind
from .store import PeriodStore
from .tracks import Clock, StatusTrack

MemberProvider = Callable[["RosterMember"], Sequence["RosterMember"]]


class RosterMember:
    """
    One wrestler, manager, referee, tag team, title or stable.

    Parameters
    ----------
    owner_id : str
        Opaque identifier of the entity.
    owner_type : OwnerType | str
        Kind of entity; decides the category and the tracks.
    store : PeriodStore
        Where the periods live.
    clock : callable, optional
        Returns "now"; defaults to :pyfunc:`datetime.datetime.now`.
    members : callable, optional
        For teams, returns the current members as ``RosterMember`` objects.
        Only team validation strategies consult it.
    name : str, optional
        Display name used in log lines.
    """

    def __init__(self, owner_id: str, owner_type: Union[OwnerType, str], store: PeriodStore,
                 clock: Optional[Clock] = None, members: Optional[MemberProvider] = None,
                 name: Optional[str] = None) -> None:
        self.owner_id = owner_id
        self.owner_type = owner_type_of(owner_type)
        self.category: Category = category_of(self.owner_type)
        self.store = store
        self.name = name
        self._members = members
        self.tracks: Dict[TrackKind, StatusTrack] = {
            kind: StatusTrack(store, owner_id, self.owner_type, kind, clock)
            for kind in tracks_for(self.owner_type)
        }
        self.service_kind = service_track_for(self.owner_type)

    def __repr__(self) -> str:
        return f"RosterMember({self.owner_type.value}:{self.owner_id})"

    def __str__(self) -> str:
        return f"{self.owner_type.label} '{self.name or self.owner_id}'"

    # ------------------------------------------------------------------
    # Track access
    # ------------------------------------------------------------------
    def has_track(self, kind: TrackKind) -> bool:
        return TrackKind(kind) in self.tracks

    def track(self, kind: TrackKind) -> StatusTrack:
        try:
            return self.tracks[TrackKind(kind)]
        except KeyError:
            raise UnsupportedOperationError(f"{self.owner_type.label} has no {kind} track") from None

    @property
    def service_track(self) -> StatusTrack:
        return self.tracks[self.service_kind]

    def now(self) -> datetime:
        return self.service_track.now()

    def current_members(self) -> Optional[Sequence["RosterMember"]]:
        """Team members from the injected provider, or ``None`` if there is none."""
        if self._members is None:
            return None
        return list(self._members(self))

    # ------------------------------------------------------------------
    # Service (employment / activity)
    # ------------------------------------------------------------------
    def is_employed(self) -> bool:
        return self.service_track.is_active()

    def has_future_employment(self) -> bool:
        return self.service_track.has_future()

    def has_service_history(self) -> bool:
        return self.service_track.has_any()

    def is_unemployed(self) -> bool:
        """Never employed (or activated) and not retired."""
        return not self.has_service_history() and not self.is_retired()

    def is_released(self) -> bool:
        """Served before, nothing current or scheduled, not retired."""
        return (
            self.has_service_history()
            and not self.is_employed()
            and not self.has_future_employment()
            and not self.is_retired()
        )

    def is_not_in_employment(self) -> bool:
        return self.is_unemployed() or self.is_released() or self.is_retired()

    def first_service_date(self) -> Optional[datetime]:
        first = self.service_track.first()
        return first.started_at if first else None

    # ------------------------------------------------------------------
    # Injury / suspension / retirement
    # ------------------------------------------------------------------
    @property
    def can_be_injured(self) -> bool:
        return can_be_injured(self.category)

    def is_injured(self) -> bool:
        if not self.can_be_injured:
            return False
        return self.track(TrackKind.INJURY).is_active()

    def is_suspended(self) -> bool:
        return self.track(TrackKind.SUSPENSION).is_active()

    def is_retired(self) -> bool:
        return self.track(TrackKind.RETIREMENT).is_active()

    # ------------------------------------------------------------------
    # Activity (titles, stables)
    # ------------------------------------------------------------------
    def has_activity_periods(self) -> bool:
        return self.track(TrackKind.ACTIVITY).has_any()

    def is_currently_active(self) -> bool:
        return self.track(TrackKind.ACTIVITY).is_active()

    def has_future_activation(self) -> bool:
        return self.track(TrackKind.ACTIVITY).has_future()

    def is_inactive(self) -> bool:
        return not self.is_currently_active()

    def is_unactivated(self) -> bool:
        return not self.has_activity_periods()
