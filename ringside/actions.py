"""
ringside.actions
================

Execute validated transitions against a period store.

Every public method of :class:`RosterActions` follows the same pipeline:

1. open one unit of work with ``store.transaction()``,
2. run the operation's validator (:pyfunc:`ringside.lifecycle.ensure`),
3. open/close the affected periods, cascades included,
4. after the unit of work has committed, publish one
   :class:`~ringside.events.StatusChanged` per changed member.

A rejected transition raises its :class:`~ringside.errors.TransitionRejected`
subclass before anything is written.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from datetime import datetime
from typing import Iterator, List, Optional

from . import lifecycle
from .category import is_team
from .errors import REJECTIONS, ReasonCode
from .events import EventDispatcher, StatusChanged
from .models import Operation, Period, TrackKind
from .roster import RosterMember
from .store import PeriodStore
from .tracks import Clock

logger = logging.getLogger(__name__)

# operations that open a service track and so may be scheduled ahead
SCHEDULABLE = frozenset({Operation.EMPLOY, Operation.DEBUT, Operation.REACTIVATE})


class RosterActions:
    """
    Transition façade over one :class:`~ringside.store.PeriodStore`.

    Parameters
    ----------
    store : PeriodStore
        Store whose ``transaction()`` wraps every check‑then‑write.
    events : EventDispatcher, optional
        Receives a :class:`StatusChanged` per committed transition.
    clock : callable, optional
        Default moment for ``at``; falls back to the member's own clock.

    Example
    -------
    >>> from ringside.store import InMemoryPeriodStore
    >>> store = InMemoryPeriodStore()
    >>> w = RosterMember("W1", "wrestler", store)
    >>> _ = RosterActions(store).employ(w, datetime(2024, 1, 1))
    >>> w.is_employed()
    True
    """

    def __init__(self, store: PeriodStore, events: Optional[EventDispatcher] = None,
                 clock: Optional[Clock] = None) -> None:
        self.store = store
        self.events = events or EventDispatcher()
        self._clock = clock

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _moment(self, operation: Operation, member: RosterMember, at: Optional[datetime]) -> datetime:
        """Resolve *at*; only service openings may be dated after the member's now."""
        if at is None:
            return self._clock() if self._clock else member.now()
        if at > member.now() and (operation not in SCHEDULABLE or member.is_retired()):
            logger.info(f"{operation.value} rejected for {member!r}: {at} is in the future")
            raise REJECTIONS[operation](ReasonCode.SCHEDULED_IN_FUTURE, owner=member)
        return at

    @contextmanager
    def _unit(self, operation: Operation, member: RosterMember) -> Iterator[List[StatusChanged]]:
        """Validate inside the store's transaction, publish once it commits."""
        pending: List[StatusChanged] = []
        with self.store.transaction():
            lifecycle.ensure(operation, member)
            yield pending
        for event in pending:
            logger.info(f"{event.operation.value} {event.owner_type} {event.owner_id!r} at {event.occurred_at}")
            self.events.publish(event)

    @staticmethod
    def _record(pending: List[StatusChanged], operation: Operation, member: RosterMember,
                at: datetime, period: Optional[Period]) -> Period:
        pending.append(StatusChanged(member.owner_id, member.owner_type, operation, at, period))
        return period

    @staticmethod
    def _close_if_active(member: RosterMember, kind: TrackKind, at: datetime) -> Optional[Period]:
        if member.has_track(kind) and member.track(kind).is_active():
            return member.track(kind).close(at)
        return None

    def _team_members(self, member: RosterMember) -> List[RosterMember]:
        if not is_team(member.category):
            return []
        return list(member.current_members() or ())

    # ------------------------------------------------------------------
    # Employment
    # ------------------------------------------------------------------
    def _employ_one(self, member: RosterMember, at: datetime) -> Period:
        self._close_if_active(member, TrackKind.RETIREMENT, at)
        return member.track(TrackKind.EMPLOYMENT).open(at)

    def employ(self, member: RosterMember, at: Optional[datetime] = None) -> Period:
        """Employ *member*; a team's current members not yet employed are employed with it."""
        at = self._moment(Operation.EMPLOY, member, at)
        with self._unit(Operation.EMPLOY, member) as pending:
            for wrestler in self._team_members(member):
                if lifecycle.can(Operation.EMPLOY, wrestler) and not (wrestler.is_retired() and at > wrestler.now()):
                    self._record(pending, Operation.EMPLOY, wrestler, at, self._employ_one(wrestler, at))
            period = self._employ_one(member, at)
            return self._record(pending, Operation.EMPLOY, member, at, period)

    def release(self, member: RosterMember, at: Optional[datetime] = None) -> Period:
        at = self._moment(Operation.RELEASE, member, at)
        with self._unit(Operation.RELEASE, member) as pending:
            self._close_if_active(member, TrackKind.SUSPENSION, at)
            self._close_if_active(member, TrackKind.INJURY, at)
            period = member.track(TrackKind.EMPLOYMENT).close(at)
            return self._record(pending, Operation.RELEASE, member, at, period)

    # ------------------------------------------------------------------
    # Injury
    # ------------------------------------------------------------------
    def injure(self, member: RosterMember, at: Optional[datetime] = None) -> Period:
        at = self._moment(Operation.INJURE, member, at)
        with self._unit(Operation.INJURE, member) as pending:
            period = member.track(TrackKind.INJURY).open(at)
            return self._record(pending, Operation.INJURE, member, at, period)

    def heal(self, member: RosterMember, at: Optional[datetime] = None) -> Period:
        at = self._moment(Operation.HEAL, member, at)
        with self._unit(Operation.HEAL, member) as pending:
            period = member.track(TrackKind.INJURY).close(at)
            return self._record(pending, Operation.HEAL, member, at, period)

    # ------------------------------------------------------------------
    # Suspension
    # ------------------------------------------------------------------
    def suspend(self, member: RosterMember, at: Optional[datetime] = None) -> Period:
        """Suspend *member*; a team's current members are suspended with it."""
        at = self._moment(Operation.SUSPEND, member, at)
        with self._unit(Operation.SUSPEND, member) as pending:
            for wrestler in self._team_members(member):
                self._record(pending, Operation.SUSPEND, wrestler, at,
                             wrestler.track(TrackKind.SUSPENSION).open(at))
            period = member.track(TrackKind.SUSPENSION).open(at)
            return self._record(pending, Operation.SUSPEND, member, at, period)

    def reinstate(self, member: RosterMember, at: Optional[datetime] = None) -> Period:
        """End *member*'s suspension, and that of any suspended team member."""
        at = self._moment(Operation.REINSTATE, member, at)
        with self._unit(Operation.REINSTATE, member) as pending:
            for wrestler in self._team_members(member):
                closed = self._close_if_active(wrestler, TrackKind.SUSPENSION, at)
                if closed is not None:
                    self._record(pending, Operation.REINSTATE, wrestler, at, closed)
            period = member.track(TrackKind.SUSPENSION).close(at)
            return self._record(pending, Operation.REINSTATE, member, at, period)

    # ------------------------------------------------------------------
    # Retirement
    # ------------------------------------------------------------------
    def _retire_one(self, member: RosterMember, at: datetime) -> Period:
        self._close_if_active(member, TrackKind.SUSPENSION, at)
        self._close_if_active(member, TrackKind.INJURY, at)
        self._close_if_active(member, member.service_kind, at)
        return member.track(TrackKind.RETIREMENT).open(at)

    def retire(self, member: RosterMember, at: Optional[datetime] = None) -> Period:
        """
        Retire *member*.

        Suspension, injury and the service track are closed first; a team's
        current members retire alongside it.
        """
        at = self._moment(Operation.RETIRE, member, at)
        with self._unit(Operation.RETIRE, member) as pending:
            for wrestler in self._team_members(member):
                self._record(pending, Operation.RETIRE, wrestler, at, self._retire_one(wrestler, at))
            period = self._retire_one(member, at)
            return self._record(pending, Operation.RETIRE, member, at, period)

    def unretire(self, member: RosterMember, at: Optional[datetime] = None) -> Period:
        at = self._moment(Operation.UNRETIRE, member, at)
        with self._unit(Operation.UNRETIRE, member) as pending:
            period = member.track(TrackKind.RETIREMENT).close(at)
            member.service_track.open(at)
            return self._record(pending, Operation.UNRETIRE, member, at, period)

    # ------------------------------------------------------------------
    # Activity (titles, stables)
    # ------------------------------------------------------------------
    def debut(self, member: RosterMember, at: Optional[datetime] = None) -> Period:
        at = self._moment(Operation.DEBUT, member, at)
        with self._unit(Operation.DEBUT, member) as pending:
            period = member.track(TrackKind.ACTIVITY).open(at)
            return self._record(pending, Operation.DEBUT, member, at, period)

    def reactivate(self, member: RosterMember, at: Optional[datetime] = None) -> Period:
        at = self._moment(Operation.REACTIVATE, member, at)
        with self._unit(Operation.REACTIVATE, member) as pending:
            period = member.track(TrackKind.ACTIVITY).open(at)
            return self._record(pending, Operation.REACTIVATE, member, at, period)

    def deactivate(self, member: RosterMember, at: Optional[datetime] = None) -> Period:
        at = self._moment(Operation.DEACTIVATE, member, at)
        with self._unit(Operation.DEACTIVATE, member) as pending:
            period = member.track(TrackKind.ACTIVITY).close(at)
            return self._record(pending, Operation.DEACTIVATE, member, at, period)

    # ------------------------------------------------------------------
    # Dispatch by name
    # ------------------------------------------------------------------
    def run(self, operation: Operation, member: RosterMember, at: Optional[datetime] = None) -> Period:
        """Run *operation* by enum value, e.g. from the CLI."""
        operation = lifecycle.validator_for(operation).operation
        return getattr(self, operation.value)(member, at)
