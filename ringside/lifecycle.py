"""
ringside.lifecycle
==================

Transition guards for a :class:`ringside.roster.RosterMember`.

Every :class:`~ringside.models.Operation` has one validator: an ordered
rule sequence whose first failing rule decides the
:class:`~ringside.errors.ReasonCode`.  Each validator offers three views
of the same evaluation:

* :pymeth:`TransitionValidator.check` returns a
  :class:`~ringside.models.TransitionResult`,
* :pymeth:`TransitionValidator.ensure` raises the operation's
  :class:`~ringside.errors.TransitionRejected` subclass,
* :pymeth:`TransitionValidator.allows` returns a plain ``bool``.

Validators never mutate; :pymod:`ringside.actions` opens and closes the
periods once a check has passed.
"""

from __future__ import annotations

import logging
from itertools import chain
from typing import Dict, Iterator, Mapping, Optional

from .category import retirement_strategy_for, suspension_strategy_for
from .eligibility import is_bookable
from .errors import REJECTIONS, ReasonCode, UnsupportedOperationError
from .models import Operation, StrategyId, TrackKind, TransitionResult
from .roster import RosterMember
from .strategies import Rule, ValidationStrategy, default_strategies, in_service_rules

logger = logging.getLogger(__name__)


class TransitionValidator:
    """Base class: subclasses set ``operation`` and implement :pymeth:`rules`."""

    operation: Operation
    requires: Optional[TrackKind] = None

    def rules(self, member: RosterMember) -> Iterator[Rule]:
        raise NotImplementedError

    def check(self, member: RosterMember) -> TransitionResult:
        if self.requires is not None and not member.has_track(self.requires):
            raise UnsupportedOperationError(
                f"Cannot {self.operation.value} a {member.owner_type.label.lower()}: no {self.requires} track"
            )
        for reason, failing in self.rules(member):
            if failing():
                logger.info(f"{self.operation.value} rejected for {member!r}: {reason.value}")
                return TransitionResult.reject(self.operation, reason)
        return TransitionResult.permit(self.operation)

    def ensure(self, member: RosterMember) -> None:
        result = self.check(member)
        if not result.allowed:
            raise REJECTIONS[self.operation](result.reason, owner=member)

    def allows(self, member: RosterMember) -> bool:
        return self.check(member).allowed


# ---------------------------------------------------------------------
# Employment
# ---------------------------------------------------------------------
class EmployValidator(TransitionValidator):
    operation = Operation.EMPLOY
    requires = TrackKind.EMPLOYMENT

    def rules(self, member):
        yield ReasonCode.ALREADY_EMPLOYED, member.is_employed
        yield ReasonCode.HAS_FUTURE_EMPLOYMENT, member.has_future_employment


class ReleaseValidator(TransitionValidator):
    operation = Operation.RELEASE
    requires = TrackKind.EMPLOYMENT

    def rules(self, member):
        yield ReasonCode.UNEMPLOYED, member.is_unemployed
        yield ReasonCode.RELEASED, member.is_released
        yield ReasonCode.HAS_FUTURE_EMPLOYMENT, member.has_future_employment
        yield ReasonCode.RETIRED, member.is_retired


# ---------------------------------------------------------------------
# Injury
# ---------------------------------------------------------------------
class InjureValidator(TransitionValidator):
    operation = Operation.INJURE

    def rules(self, member):
        yield ReasonCode.NOT_INJURABLE, lambda: not member.can_be_injured
        yield ReasonCode.UNEMPLOYED, member.is_unemployed
        yield ReasonCode.RELEASED, member.is_released
        yield ReasonCode.RETIRED, member.is_retired
        yield ReasonCode.HAS_FUTURE_EMPLOYMENT, member.has_future_employment
        yield ReasonCode.ALREADY_INJURED, member.is_injured
        yield ReasonCode.SUSPENDED, member.is_suspended


class HealValidator(TransitionValidator):
    operation = Operation.HEAL

    def rules(self, member):
        yield ReasonCode.NOT_INJURED, lambda: not member.is_injured()


# ---------------------------------------------------------------------
# Suspension
# ---------------------------------------------------------------------
class _StrategyValidator(TransitionValidator):
    """Delegates (part of) its rules to the strategy picked by category."""

    def __init__(self, strategies: Optional[Mapping[StrategyId, ValidationStrategy]] = None) -> None:
        self.strategies = dict(strategies or default_strategies())

    def strategy_id(self, member: RosterMember) -> StrategyId:
        raise NotImplementedError

    def strategy(self, member: RosterMember) -> ValidationStrategy:
        sid = self.strategy_id(member)
        try:
            return self.strategies[sid]
        except KeyError:
            raise UnsupportedOperationError(f"No strategy registered for {sid.value}") from None


class SuspendValidator(_StrategyValidator):
    operation = Operation.SUSPEND
    requires = TrackKind.SUSPENSION

    def strategy_id(self, member):
        return suspension_strategy_for(member.category)

    def rules(self, member):
        return self.strategy(member).rules(member)


class ReinstateValidator(TransitionValidator):
    """Ending a suspension."""

    operation = Operation.REINSTATE
    requires = TrackKind.SUSPENSION

    def rules(self, member):
        yield ReasonCode.UNEMPLOYED, member.is_unemployed
        yield ReasonCode.RELEASED, member.is_released
        yield ReasonCode.HAS_FUTURE_EMPLOYMENT, member.has_future_employment
        if member.can_be_injured:
            yield ReasonCode.INJURED, member.is_injured
        yield ReasonCode.RETIRED, member.is_retired
        yield ReasonCode.NOT_SUSPENDED, lambda: is_bookable(member)


# ---------------------------------------------------------------------
# Retirement
# ---------------------------------------------------------------------
class RetireValidator(_StrategyValidator):
    operation = Operation.RETIRE
    requires = TrackKind.RETIREMENT

    def strategy_id(self, member):
        return retirement_strategy_for(member.category)

    def rules(self, member):
        return chain(in_service_rules(member), self.strategy(member).rules(member))


class UnretireValidator(TransitionValidator):
    operation = Operation.UNRETIRE
    requires = TrackKind.RETIREMENT

    def rules(self, member):
        yield ReasonCode.NOT_RETIRED, lambda: not member.is_retired()


# ---------------------------------------------------------------------
# Activity (titles, stables)
# ---------------------------------------------------------------------
class DebutValidator(TransitionValidator):
    operation = Operation.DEBUT
    requires = TrackKind.ACTIVITY

    def rules(self, member):
        yield ReasonCode.ALREADY_DEBUTED, member.has_activity_periods
        yield ReasonCode.RETIRED, member.is_retired


class ReactivateValidator(TransitionValidator):
    operation = Operation.REACTIVATE
    requires = TrackKind.ACTIVITY

    def rules(self, member):
        yield ReasonCode.NEVER_ACTIVATED, member.is_unactivated
        yield ReasonCode.ALREADY_ACTIVE, member.is_currently_active
        yield ReasonCode.RETIRED, member.is_retired


class DeactivateValidator(TransitionValidator):
    operation = Operation.DEACTIVATE
    requires = TrackKind.ACTIVITY

    def rules(self, member):
        yield ReasonCode.NEVER_ACTIVATED, member.is_unactivated
        yield ReasonCode.ALREADY_INACTIVE, member.is_inactive
        yield ReasonCode.HAS_FUTURE_ACTIVATION, member.has_future_activation
        yield ReasonCode.RETIRED, member.is_retired


# ---------------------------------------------------------------------
# Registry + module‑level helpers
# ---------------------------------------------------------------------
def build_validators(
    strategies: Optional[Mapping[StrategyId, ValidationStrategy]] = None,
) -> Dict[Operation, TransitionValidator]:
    """One validator per operation, strategies injected where needed."""
    strategies = strategies or default_strategies()
    validators = (
        EmployValidator(),
        ReleaseValidator(),
        InjureValidator(),
        HealValidator(),
        SuspendValidator(strategies),
        ReinstateValidator(),
        RetireValidator(strategies),
        UnretireValidator(),
        DebutValidator(),
        ReactivateValidator(),
        DeactivateValidator(),
    )
    return {v.operation: v for v in validators}


VALIDATORS = build_validators()


def validator_for(operation: Operation) -> TransitionValidator:
    try:
        return VALIDATORS[Operation(operation)]
    except (KeyError, ValueError):
        raise UnsupportedOperationError(f"Unsupported operation: {operation!r}") from None


def check(operation: Operation, member: RosterMember) -> TransitionResult:
    return validator_for(operation).check(member)


def ensure(operation: Operation, member: RosterMember) -> None:
    validator_for(operation).ensure(member)


def can(operation: Operation, member: RosterMember) -> bool:
    return validator_for(operation).allows(member)


# Named shortcuts ------------------------------------------------------
def ensure_can_be_employed(member):
    ensure(Operation.EMPLOY, member)


def ensure_can_be_released(member):
    ensure(Operation.RELEASE, member)


def ensure_can_be_injured(member):
    ensure(Operation.INJURE, member)


def ensure_can_be_healed(member):
    ensure(Operation.HEAL, member)


def ensure_can_be_suspended(member):
    ensure(Operation.SUSPEND, member)


def ensure_can_be_reinstated(member):
    ensure(Operation.REINSTATE, member)


def ensure_can_be_retired(member):
    ensure(Operation.RETIRE, member)


def ensure_can_be_unretired(member):
    ensure(Operation.UNRETIRE, member)


def ensure_can_be_debuted(member):
    ensure(Operation.DEBUT, member)


def ensure_can_be_reactivated(member):
    ensure(Operation.REACTIVATE, member)


def ensure_can_be_deactivated(member):
    ensure(Operation.DEACTIVATE, member)


def can_be_employed(member) -> bool:
    return can(Operation.EMPLOY, member)


def can_be_released(member) -> bool:
    return can(Operation.RELEASE, member)


def can_be_injured(member) -> bool:
    return can(Operation.INJURE, member)


def can_be_healed(member) -> bool:
    return can(Operation.HEAL, member)


def can_be_suspended(member) -> bool:
    return can(Operation.SUSPEND, member)


def can_be_reinstated(member) -> bool:
    return can(Operation.REINSTATE, member)


def can_be_retired(member) -> bool:
    return can(Operation.RETIRE, member)


def can_be_unretired(member) -> bool:
    return can(Operation.UNRETIRE, member)


def can_be_debuted(member) -> bool:
    return can(Operation.DEBUT, member)


def can_be_reactivated(member) -> bool:
    return can(Operation.REACTIVATE, member)


def can_be_deactivated(member) -> bool:
    return can(Operation.DEACTIVATE, member)
