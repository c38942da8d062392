"""
ringside.strategies
===================

Category‑specific rule sets for suspension and retirement.

A strategy yields ``(reason, failing)`` pairs in evaluation order, where
``failing`` is a zero‑argument callable returning ``True`` when the rule
rejects the transition.  Rules are evaluated lazily by
:pymod:`ringside.lifecycle`, so a strategy never reads more tracks than
needed to find the first failure.
"""

from __future__ import annotations

from itertools import chain
from typing import Callable, Dict, Iterator, Optional, Tuple

from .errors import ReasonCode, RegistryError
from .models import StrategyId
from .roster import RosterMember

Rule = Tuple[ReasonCode, Callable[[], bool]]


def first_failure(rules: Iterator[Rule]) -> Optional[ReasonCode]:
    """Return the reason of the first failing rule, or ``None``."""
    for reason, failing in rules:
        if failing():
            return reason
    return None


def in_service_rules(member: RosterMember) -> Iterator[Rule]:
    """Base retirement precondition shared by every category."""
    yield ReasonCode.UNEMPLOYED, member.is_unemployed
    yield ReasonCode.RELEASED, member.is_released


def _status_rules(member: RosterMember) -> Iterator[Rule]:
    yield ReasonCode.UNEMPLOYED, member.is_unemployed
    yield ReasonCode.RELEASED, member.is_released
    yield ReasonCode.RETIRED, member.is_retired
    yield ReasonCode.HAS_FUTURE_EMPLOYMENT, member.has_future_employment


class ValidationStrategy:
    """Base class: a named, ordered rule sequence."""

    id: StrategyId

    def rules(self, member: RosterMember) -> Iterator[Rule]:
        raise NotImplementedError


# ---------------------------------------------------------------------
# Suspension
# ---------------------------------------------------------------------
class IndividualSuspension(ValidationStrategy):
    id = StrategyId.INDIVIDUAL_SUSPENSION

    def rules(self, member):
        yield from _status_rules(member)
        yield ReasonCode.ALREADY_SUSPENDED, member.is_suspended
        yield ReasonCode.INJURED, member.is_injured


class TeamSuspension(ValidationStrategy):
    """
    Team status first, then (if the team exposes its members) every
    current member must be suspendable on its own.
    """

    id = StrategyId.TEAM_SUSPENSION

    def __init__(self, individual: Optional[IndividualSuspension] = None) -> None:
        self.individual = individual or IndividualSuspension()

    def rules(self, member):
        yield from _status_rules(member)
        yield ReasonCode.ALREADY_SUSPENDED, member.is_suspended

        members = member.current_members()
        if members is None:
            return
        yield ReasonCode.NO_ACTIVE_MEMBERS, lambda: not members
        for wrestler in members:
            yield ReasonCode.MEMBER_SUSPENDED, wrestler.is_suspended
            yield ReasonCode.MEMBER_INJURED, wrestler.is_injured
            yield ReasonCode.MEMBER_NOT_SUSPENDABLE, (
                lambda w=wrestler: first_failure(self.individual.rules(w)) is not None
            )


# ---------------------------------------------------------------------
# Retirement
# ---------------------------------------------------------------------
class IndividualRetirement(ValidationStrategy):
    id = StrategyId.INDIVIDUAL_RETIREMENT

    def rules(self, member):
        yield ReasonCode.HAS_FUTURE_EMPLOYMENT, member.has_future_employment
        yield ReasonCode.RETIRED, member.is_retired


class TeamRetirement(ValidationStrategy):
    id = StrategyId.TEAM_RETIREMENT

    def __init__(self, individual: Optional[IndividualRetirement] = None) -> None:
        self.individual = individual or IndividualRetirement()

    def _member_can_retire(self, wrestler: RosterMember) -> bool:
        rules = chain(in_service_rules(wrestler), self.individual.rules(wrestler))
        return first_failure(rules) is None

    def rules(self, member):
        yield ReasonCode.HAS_FUTURE_EMPLOYMENT, member.has_future_employment
        yield ReasonCode.RETIRED, member.is_retired

        members = member.current_members()
        if members is None:
            return
        yield ReasonCode.NO_ACTIVE_MEMBERS, lambda: not members
        for wrestler in members:
            yield ReasonCode.MEMBER_INJURED, wrestler.is_injured
            yield ReasonCode.MEMBER_SUSPENDED, wrestler.is_suspended
            yield ReasonCode.MEMBER_NOT_RETIRABLE, (
                lambda w=wrestler: not self._member_can_retire(w)
            )


def default_strategies() -> Dict[StrategyId, ValidationStrategy]:
    """Registry of the built‑in strategy for every :class:`StrategyId`."""
    strategies = (IndividualSuspension(), TeamSuspension(), IndividualRetirement(), TeamRetirement())
    registry = {s.id: s for s in strategies}
    missing = set(StrategyId) - set(registry)
    if missing:
        raise RegistryError(f"No strategy registered for {sorted(m.value for m in missing)}")
    return registry
