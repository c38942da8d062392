"""
ringside.eligibility
====================

Booking eligibility and the derived display statuses.

Nothing here is stored: every function reads the member's tracks again,
so the answers always reflect the latest periods.
"""

from __future__ import annotations

from .category import is_individual
from .models import ActivationStatus, EmploymentStatus, RosterStatus, TrackKind
from .roster import RosterMember


def is_bookable(member: RosterMember) -> bool:
    """Can be put on a card right now."""
    return not (
        member.is_not_in_employment()
        or member.is_suspended()
        or member.is_injured()
        or member.has_future_employment()
    )


def is_not_currently_active(member: RosterMember) -> bool:
    return member.is_inactive() or member.has_future_activation() or member.is_retired()


def is_disbanded(member: RosterMember) -> bool:
    """Activated at some point but not active now."""
    return member.has_activity_periods() and not member.is_currently_active()


def can_join_team(member: RosterMember) -> bool:
    if not is_individual(member.category):
        return False
    if member.is_retired():
        return False
    if not (member.is_employed() or member.has_future_employment()):
        return False
    return not (member.is_suspended() or member.is_injured())


# ---------------------------------------------------------------------
# Derived statuses
# ---------------------------------------------------------------------
def employment_status(member: RosterMember) -> EmploymentStatus:
    if member.is_retired():
        return EmploymentStatus.RETIRED
    if member.is_employed():
        return EmploymentStatus.EMPLOYED
    if member.has_future_employment():
        return EmploymentStatus.FUTURE_EMPLOYMENT
    if member.is_released():
        return EmploymentStatus.RELEASED
    return EmploymentStatus.UNEMPLOYED


def roster_status(member: RosterMember) -> RosterStatus:
    """
    One status for an employment‑tracked owner.

    Retirement wins over everything, then an employed member is reported
    as suspended, injured or bookable in that order.
    """
    employment = employment_status(member)
    if employment is not EmploymentStatus.EMPLOYED:
        return RosterStatus(employment.value)
    if member.is_suspended():
        return RosterStatus.SUSPENDED
    if member.is_injured():
        return RosterStatus.INJURED
    return RosterStatus.BOOKABLE


def activation_status(member: RosterMember) -> ActivationStatus:
    member.track(TrackKind.ACTIVITY)  # raises for non‑activity owners
    if member.is_retired():
        return ActivationStatus.RETIRED
    if member.is_currently_active():
        return ActivationStatus.ACTIVE
    if member.has_future_activation():
        return ActivationStatus.FUTURE_ACTIVATION
    if member.is_unactivated():
        return ActivationStatus.UNACTIVATED
    return ActivationStatus.INACTIVE
