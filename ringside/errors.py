"""
ringside.errors
===============

Exception hierarchy and reason codes for the status engine.

Three families:

* :class:`TransitionRejected` – an expected, user‑facing precondition
  failure.  Always carries a :class:`ReasonCode`.
* :class:`InvariantViolation` – corrupted data or a missing unit of work
  around an open/close (two open periods on one track, closing a track
  that is not open, …).
* :class:`ClassificationError` – integration mistakes such as an unknown
  owner type or an operation the owner does not support.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from .models import Operation


class ReasonCode(str, Enum):
    """Why a transition was rejected.  One code per failing rule."""
    ALREADY_EMPLOYED = "already_employed"
    HAS_FUTURE_EMPLOYMENT = "has_future_employment"
    UNEMPLOYED = "unemployed"
    RELEASED = "released"
    RETIRED = "retired"
    ALREADY_INJURED = "already_injured"
    INJURED = "injured"
    NOT_INJURED = "not_injured"
    NOT_INJURABLE = "not_injurable"
    ALREADY_SUSPENDED = "already_suspended"
    SUSPENDED = "suspended"
    NOT_SUSPENDED = "not_suspended"
    NOT_RETIRED = "not_retired"
    ALREADY_DEBUTED = "already_debuted"
    NEVER_ACTIVATED = "never_activated"
    ALREADY_ACTIVE = "already_active"
    ALREADY_INACTIVE = "already_inactive"
    HAS_FUTURE_ACTIVATION = "has_future_activation"
    NO_ACTIVE_MEMBERS = "no_active_members"
    MEMBER_SUSPENDED = "member_suspended"
    MEMBER_INJURED = "member_injured"
    MEMBER_NOT_SUSPENDABLE = "member_not_suspendable"
    MEMBER_NOT_RETIRABLE = "member_not_retirable"
    SCHEDULED_IN_FUTURE = "scheduled_in_future"

    def __str__(self) -> str:
        return self.value


_MESSAGES = {
    ReasonCode.ALREADY_EMPLOYED: "This {owner} is already employed.",
    ReasonCode.HAS_FUTURE_EMPLOYMENT: "This {owner} has not been officially employed yet.",
    ReasonCode.UNEMPLOYED: "This {owner} is unemployed.",
    ReasonCode.RELEASED: "This {owner} has been released.",
    ReasonCode.RETIRED: "This {owner} is retired.",
    ReasonCode.ALREADY_INJURED: "This {owner} is already injured.",
    ReasonCode.INJURED: "This {owner} is injured.",
    ReasonCode.NOT_INJURED: "This {owner} is not injured.",
    ReasonCode.NOT_INJURABLE: "This {owner} cannot be injured.",
    ReasonCode.ALREADY_SUSPENDED: "This {owner} is already suspended.",
    ReasonCode.SUSPENDED: "This {owner} is suspended.",
    ReasonCode.NOT_SUSPENDED: "This {owner} is not suspended.",
    ReasonCode.NOT_RETIRED: "This {owner} is not retired.",
    ReasonCode.ALREADY_DEBUTED: "This {owner} has already debuted.",
    ReasonCode.NEVER_ACTIVATED: "This {owner} has never been activated.",
    ReasonCode.ALREADY_ACTIVE: "This {owner} is already active.",
    ReasonCode.ALREADY_INACTIVE: "This {owner} is already inactive.",
    ReasonCode.HAS_FUTURE_ACTIVATION: "This {owner} has a scheduled activation.",
    ReasonCode.NO_ACTIVE_MEMBERS: "This {owner} has no active members.",
    ReasonCode.MEMBER_SUSPENDED: "A member of this {owner} is suspended.",
    ReasonCode.MEMBER_INJURED: "A member of this {owner} is injured.",
    ReasonCode.MEMBER_NOT_SUSPENDABLE: "A member of this {owner} cannot be suspended.",
    ReasonCode.MEMBER_NOT_RETIRABLE: "A member of this {owner} cannot be retired.",
    ReasonCode.SCHEDULED_IN_FUTURE: "This change cannot be dated in the future for this {owner}.",
}


def message_for(reason: ReasonCode, owner_label: Optional[str] = None) -> str:
    """Return the human‑readable message for *reason*."""
    return _MESSAGES[reason].format(owner=(owner_label or "entity").lower())


# ---------------------------------------------------------------------
# Root
# ---------------------------------------------------------------------
class RingsideError(Exception):
    """Base class for every error raised by ringside."""


# ---------------------------------------------------------------------
# Precondition violations
# ---------------------------------------------------------------------
class TransitionRejected(RingsideError):
    """A business rule refused the requested transition."""

    operation: Operation

    def __init__(self, reason: ReasonCode, owner: Optional[object] = None,
                 operation: Optional[Operation] = None) -> None:
        self.reason = reason
        self.owner = owner
        if operation is not None:
            self.operation = operation
        label = getattr(getattr(owner, "owner_type", None), "label", None)
        super().__init__(f"{message_for(reason, label)} Cannot {self.operation.value}.")


class CannotBeEmployedError(TransitionRejected):
    operation = Operation.EMPLOY


class CannotBeReleasedError(TransitionRejected):
    operation = Operation.RELEASE


class CannotBeInjuredError(TransitionRejected):
    operation = Operation.INJURE


class CannotBeHealedError(TransitionRejected):
    operation = Operation.HEAL


class CannotBeSuspendedError(TransitionRejected):
    operation = Operation.SUSPEND


class CannotBeReinstatedError(TransitionRejected):
    operation = Operation.REINSTATE


class CannotBeRetiredError(TransitionRejected):
    operation = Operation.RETIRE


class CannotBeUnretiredError(TransitionRejected):
    operation = Operation.UNRETIRE


class CannotBeDebutedError(TransitionRejected):
    operation = Operation.DEBUT


class CannotBeReactivatedError(TransitionRejected):
    operation = Operation.REACTIVATE


class CannotBeDeactivatedError(TransitionRejected):
    operation = Operation.DEACTIVATE


REJECTIONS = {
    cls.operation: cls
    for cls in (
        CannotBeEmployedError,
        CannotBeReleasedError,
        CannotBeInjuredError,
        CannotBeHealedError,
        CannotBeSuspendedError,
        CannotBeReinstatedError,
        CannotBeRetiredError,
        CannotBeUnretiredError,
        CannotBeDebutedError,
        CannotBeReactivatedError,
        CannotBeDeactivatedError,
    )
}


# ---------------------------------------------------------------------
# Invariant violations
# ---------------------------------------------------------------------
class InvariantViolation(RingsideError):
    """Stored periods contradict the one‑open‑period rules."""


class AlreadyOpenError(InvariantViolation):
    """A track already has a current or scheduled open period."""


class NoOpenPeriodError(InvariantViolation):
    """Tried to close a track that has no current period."""


class InvalidRangeError(InvariantViolation):
    """``ended_at`` would precede ``started_at``."""


class MultipleOpenPeriodsError(InvariantViolation):
    """More than one open period was found for a single track."""


# ---------------------------------------------------------------------
# Classification errors
# ---------------------------------------------------------------------
class ClassificationError(RingsideError):
    """Configuration or integration mistake; fatal to the request."""


class UnsupportedOwnerTypeError(ClassificationError):
    """Owner type outside the closed roster set."""


class UnsupportedOperationError(ClassificationError):
    """Operation or track not available for this owner."""


class RegistryError(ClassificationError):
    """The owner‑type → track registry is incomplete or inconsistent."""
