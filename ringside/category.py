"""
ringside.category
=================

Classification of roster members and the owner‑type → track registry.

Every :class:`~ringside.models.OwnerType` belongs to exactly one
:class:`~ringside.models.Category`.  The category decides which
capabilities apply (only individuals can be injured) and which validation
strategy governs suspension and retirement.

``TRACK_REGISTRY`` spells out which status tracks each owner type carries
and is checked once, at import time, by :pyfunc:`validate_registry`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Mapping, Union

from .errors import RegistryError, UnsupportedOperationError, UnsupportedOwnerTypeError
from .models import Category, OwnerType, StrategyId, TrackKind
from .settings import settings

# ---------------------------------------------------------------------
# Owner type → category
# ---------------------------------------------------------------------
_CATEGORIES = {
    OwnerType.WRESTLER: Category.INDIVIDUAL,
    OwnerType.MANAGER: Category.INDIVIDUAL,
    OwnerType.REFEREE: Category.INDIVIDUAL,
    OwnerType.TAG_TEAM: Category.TEAM,
    OwnerType.TITLE: Category.TEAM,
    OwnerType.STABLE: Category.TEAM,
}


def owner_type_of(owner_type: Union[OwnerType, str]) -> OwnerType:
    """Coerce *owner_type* into the closed enum or raise."""
    try:
        return OwnerType(owner_type)
    except ValueError:
        raise UnsupportedOwnerTypeError(f"Unsupported roster member type: {owner_type!r}") from None


def category_of(owner_type: Union[OwnerType, str]) -> Category:
    return _CATEGORIES[owner_type_of(owner_type)]


# ---------------------------------------------------------------------
# Capability predicates
# ---------------------------------------------------------------------
def can_be_injured(category: Category) -> bool:
    return category is Category.INDIVIDUAL


def can_be_suspended(category: Category) -> bool:
    return True


def can_be_employed(category: Category) -> bool:
    return True


def can_be_retired(category: Category) -> bool:
    return True


def is_individual(category: Category) -> bool:
    return category is Category.INDIVIDUAL


def is_team(category: Category) -> bool:
    return category is Category.TEAM


def owner_types_in(category: Category) -> List[OwnerType]:
    return [t for t, c in _CATEGORIES.items() if c is category]


def injurable_owner_types() -> List[OwnerType]:
    return [t for t, c in _CATEGORIES.items() if can_be_injured(c)]


# ---------------------------------------------------------------------
# Strategy selection
# ---------------------------------------------------------------------
_SUSPENSION_STRATEGIES = {
    Category.INDIVIDUAL: StrategyId.INDIVIDUAL_SUSPENSION,
    Category.TEAM: StrategyId.TEAM_SUSPENSION,
}

_RETIREMENT_STRATEGIES = {
    Category.INDIVIDUAL: StrategyId.INDIVIDUAL_RETIREMENT,
    Category.TEAM: StrategyId.TEAM_RETIREMENT,
}


def suspension_strategy_for(category: Category) -> StrategyId:
    return _SUSPENSION_STRATEGIES[Category(category)]


def retirement_strategy_for(category: Category) -> StrategyId:
    return _RETIREMENT_STRATEGIES[Category(category)]


# ---------------------------------------------------------------------
# Track registry
# ---------------------------------------------------------------------
@dataclass(frozen=True)
class TrackConfig:
    """One status track carried by one owner type."""
    owner_type: OwnerType
    kind: TrackKind
    table: str


SERVICE_TRACKS = (TrackKind.EMPLOYMENT, TrackKind.ACTIVITY)

_PLURAL_TABLE = {
    TrackKind.EMPLOYMENT: "employments",
    TrackKind.INJURY: "injuries",
    TrackKind.SUSPENSION: "suspensions",
    TrackKind.RETIREMENT: "retirements",
    TrackKind.ACTIVITY: "activations",
}


def _entries(owner_type: OwnerType, *kinds: TrackKind) -> Dict[TrackKind, TrackConfig]:
    prefix = owner_type.value + "s"
    return {k: TrackConfig(owner_type, k, f"{prefix}_{_PLURAL_TABLE[k]}") for k in kinds}


_PERSON_TRACKS = (TrackKind.EMPLOYMENT, TrackKind.INJURY, TrackKind.SUSPENSION, TrackKind.RETIREMENT)

TRACK_REGISTRY: Mapping[OwnerType, Dict[TrackKind, TrackConfig]] = {
    OwnerType.WRESTLER: _entries(OwnerType.WRESTLER, *_PERSON_TRACKS),
    OwnerType.MANAGER: _entries(OwnerType.MANAGER, *_PERSON_TRACKS),
    OwnerType.REFEREE: _entries(OwnerType.REFEREE, *_PERSON_TRACKS),
    OwnerType.TAG_TEAM: _entries(
        OwnerType.TAG_TEAM, TrackKind.EMPLOYMENT, TrackKind.SUSPENSION, TrackKind.RETIREMENT
    ),
    OwnerType.TITLE: _entries(
        OwnerType.TITLE, TrackKind.ACTIVITY, TrackKind.SUSPENSION, TrackKind.RETIREMENT
    ),
    OwnerType.STABLE: _entries(
        OwnerType.STABLE, TrackKind.ACTIVITY, TrackKind.SUSPENSION, TrackKind.RETIREMENT
    ),
}


def validate_registry(registry: Mapping[OwnerType, Mapping[TrackKind, TrackConfig]] = TRACK_REGISTRY) -> None:
    """
    Fail fast if *registry* is incomplete or contradicts the categories.

    Raises
    ------
    RegistryError
        When an owner type has no entry, an entry is keyed inconsistently,
        a non‑injurable category carries an injury track, or an owner type
        does not have exactly one service track.
    """
    for owner_type in OwnerType:
        tracks = registry.get(owner_type)
        if not tracks:
            raise RegistryError(f"No tracks registered for {owner_type}")
        for kind, config in tracks.items():
            if config.owner_type is not owner_type or config.kind is not kind:
                raise RegistryError(f"Mismatched track config {config} under {owner_type}/{kind}")
        if TrackKind.INJURY in tracks and not can_be_injured(category_of(owner_type)):
            raise RegistryError(f"{owner_type} cannot be injured but has an injury track")
        service = [k for k in SERVICE_TRACKS if k in tracks]
        if len(service) != 1:
            raise RegistryError(f"{owner_type} must have exactly one service track, found {service}")
        for required in (TrackKind.SUSPENSION, TrackKind.RETIREMENT):
            if required not in tracks:
                raise RegistryError(f"{owner_type} is missing its {required} track")


def tracks_for(owner_type: Union[OwnerType, str]) -> Dict[TrackKind, TrackConfig]:
    return dict(TRACK_REGISTRY[owner_type_of(owner_type)])


def track_config(owner_type: Union[OwnerType, str], kind: TrackKind) -> TrackConfig:
    owner_type = owner_type_of(owner_type)
    try:
        return TRACK_REGISTRY[owner_type][TrackKind(kind)]
    except KeyError:
        raise UnsupportedOperationError(f"{owner_type.label} has no {kind} track") from None


def service_track_for(owner_type: Union[OwnerType, str]) -> TrackKind:
    tracks = TRACK_REGISTRY[owner_type_of(owner_type)]
    return next(k for k in SERVICE_TRACKS if k in tracks)


if settings.strict_registry:
    validate_registry()
