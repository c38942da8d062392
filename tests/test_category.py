"""
tests/test_category.py
======================

Unit tests for ringside.category: classification, strategies, registry.
"""

from dataclasses import replace

import pytest

from ringside.category import (
    TRACK_REGISTRY,
    can_be_injured,
    category_of,
    injurable_owner_types,
    is_individual,
    is_team,
    owner_types_in,
    retirement_strategy_for,
    service_track_for,
    suspension_strategy_for,
    track_config,
    tracks_for,
    validate_registry,
)
from ringside.errors import RegistryError, UnsupportedOperationError, UnsupportedOwnerTypeError
from ringside.models import Category, OwnerType, StrategyId, TrackKind


def test_every_owner_type_has_a_category():
    for owner_type in OwnerType:
        assert category_of(owner_type) in set(Category)


def test_individual_xor_team():
    for category in Category:
        assert is_individual(category) != is_team(category)


def test_string_owner_types_accepted():
    assert category_of("tag_team") is Category.TEAM


def test_unknown_owner_type_raises():
    with pytest.raises(UnsupportedOwnerTypeError):
        category_of("promoter")


def test_only_individuals_are_injurable():
    assert can_be_injured(Category.INDIVIDUAL)
    assert not can_be_injured(Category.TEAM)
    assert set(injurable_owner_types()) == {OwnerType.WRESTLER, OwnerType.MANAGER, OwnerType.REFEREE}
    assert set(owner_types_in(Category.TEAM)) == {OwnerType.TAG_TEAM, OwnerType.TITLE, OwnerType.STABLE}


def test_strategy_selection():
    assert suspension_strategy_for(Category.INDIVIDUAL) is StrategyId.INDIVIDUAL_SUSPENSION
    assert suspension_strategy_for(Category.TEAM) is StrategyId.TEAM_SUSPENSION
    assert retirement_strategy_for(Category.INDIVIDUAL) is StrategyId.INDIVIDUAL_RETIREMENT
    assert retirement_strategy_for(Category.TEAM) is StrategyId.TEAM_RETIREMENT


def test_registry_contents():
    assert set(tracks_for(OwnerType.TAG_TEAM)) == {
        TrackKind.EMPLOYMENT, TrackKind.SUSPENSION, TrackKind.RETIREMENT
    }
    assert service_track_for(OwnerType.TITLE) is TrackKind.ACTIVITY
    assert service_track_for(OwnerType.REFEREE) is TrackKind.EMPLOYMENT
    assert track_config(OwnerType.STABLE, TrackKind.ACTIVITY).table == "stables_activations"


def test_unregistered_track_raises():
    with pytest.raises(UnsupportedOperationError):
        track_config(OwnerType.TITLE, TrackKind.INJURY)


def test_shipped_registry_is_valid():
    validate_registry()


def test_registry_missing_owner_type_fails():
    registry = dict(TRACK_REGISTRY)
    del registry[OwnerType.MANAGER]
    with pytest.raises(RegistryError):
        validate_registry(registry)


def test_registry_injury_on_team_fails():
    registry = dict(TRACK_REGISTRY)
    stable = dict(registry[OwnerType.STABLE])
    stable[TrackKind.INJURY] = replace(stable[TrackKind.ACTIVITY], kind=TrackKind.INJURY)
    registry[OwnerType.STABLE] = stable
    with pytest.raises(RegistryError):
        validate_registry(registry)


def test_registry_two_service_tracks_fails():
    registry = dict(TRACK_REGISTRY)
    title = dict(registry[OwnerType.TITLE])
    title[TrackKind.EMPLOYMENT] = replace(title[TrackKind.ACTIVITY], kind=TrackKind.EMPLOYMENT)
    registry[OwnerType.TITLE] = title
    with pytest.raises(RegistryError):
        validate_registry(registry)
