#!/usr/bin/env python
"""
Seed database with a sample roster for testing.

This script runs a handful of transitions through RosterActions so the
``status_periods`` table holds employed, injured, suspended, released and
retired members plus an active title and a disbanded stable.
"""

from datetime import datetime

from ringside.actions import RosterActions
from ringside.eligibility import employment_status, activation_status
from ringside.errors import TransitionRejected
from ringside.models import OwnerType, TrackKind
from ringside.roster import RosterMember
from ringside.store_db import DBPeriodStore

# (owner_id, owner_type, [(operation, moment), ...])
SAMPLE_ROSTER = [
    ("W-ace", OwnerType.WRESTLER, [("employ", datetime(2022, 1, 10))]),
    ("W-brick", OwnerType.WRESTLER, [
        ("employ", datetime(2021, 5, 1)),
        ("injure", datetime(2024, 2, 14)),
    ]),
    ("W-cobra", OwnerType.WRESTLER, [
        ("employ", datetime(2023, 3, 3)),
        ("suspend", datetime(2024, 4, 1)),
    ]),
    ("W-drifter", OwnerType.WRESTLER, [
        ("employ", datetime(2019, 8, 8)),
        ("release", datetime(2023, 12, 31)),
    ]),
    ("W-legend", OwnerType.WRESTLER, [
        ("employ", datetime(2005, 6, 1)),
        ("retire", datetime(2020, 4, 5)),
    ]),
    ("M-silver", OwnerType.MANAGER, [("employ", datetime(2022, 9, 1))]),
    ("R-stripes", OwnerType.REFEREE, [("employ", datetime(2018, 2, 2))]),
    ("TT-wrecking", OwnerType.TAG_TEAM, [("employ", datetime(2023, 7, 1))]),
    ("T-world", OwnerType.TITLE, [("debut", datetime(2010, 1, 1))]),
    ("S-faction", OwnerType.STABLE, [
        ("debut", datetime(2021, 10, 1)),
        ("deactivate", datetime(2023, 10, 1)),
    ]),
]


def seed_database():
    """Add the sample roster to the database."""
    with DBPeriodStore() as store:
        actions = RosterActions(store)
        for owner_id, owner_type, steps in SAMPLE_ROSTER:
            member = RosterMember(owner_id, owner_type, store)
            for operation, moment in steps:
                try:
                    actions.run(operation, member, moment)
                except TransitionRejected as exc:
                    print(f"Skipped: {member} {operation} ({exc.reason})")
            if member.has_track(TrackKind.EMPLOYMENT):
                print(f"Added: {member} ({employment_status(member).value})")
            else:
                print(f"Added: {member} ({activation_status(member).value})")

    print(f"\nAdded {len(SAMPLE_ROSTER)} roster members to the database!")


if __name__ == "__main__":
    # Initialize DB if needed
    from ringside.db import create_all
    print("Ensuring database tables exist...")
    create_all()

    # Seed the database
    print("Seeding database with a sample roster...")
    seed_database()

    print("\nDone! Inspect a member with:")
    print("python -m ringside.cli status wrestler W-brick")
