"""
Ringside
========

Temporal status tracking and transition validation for a wrestling
roster: wrestlers, managers, referees, tag teams, titles and stables.

Import structure
----------------
`import ringside` is intentionally cheap: nothing is imported by default.
The SQLModel layer is only loaded when you explicitly access
:pymod:`ringside.db` or :pymod:`ringside.store_db`.

Sub‑modules
~~~~~~~~~~~
- :pymod:`ringside.models`       – ``Period`` dataclass + owner/track/operation enums
- :pymod:`ringside.errors`       – ``ReasonCode`` and the exception hierarchy
- :pymod:`ringside.store`        – ``PeriodStore`` protocol + ``InMemoryPeriodStore``
- :pymod:`ringside.tracks`       – ``StatusTrack`` temporal queries, ``open`` / ``close``
- :pymod:`ringside.category`     – owner type → category, strategies, track registry
- :pymod:`ringside.roster`       – ``RosterMember`` composed from its tracks
- :pymod:`ringside.strategies`   – suspension / retirement rule sets per category
- :pymod:`ringside.lifecycle`    – transition validators (`check`, `ensure`, `can`)
- :pymod:`ringside.eligibility`  – bookability and derived statuses
- :pymod:`ringside.actions`      – ``RosterActions``: validate, write, publish
- :pymod:`ringside.events`       – ``StatusChanged`` + ``EventDispatcher``
- :pymod:`ringside.db`           – SQLModel engine and ``status_periods`` table
- :pymod:`ringside.store_db`     – ``DBPeriodStore``
- :pymod:`ringside.cli`          – ``python -m ringside.cli``

Quick start
-----------
>>> from datetime import datetime
>>> from ringside.store import InMemoryPeriodStore
>>> from ringside.roster import RosterMember
>>> from ringside.actions import RosterActions
>>> store = InMemoryPeriodStore()
>>> w = RosterMember("W1", "wrestler", store, clock=lambda: datetime(2024, 6, 1))
>>> _ = RosterActions(store).employ(w, datetime(2024, 1, 1))
>>> from ringside.eligibility import is_bookable
>>> is_bookable(w)
True

"""

__all__ = [
    "models",
    "errors",
    "store",
    "tracks",
    "category",
    "roster",
    "strategies",
    "lifecycle",
    "eligibility",
    "actions",
    "events",
    "db",
    "store_db",
    "cli",
]

__version__ = "0.1.0"
