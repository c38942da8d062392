"""
ringside.cli
============

Command‑line access to the configured period store.

Examples
--------
$ python -m ringside.cli status wrestler W1
$ python -m ringside.cli transition employ wrestler W1 --at 2024-01-01
$ python -m ringside.cli transition injure tag_team T1      # exit code 1
"""

from __future__ import annotations

import argparse
import logging
import sys
from datetime import datetime
from typing import Optional, Sequence

from .actions import RosterActions
from .db import create_all
from .eligibility import activation_status, employment_status, is_bookable, roster_status
from .errors import RingsideError, TransitionRejected
from .models import Operation, OwnerType, TrackKind
from .roster import RosterMember
from .settings import configure_logging
from .store_db import DBPeriodStore

logger = logging.getLogger(__name__)


def _fmt(moment: Optional[datetime]) -> str:
    return moment.isoformat(sep=" ") if moment else "-"


def show_status(member: RosterMember) -> None:
    """Print derived statuses and one line of facts per track."""
    print(f"{member}")
    if member.has_track(TrackKind.EMPLOYMENT):
        print(f"  employment status : {employment_status(member).value}")
        print(f"  roster status     : {roster_status(member).value}")
    if member.has_track(TrackKind.ACTIVITY):
        print(f"  activation status : {activation_status(member).value}")
    print(f"  bookable          : {is_bookable(member)}")
    for kind, track in member.tracks.items():
        fact = track.fact()
        current = _fmt(fact.current.started_at) if fact.current else "-"
        future = _fmt(fact.future.started_at) if fact.future else "-"
        past = _fmt(fact.most_recent_past.ended_at) if fact.most_recent_past else "-"
        print(f"  {kind.value:<11} current since {current} | scheduled {future} | last ended {past}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="python -m ringside.cli",
                                     description="Ringside roster status tools")
    sub = parser.add_subparsers(dest="command", required=True)

    status = sub.add_parser("status", help="show derived statuses for one member")
    status.add_argument("owner_type", choices=[t.value for t in OwnerType])
    status.add_argument("owner_id")

    transition = sub.add_parser("transition", help="validate and apply one transition")
    transition.add_argument("operation", choices=[o.value for o in Operation])
    transition.add_argument("owner_type", choices=[t.value for t in OwnerType])
    transition.add_argument("owner_id")
    transition.add_argument("--at", type=datetime.fromisoformat, default=None,
                            help="ISO‑8601 moment of the transition (default: now)")

    parser.add_argument("--log-level", default=None, help="override RINGSIDE_LOG_LEVEL")
    return parser


def main(argv: Optional[Sequence[str]] = None, store: Optional[DBPeriodStore] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level)

    if store is None:
        create_all()
        store = DBPeriodStore()

    with store:
        member = RosterMember(args.owner_id, args.owner_type, store)
        if args.command == "status":
            show_status(member)
            return 0

        try:
            period = RosterActions(store).run(Operation(args.operation), member, args.at)
        except TransitionRejected as exc:
            print(str(exc), file=sys.stderr)
            return 1
        except RingsideError as exc:
            logger.error(f"{args.operation} failed for {member!r}: {exc}")
            print(str(exc), file=sys.stderr)
            return 1
        print(f"{args.operation}: {member} -> period {period.id} "
              f"[{_fmt(period.started_at)} .. {_fmt(period.ended_at)}]")
        return 0


if __name__ == "__main__":
    sys.exit(main())
