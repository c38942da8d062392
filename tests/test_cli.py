"""
tests/test_cli.py
=================

Tests for ``python -m ringside.cli`` run against an in‑memory SQLite store.
"""

from sqlmodel import Session

from ringside.cli import main
from ringside.db import create_all, make_engine
from ringside.store_db import DBPeriodStore


def _store(engine):
    return DBPeriodStore(Session(engine))


def _engine():
    engine = make_engine("sqlite://", echo=False)
    create_all(engine)
    return engine


def test_transition_then_status(capsys):
    engine = _engine()
    rc = main(["transition", "employ", "wrestler", "W1", "--at", "2024-01-01"], store=_store(engine))
    assert rc == 0

    rc = main(["status", "wrestler", "W1"], store=_store(engine))
    out = capsys.readouterr().out
    assert rc == 0
    assert "roster status     : bookable" in out


def test_rejected_transition_exits_1(capsys):
    rc = main(["transition", "injure", "tag_team", "TT1"], store=_store(_engine()))
    assert rc == 1
    assert "cannot be injured" in capsys.readouterr().err


def test_unsupported_operation_for_owner_exits_1(capsys):
    rc = main(["transition", "employ", "title", "T1"], store=_store(_engine()))
    assert rc == 1
    assert "no employment track" in capsys.readouterr().err
