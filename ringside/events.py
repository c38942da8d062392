"""
ringside.events
===============

Domain events published after a transition has been committed.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, List, Optional

from .models import Operation, OwnerType, Period

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StatusChanged:
    """One successful transition of one roster member."""
    owner_id: str
    owner_type: OwnerType
    operation: Operation
    occurred_at: datetime
    period: Optional[Period] = None


Listener = Callable[[StatusChanged], None]


class EventDispatcher:
    """
    Minimal in‑process listener registry.

    Example
    -------
    >>> seen = []
    >>> bus = EventDispatcher()
    >>> bus.subscribe(seen.append)
    >>> bus.publish(StatusChanged("W1", OwnerType.WRESTLER, Operation.EMPLOY, datetime(2024, 1, 1)))
    >>> len(seen)
    1
    """

    def __init__(self) -> None:
        self._listeners: List[Listener] = []

    def subscribe(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def unsubscribe(self, listener: Listener) -> None:
        self._listeners.remove(listener)

    def publish(self, event: StatusChanged) -> None:
        for listener in list(self._listeners):
            try:
                listener(event)
            except Exception:
                logger.exception(f"Listener {listener!r} failed on {event.operation} for {event.owner_id!r}")
                raise

    def __len__(self) -> int:
        return len(self._listeners)
