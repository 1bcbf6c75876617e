"""
In-process "workflow changed" signal.

Every mutating workflow call emits one event. Listeners run synchronously in
the emitting request; admin clients that cannot subscribe poll the revision
counter instead. The revision is process-global and starts at 0 on import;
reset() puts it back there and drops all listeners.
"""
from __future__ import annotations

import itertools
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable

logger = logging.getLogger(__name__)

APPLICATION_SUBMITTED = "application_submitted"
EMPLOYEE_ASSIGNED = "employee_assigned"
STATUS_UPDATED = "status_updated"
TASKS_RECONCILED = "tasks_reconciled"


@dataclass(frozen=True)
class WorkflowEvent:
    kind: str
    application_id: int | None
    revision: int
    occurred_at: datetime


Listener = Callable[[WorkflowEvent], None]

_listeners: list[Listener] = []
_counter = itertools.count(1)
_revision = 0


def subscribe(listener: Listener) -> Callable[[], None]:
    """Register a listener; returns a callable that removes it again."""
    _listeners.append(listener)

    def _unsubscribe() -> None:
        if listener in _listeners:
            _listeners.remove(listener)

    return _unsubscribe


def current_revision() -> int:
    return _revision


def emit(kind: str, application_id: int | None = None) -> WorkflowEvent:
    global _revision
    _revision = next(_counter)
    event = WorkflowEvent(
        kind=kind,
        application_id=application_id,
        revision=_revision,
        occurred_at=datetime.now(timezone.utc),
    )
    for listener in list(_listeners):
        try:
            listener(event)
        except Exception:
            logger.exception("Workflow listener %r failed for %s", listener, kind)
    return event


def reset() -> None:
    global _counter, _revision
    _listeners.clear()
    _counter = itertools.count(1)
    _revision = 0
