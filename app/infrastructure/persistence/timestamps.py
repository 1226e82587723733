"""Flush-time stamping of ``created_at`` / ``changed_at`` columns.

``TimestampingSession`` is the synchronous session class behind every
``AsyncSession`` handed out by :mod:`app.database`. Before each flush it sorts
the pending objects by change state and stamps the ones that carry the
:class:`~app.models.base.CurrentTimestamps` mixin, all with the same instant.
"""

from __future__ import annotations

import logging
from datetime import datetime
from enum import Enum
from typing import Any, Iterable, Optional

from sqlalchemy import event
from sqlalchemy.orm import Session

from app.models.base import CurrentTimestamps, utc_now
from app.telemetry import observe_stamped

logger = logging.getLogger(__name__)


class ChangeState(str, Enum):
    INSERTED = "inserted"
    MODIFIED = "modified"
    DELETED = "deleted"
    UNCHANGED = "unchanged"


def collect_pending_changes(session: Session) -> list[tuple[ChangeState, Any]]:
    """Return every pending object of ``session`` tagged with its change state."""

    changes: list[tuple[ChangeState, Any]] = [
        (ChangeState.INSERTED, instance) for instance in session.new
    ]

    # ``dirty`` also lists objects whose attributes were set to the same value.
    for instance in session.dirty:
        if session.is_modified(instance, include_collections=False):
            changes.append((ChangeState.MODIFIED, instance))
        else:
            changes.append((ChangeState.UNCHANGED, instance))

    changes.extend((ChangeState.DELETED, instance) for instance in session.deleted)
    return changes


def stamp_pending_changes(
    changes: Iterable[tuple[ChangeState, Any]],
    now: Optional[datetime] = None,
) -> dict[ChangeState, int]:
    """Stamp inserted and modified timestamped entities with a single instant.

    Returns the number of entities stamped per change state.
    """

    stamp = now if now is not None else utc_now()
    stamped = {ChangeState.INSERTED: 0, ChangeState.MODIFIED: 0}

    for state, instance in changes:
        if not isinstance(instance, CurrentTimestamps):
            continue

        if state is ChangeState.INSERTED:
            instance.mark_created(stamp)
            stamped[state] += 1
        elif state is ChangeState.MODIFIED:
            instance.mark_changed(stamp)
            stamped[state] += 1

    return stamped


class TimestampingSession(Session):
    """ORM session that stamps timestamped entities before every flush."""


@event.listens_for(TimestampingSession, "before_flush")
def _stamp_before_flush(session: Session, _flush_context: Any, _instances: Any) -> None:
    stamped = stamp_pending_changes(collect_pending_changes(session))

    for state, count in stamped.items():
        observe_stamped(state.value, count)

    if any(stamped.values()):
        logger.debug(
            "Stamped %d inserted and %d modified entities",
            stamped[ChangeState.INSERTED],
            stamped[ChangeState.MODIFIED],
        )


__all__ = [
    "ChangeState",
    "TimestampingSession",
    "collect_pending_changes",
    "stamp_pending_changes",
]
