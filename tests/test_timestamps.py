"""Timestamps are stamped by the session on flush, never by callers."""

from __future__ import annotations

import asyncio
from datetime import datetime

import pytest
from sqlalchemy.exc import IntegrityError

from app.infrastructure.persistence.timestamps import (
    ChangeState,
    collect_pending_changes,
    stamp_pending_changes,
)
from app.models import CurrentTimestamps, Note


class _Plain:
    """Entity without the timestamp capability."""

    created_at = None
    changed_at = None


class _Stamped(CurrentTimestamps):
    def __init__(self) -> None:
        self.created_at = None
        self.changed_at = None


def test_stamp_sets_created_and_changed_with_one_instant():
    inserted, modified = _Stamped(), _Stamped()
    now = datetime(2024, 5, 1, 12, 0, 0)

    stamped = stamp_pending_changes(
        [(ChangeState.INSERTED, inserted), (ChangeState.MODIFIED, modified)],
        now=now,
    )

    assert stamped == {ChangeState.INSERTED: 1, ChangeState.MODIFIED: 1}
    assert inserted.created_at == now
    assert inserted.changed_at is None
    assert modified.changed_at == now
    assert modified.created_at is None


def test_stamp_ignores_deleted_unchanged_and_plain_entities():
    deleted, unchanged, plain = _Stamped(), _Stamped(), _Plain()

    stamped = stamp_pending_changes(
        [
            (ChangeState.DELETED, deleted),
            (ChangeState.UNCHANGED, unchanged),
            (ChangeState.INSERTED, plain),
        ]
    )

    assert stamped == {ChangeState.INSERTED: 0, ChangeState.MODIFIED: 0}
    for entity in (deleted, unchanged, plain):
        assert entity.created_at is None
        assert entity.changed_at is None


def test_stamp_captures_current_time_once_per_call():
    entities = [_Stamped() for _ in range(5)]

    stamp_pending_changes([(ChangeState.INSERTED, entity) for entity in entities])

    assert entities[0].created_at is not None
    assert len({entity.created_at for entity in entities}) == 1


@pytest.mark.asyncio
async def test_insert_sets_created_at_only(session):
    note = Note("Note A")
    session.add(note)
    await session.commit()

    assert note.created_at is not None
    assert note.changed_at is None


@pytest.mark.asyncio
async def test_caller_supplied_timestamps_are_overwritten(session):
    note = Note("Note A")
    note.created_at = datetime(2000, 1, 1)
    session.add(note)
    await session.commit()

    assert note.created_at > datetime(2000, 1, 1)

    note.update_message("Note A - modified")
    note.changed_at = datetime(2000, 1, 2)
    await session.commit()

    assert note.changed_at >= note.created_at
    assert note.changed_at > datetime(2000, 1, 2)


@pytest.mark.asyncio
async def test_updates_set_changed_at_and_keep_created_at(session):
    note = Note("Note A")
    session.add(note)
    await session.commit()
    created_at = note.created_at

    previous_changed_at = None
    for revision in range(3):
        await asyncio.sleep(0.001)
        note.update_message(f"Note A - revision {revision}")
        await session.commit()

        assert note.created_at == created_at
        assert note.changed_at is not None
        assert note.changed_at >= note.created_at
        if previous_changed_at is not None:
            assert note.changed_at >= previous_changed_at
        previous_changed_at = note.changed_at


@pytest.mark.asyncio
async def test_batch_save_shares_one_stamp_per_kind(session):
    existing = [Note(f"existing {index}") for index in range(3)]
    session.add_all(existing)
    await session.commit()

    await asyncio.sleep(0.001)
    fresh = [Note(f"fresh {index}") for index in range(4)]
    session.add_all(fresh)
    for note in existing:
        note.update_message(f"{note.message} - modified")
    await session.commit()

    assert len({note.created_at for note in fresh}) == 1
    assert len({note.changed_at for note in existing}) == 1
    assert fresh[0].created_at == existing[0].changed_at


@pytest.mark.asyncio
async def test_unchanged_assignment_is_not_stamped(session):
    note = Note("Note A")
    session.add(note)
    await session.commit()

    note.update_message("Note A")
    assert collect_pending_changes(session.sync_session) == [
        (ChangeState.UNCHANGED, note)
    ]
    await session.commit()

    assert note.changed_at is None


@pytest.mark.asyncio
async def test_delete_then_save_does_not_stamp(session):
    note = Note("Note A")
    session.add(note)
    await session.commit()
    created_at = note.created_at

    note.update_message("Note A - about to go")
    await session.delete(note)
    assert collect_pending_changes(session.sync_session) == [
        (ChangeState.DELETED, note)
    ]
    await session.commit()

    assert note.created_at == created_at
    assert note.changed_at is None


@pytest.mark.asyncio
async def test_failed_commit_keeps_stamps_on_inserted_note(session, take_note_id):
    pending = Note("Note A")
    await take_note_id(pending.id)
    session.add(pending)

    with pytest.raises(IntegrityError):
        await session.commit()
    await session.rollback()

    assert pending.created_at is not None
    assert pending.changed_at is None
