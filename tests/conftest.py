"""Shared fixtures: a throw-away SQLite database for every test."""

from __future__ import annotations

import asyncio
import os
import sys
import tempfile
from pathlib import Path
from typing import AsyncIterator, Iterator

import pytest
import pytest_asyncio

ROOT = Path(__file__).resolve().parents[1]
_WORKDIR = Path(tempfile.mkdtemp(prefix="current-timestamps-tests-"))

# Settings are read once at import time, so the environment must be ready first.
os.environ["DB_DSN"] = f"sqlite+aiosqlite:///{_WORKDIR / 'app.db'}"
os.environ["DB_SERVERLESS"] = "true"
os.environ["SEED_SAMPLE_DATA"] = "false"
os.environ["LOG_FILE"] = str(_WORKDIR / "logs" / "app.log")
sys.path.insert(0, str(ROOT))

from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import insert  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import NullPool  # noqa: E402

from app import database  # noqa: E402
from app.main import app  # noqa: E402
from app.models import Base, Note, utc_now  # noqa: E402


async def _reset_tables(engine: AsyncEngine) -> None:
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)


@pytest_asyncio.fixture
async def engine(tmp_path: Path) -> AsyncIterator[AsyncEngine]:
    """Async engine bound to a fresh SQLite file."""

    test_engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'notes.db'}",
        poolclass=NullPool,
    )
    await database.init_models(test_engine)
    yield test_engine
    await test_engine.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return database.create_session_factory(engine)


@pytest_asyncio.fixture
async def session(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncIterator[AsyncSession]:
    async with session_factory() as db_session:
        yield db_session


@pytest.fixture
def client() -> Iterator[TestClient]:
    """HTTP client against the application with empty tables."""

    asyncio.run(_reset_tables(database.engine))
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def take_note_id(session_factory):
    """Write a row straight to the table so a later insert of ``note_id`` collides."""

    async def _take(note_id) -> None:
        async with session_factory() as session:
            await session.execute(
                insert(Note.__table__).values(
                    id=note_id,
                    message="taken",
                    created_at=utc_now(),
                )
            )
            await session.commit()

    return _take
