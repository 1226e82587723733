"""Database configuration and session management for the MVC layout."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import NullPool

from app.config.settings import settings
from app.infrastructure.persistence.timestamps import TimestampingSession

# Import models so they are attached to Base.metadata before table creation
from app.models import Base, Note

logger = logging.getLogger(__name__)

SAMPLE_NOTE_TO_MODIFY = "Sample note A"
SAMPLE_NOTES = (SAMPLE_NOTE_TO_MODIFY, "Sample note B", "Sample note C")


def _create_engine() -> AsyncEngine:
    """Create an async engine with environment-appropriate pooling."""

    engine_options: dict[str, Any] = {
        "echo": settings.debug,
        "future": True,
        "pool_pre_ping": True,
    }

    if settings.database.serverless or settings.debug:
        # Disable pooling when working with serverless databases (or in debug).
        engine_options["poolclass"] = NullPool

    return create_async_engine(settings.database.url, **engine_options)


def create_session_factory(bind: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Return a session factory whose sessions stamp timestamped entities on flush."""

    return async_sessionmaker(
        bind,
        expire_on_commit=False,
        class_=AsyncSession,
        sync_session_class=TimestampingSession,
    )


engine: AsyncEngine = _create_engine()

SessionFactory = create_session_factory(engine)


@asynccontextmanager
async def session_scope() -> AsyncIterator[AsyncSession]:
    """Async context manager that yields a configured SQLAlchemy session."""

    async with SessionFactory() as session:
        yield session


async def get_session() -> AsyncIterator[AsyncSession]:
    """FastAPI dependency-compatible generator yielding a configured session."""

    async with session_scope() as session:
        yield session


async def init_models(bind: AsyncEngine | None = None) -> None:
    """Create database tables if they do not exist."""

    async with (bind or engine).begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    logger.info("Ensured database tables in default schema.")


async def seed_sample_data(session: AsyncSession) -> None:
    """Insert the sample notes once, then modify the first of them."""

    note_count = await session.scalar(select(func.count()).select_from(Note))
    if not note_count:
        session.add_all([Note(message) for message in SAMPLE_NOTES])
        await session.commit()
        logger.info("Inserted %d sample notes.", len(SAMPLE_NOTES))

    result = await session.execute(
        select(Note).where(Note.message == SAMPLE_NOTE_TO_MODIFY).limit(1)
    )
    note = result.scalar_one_or_none()
    if note is None:
        return

    note.update_message(f"{SAMPLE_NOTE_TO_MODIFY} -- modified")
    await session.commit()
    logger.info("Modified sample note %s.", note.id)


async def dispose_engine() -> None:
    """Dispose of the engine and release pooled connections."""

    await engine.dispose()
