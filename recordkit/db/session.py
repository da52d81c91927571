"""Async Session Factory - raw async sessions outside DatabaseSessionManager.

Invariants:
    - Sessions never expire attributes on commit
    - Accepts a URL (new engine) or an existing engine (shared pool)

Design Decisions:
    - DatabaseSessionManager builds its factory here, so scripts and test
      fixtures get sessions configured exactly like the storage's own
"""

from sqlalchemy.ext.asyncio import (
    AsyncEngine, AsyncSession, create_async_engine, async_sessionmaker,
)


def create_session_factory(
    database_url: str | AsyncEngine,
) -> async_sessionmaker[AsyncSession]:
    """Create an async session factory for the given database URL or engine."""
    engine = (
        database_url if isinstance(database_url, AsyncEngine)
        else create_async_engine(database_url, echo=False)
    )
    return async_sessionmaker(
        engine, class_=AsyncSession, expire_on_commit=False,
    )
