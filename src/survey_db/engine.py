"""Async SQLAlchemy engine and session-factory builders.

Nothing here is cached at module level.  The server lifespan builds one
engine per process, keeps it on ``app.state`` and disposes it on shutdown;
CLI tools build their own short-lived engine the same way.
"""

import os

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from survey_db.config import get_async_url

# Connection pool tuning — overridable via PG_POOL_SIZE / PG_MAX_OVERFLOW
_POOL_SIZE = int(os.getenv("PG_POOL_SIZE", "5"))
_MAX_OVERFLOW = int(os.getenv("PG_MAX_OVERFLOW", "10"))


def build_engine(url: str | None = None) -> AsyncEngine:
    """Create a pooled async engine for ``url`` (default: from environment)."""
    return create_async_engine(
        url or get_async_url(),
        echo=False,
        pool_size=_POOL_SIZE,
        max_overflow=_MAX_OVERFLOW,
    )


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Return a session factory bound to ``engine``."""
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )
