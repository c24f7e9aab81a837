"""Database session management."""

import ssl
from collections.abc import AsyncGenerator

from sqlalchemy import event
from sqlalchemy.engine import Engine
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from studyhub.config import get_settings

settings = get_settings()


def build_engine(url: str) -> AsyncEngine:
    """Create the async engine for ``url``.

    SQLite (used for local runs and tests) gets its foreign keys switched on,
    otherwise ON DELETE CASCADE between subjects, chapters, notes and videos
    would be silently ignored.
    """
    if url.startswith("sqlite"):
        engine = create_async_engine(url, echo=settings.debug)
        enable_sqlite_foreign_keys(engine.sync_engine)
        return engine

    connect_args = {}
    if settings.database_requires_ssl:
        connect_args["ssl"] = ssl.create_default_context()

    return create_async_engine(
        url,
        echo=settings.debug,
        pool_pre_ping=True,
        pool_size=5,
        max_overflow=10,
        connect_args=connect_args,
    )


def enable_sqlite_foreign_keys(sync_engine: Engine) -> None:
    """Turn on FK enforcement for every new SQLite connection."""

    @event.listens_for(sync_engine, "connect")
    def _set_sqlite_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


# Create async engine
engine = build_engine(settings.database_url)

# Session factory
AsyncSessionLocal = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency for database sessions."""
    async with AsyncSessionLocal() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
