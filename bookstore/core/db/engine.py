"""
Async engine and session factory for the dashboard's read-only queries.

The dashboard fans each request out into many short aggregations, one session
apiece, so SQLite connections are not pooled and readers wait on busy locks.
"""

from sqlalchemy import event, text
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool, StaticPool

from bookstore.core.config import config as settings

SQLITE_PRAGMAS = (
    "PRAGMA journal_mode=WAL",
    "PRAGMA busy_timeout=30000",
    "PRAGMA foreign_keys=ON",
)


def _get_engine_options(database_url: str) -> dict:
    """Engine keyword arguments for the configured database."""
    options = {"echo": False}

    if database_url.startswith("sqlite"):
        if ":memory:" in database_url:
            # one shared connection, or every session sees an empty database
            options["poolclass"] = StaticPool
            options["connect_args"] = {"check_same_thread": False}
        else:
            options["poolclass"] = NullPool
    elif not settings.is_production:
        options["poolclass"] = NullPool

    return options


def _apply_sqlite_pragmas(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    for pragma in SQLITE_PRAGMAS:
        cursor.execute(pragma)
    cursor.close()


database_url = settings.database_url

engine = create_async_engine(database_url, **_get_engine_options(database_url))

if database_url.startswith("sqlite"):
    event.listen(engine.sync_engine, "connect", _apply_sqlite_pragmas)

AsyncSessionLocal = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
)


async def check_database_connection(
    session_factory: async_sessionmaker[AsyncSession] = AsyncSessionLocal,
) -> bool:
    """True when a trivial query succeeds. Used by /health."""
    try:
        async with session_factory() as session:
            result = await session.execute(text("SELECT 1"))
            return result.scalar() == 1
    except Exception:
        return False
