from contextlib import asynccontextmanager

from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import StaticPool

from config import Settings, settings


def _get_engine_kwargs(config: Settings):
    """Return dialect-specific engine options for SQLite vs PostgreSQL."""
    kwargs = {"echo": config.debug}
    if config.is_memory_sqlite:
        # Every session must reach the same in-memory database, so they share one connection
        kwargs["poolclass"] = StaticPool
        kwargs["connect_args"] = {"check_same_thread": False}
    elif config.is_postgresql:
        kwargs["pool_pre_ping"] = True
    return kwargs


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def build_engine(config: Settings) -> AsyncEngine:
    """Create the async engine; file-backed SQLite gets a pooled connection per session."""
    new_engine = create_async_engine(config.database_url, **_get_engine_kwargs(config))
    if config.is_sqlite:
        event.listen(new_engine.sync_engine, "connect", _enable_sqlite_foreign_keys)
    return new_engine


engine = build_engine(settings)

AsyncSessionLocal = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
)


class Base(DeclarativeBase):
    pass


async def get_db():
    """One session per request. Services commit their own writes; anything left over is rolled back on error."""
    async with AsyncSessionLocal() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


@asynccontextmanager
async def session_scope():
    """Standalone session for startup hooks and scripts."""
    async with AsyncSessionLocal() as session:
        yield session


async def init_db():
    """Create all tables that do not exist yet."""
    import models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
