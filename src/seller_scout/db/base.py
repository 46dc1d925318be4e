"""Database connection and session management."""

from collections.abc import AsyncGenerator

from sqlalchemy import event
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from seller_scout.config import get_settings


class Base(DeclarativeBase):
    """SQLAlchemy declarative base."""

    pass


def is_sqlite(database_url: str) -> bool:
    """True when the URL points at a SQLite database, whatever the driver."""
    return make_url(database_url).get_backend_name() == "sqlite"


def set_sqlite_pragma(dbapi_connection, connection_record):
    """Enable WAL mode and a lock wait for each new SQLite connection."""
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA journal_mode=WAL")
    cursor.execute("PRAGMA busy_timeout=30000")
    cursor.close()


def build_engine(database_url: str, echo: bool = False) -> AsyncEngine:
    """Create the async engine, with concurrency settings for SQLite."""
    sqlite = is_sqlite(database_url)

    connect_args = {}
    if sqlite:
        connect_args = {
            "timeout": 30,  # Wait up to 30 seconds for lock
            "check_same_thread": False,
        }

    engine = create_async_engine(
        database_url,
        echo=echo,
        pool_pre_ping=True,
        connect_args=connect_args,
    )
    if sqlite:
        event.listen(engine.sync_engine, "connect", set_sqlite_pragma)
    return engine


settings = get_settings()
engine = build_engine(settings.database_url, echo=settings.debug)

async_session_maker = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Dependency for getting async database sessions."""
    async with async_session_maker() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
