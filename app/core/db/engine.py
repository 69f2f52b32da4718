from typing import AsyncGenerator
from app.core.config import config as settings
from app.core.db.base import Base
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool


def enable_sqlite_foreign_keys(async_engine: AsyncEngine) -> None:
    """SQLite ignores FOREIGN KEY constraints unless every connection opts in."""
    if async_engine.dialect.name != "sqlite":
        return

    @event.listens_for(async_engine.sync_engine, "connect")
    def set_sqlite_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


# Async SQLAlchemy engine
engine = create_async_engine(
    settings.db_url,
    echo=settings.db_echo,
    poolclass=(
        NullPool if not (settings.is_production) else None
    ),  # Disable pooling in debug
    future=True,  # Use SQLAlchemy 2.0 features
)
enable_sqlite_foreign_keys(engine)

# Session factory
AsyncSessionLocal = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,  # Manual control over flushing
)


async def get_db_util() -> AsyncGenerator[AsyncSession, None]:
    """
    Database dependency for FastAPI.
    One session per request, committed on success and rolled back on error.
    """
    async with AsyncSessionLocal() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


async def init_models() -> None:
    """Create missing tables for local runs; production schemas come from alembic."""
    # Register the mapped classes on Base.metadata
    from app.modules.categories.models import Category  # noqa: F401
    from app.modules.expenses.models import Expense  # noqa: F401

    async with engine.begin() as connection:
        await connection.run_sync(Base.metadata.create_all)
