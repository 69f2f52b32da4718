"""Shared fixtures: an in-memory SQLite store wired into the FastAPI app."""
import os

os.environ.setdefault("DB_URL", "sqlite+aiosqlite://")
os.environ.setdefault("CREATE_TABLES_ON_STARTUP", "false")

from typing import List

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from app.core.db.base import Base
from app.core.db.engine import enable_sqlite_foreign_keys
from app.core.dependencies import get_db
from app.main import app
from app.modules.categories.models import Category
from app.modules.expenses.models import Expense  # noqa: F401


@pytest_asyncio.fixture
async def engine():
    test_engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(test_engine)
    async with test_engine.begin() as connection:
        await connection.run_sync(Base.metadata.create_all)
    yield test_engine
    await test_engine.dispose()


@pytest.fixture
def executed_sql(engine) -> List[str]:
    """Every SQL statement sent to the store after the schema was created."""
    statements: List[str] = []

    def record(conn, cursor, statement, parameters, context, executemany):
        statements.append(statement)

    event.listen(engine.sync_engine, "before_cursor_execute", record)
    yield statements
    event.remove(engine.sync_engine, "before_cursor_execute", record)


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


@pytest_asyncio.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def client(session_factory):
    async def override_get_db():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def base_path() -> str:
    return "/api/expense-tracker"


@pytest.fixture
def seeded_category_ids() -> List[int]:
    return [1, 3, 7]


@pytest_asyncio.fixture
async def seeded_categories(session_factory, seeded_category_ids):
    """Categories that expense tests reference by id."""
    async with session_factory() as session:
        session.add_all(
            Category(category_id=category_id, name=f"Category {category_id}")
            for category_id in seeded_category_ids
        )
        await session.commit()
    return seeded_category_ids
