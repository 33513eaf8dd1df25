import os
from typing import AsyncGenerator

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

os.environ.setdefault("DATABASE_URL", TEST_DATABASE_URL)

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from school_admin.api.dependencies import get_connection
from school_admin.core.enums import ConnectionState
from school_admin.db.connection import ConnectionManager
from school_admin.db.session import Base, get_db
from school_admin.main import app
import school_admin.core.models  # noqa: F401


@pytest.fixture()
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """Fresh in-memory SQLite database with every table created."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture()
def connection(engine: AsyncEngine) -> ConnectionManager:
    """Connection manager that reports the store as connected."""
    manager = ConnectionManager(engine, max_retries=1, retry_backoff=0, reconnect_interval=0.01)
    manager.state = ConnectionState.READY
    return manager


@pytest.fixture()
async def db_session(engine: AsyncEngine, connection: ConnectionManager) -> AsyncGenerator[AsyncSession, None]:
    """Provide a database session for a test and override FastAPI dependencies."""
    async_session = async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with async_session() as session:

        async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
            yield session

        app.dependency_overrides[get_db] = override_get_db
        app.dependency_overrides[get_connection] = lambda: connection
        yield session

    app.dependency_overrides.clear()


@pytest.fixture()
async def client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Async HTTP client bound to the FastAPI app."""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


def learner_payload(**overrides) -> dict:
    payload = {
        "fullName": "Amani Wanjiru",
        "gender": "Female",
        "dob": "2016-04-09",
        "grade": "Grade 3",
        "assessmentNumber": "A1234",
        "parentName": "Grace Wanjiru",
        "parentPhone": "+254700000001",
        "parentEmail": "grace@example.com",
    }
    payload.update(overrides)
    return payload


@pytest.fixture()
def make_learner(client: AsyncClient):
    """Create a learner through the API and return the response body."""

    async def _make(**overrides) -> dict:
        response = await client.post("/learners", json=learner_payload(**overrides))
        assert response.status_code == 200, response.text
        return response.json()

    return _make
