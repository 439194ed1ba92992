"""Shared fixtures.

The database URL must be set before any ``cinexplorer`` module is imported,
because settings and the engine are created at import time.
"""

import asyncio
import os
import tempfile

_TEST_DB_DIR = tempfile.mkdtemp(prefix="cinexplorer-tests-")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{os.path.join(_TEST_DB_DIR, 'test.db')}"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from cinexplorer.database import SessionLocal, engine  # noqa: E402
from cinexplorer.main import app  # noqa: E402
from cinexplorer.models import Base  # noqa: E402
from cinexplorer.services.seat_ledger import SeatLedger  # noqa: E402
from tests.utils import ADMIN_EMAIL, ADMIN_PASSWORD, create_admin  # noqa: E402


async def recreate_schema():
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)


@pytest.fixture
def client():
    asyncio.run(recreate_schema())
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def admin_headers(client):
    asyncio.run(create_admin(ADMIN_EMAIL, ADMIN_PASSWORD))
    response = client.post("/auth/login", json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD})
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['token']}"}


@pytest_asyncio.fixture
async def db():
    await recreate_schema()
    async with SessionLocal() as session:
        yield session


@pytest.fixture
def ledger():
    return SeatLedger()
