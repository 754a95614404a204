"""
Pytest Fixtures for Expense Tracker Tests
"""
import os
from typing import AsyncGenerator

# Set test environment before the application module reads its settings
os.environ["ENVIRONMENT"] = "testing"
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("LOG_LEVEL", "WARNING")

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from src.api.main import app
from src.api.database import Database, get_db


TEST_DATABASE_URL = "sqlite+aiosqlite://"


# =============================================================================
# Database Fixtures
# =============================================================================

@pytest_asyncio.fixture
async def database() -> AsyncGenerator[Database, None]:
    """Fresh in-memory database for each test"""
    db = Database(TEST_DATABASE_URL)
    await db.init()
    yield db
    await db.close()


@pytest_asyncio.fixture
async def client(database: Database) -> AsyncGenerator[AsyncClient, None]:
    """Create async HTTP client for API tests"""

    async def override_get_db():
        async with database.session() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


# =============================================================================
# Sample Data Fixtures
# =============================================================================

@pytest.fixture
def sample_user_data():
    """Sample user data"""
    return {
        "name": "Test User",
        "email": "test@example.com",
        "monthlyBudget": 5000
    }


@pytest.fixture
def sample_expense_data():
    """Sample expense data without the owner"""
    return {
        "title": "Groceries",
        "amount": 250.75,
        "category": "Food"
    }


@pytest_asyncio.fixture
async def user(client: AsyncClient, sample_user_data) -> dict:
    """A persisted user as returned by the API"""
    response = await client.post("/api/users", json=sample_user_data)
    assert response.status_code == 201
    return response.json()["data"]


@pytest_asyncio.fixture
async def expense(client: AsyncClient, user: dict, sample_expense_data) -> dict:
    """A persisted expense owned by ``user``"""
    response = await client.post(
        "/api/expenses",
        json={**sample_expense_data, "userId": user["id"]}
    )
    assert response.status_code == 201
    return response.json()["data"]


# =============================================================================
# Helper Functions
# =============================================================================

MISSING_ID = "00000000-0000-4000-8000-000000000000"

IST_PATTERN = r"^\d{2}-\d{2}-\d{4} \d{2}:\d{2}:\d{2} IST$"
