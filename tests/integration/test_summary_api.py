"""
Integration Tests - Monthly summary
"""
from datetime import datetime, timezone

import pytest
from httpx import AsyncClient

from src.api.formatters import MONTH_NAMES
from src.api.services.summary_service import SummaryService
from src.api.tables import Expense, User
from tests.conftest import MISSING_ID


class TestSummaryAPI:
    """Tests for GET /api/users/:id/summary and /api/summary/:id"""

    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_summary_for_current_month(self, client: AsyncClient):
        created = await client.post("/api/users", json={
            "name": "Budget User", "email": "budget@example.com", "monthlyBudget": 1000
        })
        user = created.json()["data"]
        await client.post("/api/expenses", json={
            "title": "Dinner", "amount": 100, "category": "Food", "userId": user["id"]
        })

        response = await client.get(f"/api/users/{user['id']}/summary")

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["summary"] == {
            "totalExpenses": 100,
            "remainingBudget": 900,
            "numberOfExpenses": 1,
            "budgetUtilization": "10.00%"
        }
        assert data["user"]["monthlyBudget"] == 1000
        assert data["expensesByCategory"] == [{"category": "Food", "total": 100, "count": 1}]
        now = datetime.now(timezone.utc)
        assert data["currentMonth"] == {"month": MONTH_NAMES[now.month], "year": now.year}

    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_summary_alias_path(self, client: AsyncClient, user, expense):
        first = await client.get(f"/api/users/{user['id']}/summary")
        second = await client.get(f"/api/summary/{user['id']}")

        assert second.status_code == 200
        assert second.json() == first.json()

    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_summary_without_expenses(self, client: AsyncClient, user):
        response = await client.get(f"/api/summary/{user['id']}")

        summary = response.json()["data"]["summary"]
        assert summary["totalExpenses"] == 0
        assert summary["remainingBudget"] == user["monthlyBudget"]
        assert summary["numberOfExpenses"] == 0
        assert summary["budgetUtilization"] == "0.00%"
        assert response.json()["data"]["expensesByCategory"] == []

    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_summary_ignores_other_months(self, client: AsyncClient, user):
        await client.post("/api/expenses", json={
            "title": "Old trip", "amount": 999, "category": "Travel",
            "userId": user["id"], "date": "2001-05-05"
        })

        response = await client.get(f"/api/summary/{user['id']}")

        assert response.json()["data"]["summary"]["numberOfExpenses"] == 0

    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_summary_malformed_id(self, client: AsyncClient):
        response = await client.get("/api/summary/not-an-id")

        assert response.status_code == 400

    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_summary_missing_user(self, client: AsyncClient):
        response = await client.get(f"/api/users/{MISSING_ID}/summary")

        assert response.status_code == 404


class TestSummaryService:
    """Month window and aggregation against a fixed clock"""

    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_month_window_and_category_order(self, database):
        async with database.session() as session:
            user = User(name="Ravi", email="ravi@example.com", monthly_budget=500)
            session.add(user)
            await session.flush()

            session.add_all([
                Expense(title="Jan rent", amount=300, category="Bills",
                        date=datetime(2024, 1, 31, 23, 59, 59), user_id=user.id),
                Expense(title="Feb 1", amount=120.5, category="Food",
                        date=datetime(2024, 2, 1, 0, 0, 0), user_id=user.id),
                Expense(title="Feb bills", amount=400, category="Bills",
                        date=datetime(2024, 2, 14, 9, 0, 0), user_id=user.id),
                Expense(title="Leap day", amount=30.25, category="Food",
                        date=datetime(2024, 2, 29, 23, 59, 59, 999999), user_id=user.id),
                Expense(title="Mar 1", amount=50, category="Travel",
                        date=datetime(2024, 3, 1, 0, 0, 0), user_id=user.id),
            ])
            await session.commit()

            result = await SummaryService(session).monthly_summary(
                user.id, now=datetime(2024, 2, 10, 12, 0, 0)
            )

        assert result.current_month.month == "February"
        assert result.current_month.year == 2024
        assert result.summary.number_of_expenses == 3
        assert result.summary.total_expenses == 550.75
        assert result.summary.remaining_budget == -50.75
        assert result.summary.budget_utilization == "110.15%"
        assert [(c.category, c.total, c.count) for c in result.expenses_by_category] == [
            ("Bills", 400, 1),
            ("Food", 150.75, 2),
        ]
