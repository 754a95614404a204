"""
Summary Service - Monthly spending aggregation for a user.
"""
from datetime import datetime
from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
import structlog

from ..formatters import format_month, format_percent, month_range, round2
from ..models.summary import (
    CategoryTotal,
    CurrentMonth,
    MonthlySummary,
    SpendingTotals,
    SummaryUser,
)
from ..tables import Expense
from .user_service import UserService

logger = structlog.get_logger()


class SummaryService:
    """Current-month totals against the user's monthly budget"""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.users = UserService(db)

    async def monthly_summary(self, user_id: str, now: Optional[datetime] = None) -> MonthlySummary:
        """
        Summarize the calendar month containing ``now`` (default: current UTC time).

        Raises:
            BadRequestError: Malformed user id
            NotFoundError: No such user
        """
        user = await self.users.get_user(user_id)
        start, end = month_range(now)

        conditions = [
            Expense.user_id == user.id,
            Expense.date >= start,
            Expense.date <= end,
        ]

        totals = await self.db.execute(
            select(
                func.coalesce(func.sum(Expense.amount), 0),
                func.count(Expense.id)
            ).where(*conditions)
        )
        total_expenses, number_of_expenses = totals.one()
        total_expenses = float(total_expenses or 0)

        category_total = func.sum(Expense.amount)
        by_category = await self.db.execute(
            select(
                Expense.category,
                category_total.label("total"),
                func.count(Expense.id).label("count")
            )
            .where(*conditions)
            .group_by(Expense.category)
            .order_by(category_total.desc())
        )

        logger.info("Summary computed",
                    user_id=user.id,
                    month=start.month,
                    year=start.year,
                    total=total_expenses)

        return MonthlySummary(
            user=SummaryUser(
                id=user.id,
                name=user.name,
                email=user.email,
                monthly_budget=user.monthly_budget,
            ),
            current_month=CurrentMonth(month=format_month(start.month), year=start.year),
            summary=SpendingTotals(
                total_expenses=round2(total_expenses),
                remaining_budget=round2(user.monthly_budget - total_expenses),
                number_of_expenses=number_of_expenses or 0,
                budget_utilization=format_percent(total_expenses, user.monthly_budget),
            ),
            expenses_by_category=[
                CategoryTotal(category=category, total=round2(total), count=count)
                for category, total, count in by_category
            ],
        )


def get_summary_service(db: AsyncSession) -> SummaryService:
    return SummaryService(db)
