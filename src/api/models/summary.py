"""
Monthly summary response models
"""
from typing import List

from .common import CamelModel


class SummaryUser(CamelModel):
    id: str
    name: str
    email: str
    monthly_budget: float


class CurrentMonth(CamelModel):
    month: str
    year: int


class SpendingTotals(CamelModel):
    total_expenses: float
    remaining_budget: float
    number_of_expenses: int
    budget_utilization: str


class CategoryTotal(CamelModel):
    category: str
    total: float
    count: int


class MonthlySummary(CamelModel):
    """Spending of one user in the current calendar month"""
    user: SummaryUser
    current_month: CurrentMonth
    summary: SpendingTotals
    expenses_by_category: List[CategoryTotal]
