"""
Expense request/response models and the category enum
"""
from enum import Enum
from typing import Optional, Union

from pydantic import ConfigDict

from ..formatters import format_datetime
from .common import CamelModel


class ExpenseCategory(str, Enum):
    """Closed set of expense classifications"""
    FOOD = "Food"
    TRAVEL = "Travel"
    SHOPPING = "Shopping"
    ENTERTAINMENT = "Entertainment"
    BILLS = "Bills"
    HEALTHCARE = "Healthcare"
    EDUCATION = "Education"
    OTHER = "Other"

    @classmethod
    def values(cls) -> list:
        return [c.value for c in cls]


# Fields a partial update may touch
EXPENSE_UPDATE_FIELDS = ("title", "amount", "category", "date", "user_id")


class ExpenseCreate(CamelModel):
    """Create expense request; presence of required fields is checked by the service"""
    title: Optional[str] = None
    amount: Optional[float] = None
    category: Optional[str] = None
    date: Optional[str] = None
    user_id: Optional[str] = None


class ExpenseReplace(ExpenseCreate):
    """Full update request"""


class ExpensePatch(ExpenseCreate):
    """Partial update request; unknown keys are kept so they can be reported"""
    model_config = ConfigDict(extra="allow")


class ExpenseOwner(CamelModel):
    """Owner fields attached to an expense on create/update"""
    id: str
    name: str
    email: str


class ExpenseResponse(CamelModel):
    """Expense response"""
    id: str
    title: str
    amount: float
    category: str
    date: str
    user_id: Union[ExpenseOwner, str]
    created_at: str
    updated_at: str

    @classmethod
    def from_record(cls, expense, owner=None) -> "ExpenseResponse":
        return cls(
            id=expense.id,
            title=expense.title,
            amount=expense.amount,
            category=expense.category,
            date=format_datetime(expense.date),
            user_id=(
                ExpenseOwner(id=owner.id, name=owner.name, email=owner.email)
                if owner is not None else expense.user_id
            ),
            created_at=format_datetime(expense.created_at),
            updated_at=format_datetime(expense.updated_at),
        )
