"""
API Models module.

Request/response models for users, expenses and summaries.
"""

from .common import ApiResponse, CamelModel, PaginationInfo
from .user import (
    UserCreate,
    UserReplace,
    UserPatch,
    ChangeEmailRequest,
    UserResponse,
    USER_UPDATE_FIELDS,
)
from .expense import (
    ExpenseCategory,
    ExpenseCreate,
    ExpenseReplace,
    ExpensePatch,
    ExpenseOwner,
    ExpenseResponse,
    EXPENSE_UPDATE_FIELDS,
)
from .summary import (
    MonthlySummary,
    SummaryUser,
    CurrentMonth,
    SpendingTotals,
    CategoryTotal,
)

__all__ = [
    # Common
    "ApiResponse",
    "CamelModel",
    "PaginationInfo",
    # User models
    "UserCreate",
    "UserReplace",
    "UserPatch",
    "ChangeEmailRequest",
    "UserResponse",
    "USER_UPDATE_FIELDS",
    # Expense models
    "ExpenseCategory",
    "ExpenseCreate",
    "ExpenseReplace",
    "ExpensePatch",
    "ExpenseOwner",
    "ExpenseResponse",
    "EXPENSE_UPDATE_FIELDS",
    # Summary models
    "MonthlySummary",
    "SummaryUser",
    "CurrentMonth",
    "SpendingTotals",
    "CategoryTotal",
]
