"""
Services module for the expense tracker.

Business logic extracted from the routers.
"""

from .user_service import UserService, get_user_service
from .expense_service import ExpenseService, get_expense_service
from .summary_service import SummaryService, get_summary_service

__all__ = [
    "UserService",
    "get_user_service",
    "ExpenseService",
    "get_expense_service",
    "SummaryService",
    "get_summary_service",
]
