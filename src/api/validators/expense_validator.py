"""
Expense field normalization and validation
"""
import math
from typing import Any, Dict

from ..exceptions import BadRequestError
from ..formatters import round2
from ..models.expense import ExpenseCategory
from .base import ValidationResult, parse_datetime, parse_object_id

MIN_TITLE_LENGTH = 2
MIN_AMOUNT = 1


def validate_expense_fields(fields: Dict[str, Any]) -> Dict[str, Any]:
    """
    Normalize and check the expense fields present in ``fields``.

    Checks syntax only; whether ``user_id`` names an existing user is decided
    by the service against the database.

    Args:
        fields: Any of ``title``, ``amount``, ``category``, ``date``, ``user_id``

    Returns:
        Normalized copy: title trimmed, amount rounded to 2 decimals,
        date parsed to naive UTC, user_id canonicalized

    Raises:
        BadRequestError: Malformed user id or unparseable date
        ValidationError: Listing every violated field
    """
    result = ValidationResult(entity="Expense")
    normalized = dict(fields)

    if "user_id" in fields:
        if fields["user_id"] is None:
            result.add("userId", "User ID is required")
        else:
            normalized["user_id"] = parse_object_id(fields["user_id"], "Invalid user ID")

    if "date" in fields:
        if fields["date"] is None:
            result.add("date", "Date is required")
        else:
            normalized["date"] = parse_datetime(fields["date"], "date")

    if "title" in fields:
        title = fields["title"]
        if title is None or not str(title).strip():
            result.add("title", "Title is required")
        else:
            title = str(title).strip()
            if len(title) < MIN_TITLE_LENGTH:
                result.add("title", f"Title must be at least {MIN_TITLE_LENGTH} characters")
            normalized["title"] = title

    if "amount" in fields:
        amount = fields["amount"]
        if amount is None:
            result.add("amount", "Amount is required")
        elif not math.isfinite(amount * 100):
            result.add("amount", "Amount must be a finite number")
        elif amount < MIN_AMOUNT:
            result.add("amount", "Amount must be greater than 0")
        else:
            normalized["amount"] = round2(amount)

    if "category" in fields:
        category = fields["category"]
        if category is None:
            result.add("category", "Category is required")
        elif category not in ExpenseCategory.values():
            result.add("category", "Invalid category")

    result.raise_for_errors()
    return normalized


def validate_category_filter(category: str) -> str:
    """Check a category query value against the enum"""
    if category not in ExpenseCategory.values():
        raise BadRequestError(
            f"Invalid category. Must be one of: {', '.join(ExpenseCategory.values())}"
        )
    return category
