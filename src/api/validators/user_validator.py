"""
User field normalization and validation
"""
import math
from typing import Any, Dict

from ..formatters import round2
from .base import EMAIL_PATTERN, ValidationResult

MIN_NAME_LENGTH = 2
MIN_MONTHLY_BUDGET = 1


def normalize_email(email: str) -> str:
    return email.strip().lower()


def validate_user_fields(fields: Dict[str, Any]) -> Dict[str, Any]:
    """
    Normalize and check the user fields present in ``fields``.

    Only keys present are checked, so the same rules serve create, full and
    partial updates. A key present with a None value counts as missing.

    Args:
        fields: Any of ``name``, ``email``, ``monthly_budget``

    Returns:
        Normalized copy: name trimmed, email trimmed and lower-cased,
        budget rounded to 2 decimals

    Raises:
        ValidationError: Listing every violated field
    """
    result = ValidationResult(entity="User")
    normalized = dict(fields)

    if "name" in fields:
        name = fields["name"]
        if name is None or not str(name).strip():
            result.add("name", "Name is required")
        else:
            name = str(name).strip()
            if len(name) < MIN_NAME_LENGTH:
                result.add("name", f"Name must be at least {MIN_NAME_LENGTH} characters")
            normalized["name"] = name

    if "email" in fields:
        email = fields["email"]
        if email is None or not str(email).strip():
            result.add("email", "Email is required")
        else:
            email = normalize_email(str(email))
            if not EMAIL_PATTERN.match(email):
                result.add("email", "Invalid email format")
            normalized["email"] = email

    if "monthly_budget" in fields:
        budget = fields["monthly_budget"]
        if budget is None:
            result.add("monthlyBudget", "Monthly budget is required")
        elif not math.isfinite(budget * 100):
            result.add("monthlyBudget", "Monthly budget must be a finite number")
        elif budget < MIN_MONTHLY_BUDGET:
            result.add("monthlyBudget", "Monthly budget must be greater than 0")
        else:
            normalized["monthly_budget"] = round2(budget)

    result.raise_for_errors()
    return normalized
