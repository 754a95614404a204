"""
Validators module for the expense tracker.
Contains field rules for users and expenses plus id/date/pagination parsers.
"""

from .base import (
    ValidationIssue,
    ValidationResult,
    EMAIL_PATTERN,
    parse_object_id,
    is_valid_object_id,
    parse_datetime,
    parse_pagination,
)
from .user_validator import validate_user_fields, normalize_email
from .expense_validator import validate_expense_fields, validate_category_filter

__all__ = [
    "ValidationIssue",
    "ValidationResult",
    "EMAIL_PATTERN",
    "parse_object_id",
    "is_valid_object_id",
    "parse_datetime",
    "parse_pagination",
    "validate_user_fields",
    "normalize_email",
    "validate_expense_fields",
    "validate_category_filter",
]
