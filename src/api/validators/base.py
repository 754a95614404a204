"""
Shared validation types and parsers.

Field rules run in the application before any write, so the order of checks
and the normalization applied are visible in one place.
"""
import re
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, List, Optional, Tuple

from ..exceptions import BadRequestError, ValidationError

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
LEADING_INT_PATTERN = re.compile(r"^\s*([+-]?\d+)")


@dataclass
class ValidationIssue:
    """Single field violation"""
    field: str
    message: str


@dataclass
class ValidationResult:
    """Collected field violations for one entity"""
    entity: str
    issues: List[ValidationIssue] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.issues

    def add(self, field_name: str, message: str):
        self.issues.append(ValidationIssue(field=field_name, message=message))

    @property
    def message(self) -> str:
        details = ", ".join(f"{i.field}: {i.message}" for i in self.issues)
        return f"{self.entity} validation failed: {details}"

    def raise_for_errors(self):
        """Raise ValidationError if any issue was collected"""
        if self.issues:
            raise ValidationError(self.message)


def parse_object_id(value: Any, message: str = "Invalid ID format") -> str:
    """
    Parse a record identifier.

    Args:
        value: Raw identifier from a path, query or body
        message: Error message used when the value is malformed

    Returns:
        Canonical lower-case UUID string

    Raises:
        BadRequestError: If the value is not a UUID
    """
    if not isinstance(value, str):
        raise BadRequestError(message)
    try:
        return str(uuid.UUID(value.strip()))
    except ValueError:
        raise BadRequestError(message)


def is_valid_object_id(value: Any) -> bool:
    try:
        parse_object_id(value)
        return True
    except BadRequestError:
        return False


def parse_datetime(value: Any, field_name: str = "date") -> datetime:
    """
    Parse an ISO-8601 date or datetime into naive UTC.

    Date-only strings resolve to midnight UTC; offsets are converted to UTC.

    Raises:
        BadRequestError: If the value cannot be parsed
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str) and value.strip():
        try:
            parsed = datetime.fromisoformat(value.strip())
        except ValueError:
            raise BadRequestError(f"Invalid {field_name}: expected an ISO-8601 date")
    else:
        raise BadRequestError(f"Invalid {field_name}: expected an ISO-8601 date")

    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def _to_int(value: Optional[str]) -> int:
    """Leading integer of a query value, like parseInt: "2.5" -> 2, "3abc" -> 3"""
    if value is None:
        return 0
    match = LEADING_INT_PATTERN.match(str(value))
    return int(match.group(1)) if match else 0


def parse_pagination(
    page: Optional[str],
    limit: Optional[str],
    default_limit: int = 10,
    max_limit: int = 100
) -> Tuple[int, int, int]:
    """
    Resolve page/limit query values.

    Missing, non-numeric or zero values fall back to the defaults; the page is
    at least 1 and the limit is clamped to [1, max_limit].

    Returns:
        (page, limit, offset)
    """
    page_num = max(1, _to_int(page) or 1)
    limit_num = min(max_limit, max(1, _to_int(limit) or default_limit))
    return page_num, limit_num, (page_num - 1) * limit_num
