"""
Formatting utilities for amounts, timestamps and month labels.
"""
import math
from datetime import date, datetime, timedelta, timezone
from typing import Optional, Tuple, Union

# Indian Standard Time, fixed UTC+05:30 with no DST
IST_OFFSET = timedelta(hours=5, minutes=30)

MONTH_NAMES = {
    1: "January", 2: "February", 3: "March", 4: "April",
    5: "May", 6: "June", 7: "July", 8: "August",
    9: "September", 10: "October", 11: "November", 12: "December"
}


def round2(value: Union[int, float]) -> float:
    """
    Round a monetary value to 2 decimal places, half-up on the cents value.

    Matches ``Math.round(value * 100) / 100``: ``25.005`` gives ``2500.5``
    cents and rounds up to ``25.01``. Callers must pass finite values.

    Args:
        value: Amount to round

    Returns:
        Rounded amount
    """
    return math.floor(float(value) * 100 + 0.5) / 100


def _as_utc(value: datetime) -> datetime:
    """Treat naive datetimes as UTC"""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def format_datetime(
    value: Optional[datetime],
    offset: timedelta = IST_OFFSET,
    label: str = "IST"
) -> Optional[str]:
    """
    Format a timestamp as ``DD-MM-YYYY HH:MM:SS <label>`` at a fixed offset.

    Args:
        value: Timestamp; naive values are taken as UTC
        offset: Offset from UTC to render in
        label: Zone label appended to the string

    Returns:
        Formatted string like "19-10-2026 15:30:00 IST", or None for None
    """
    if value is None:
        return None
    shifted = _as_utc(value).astimezone(timezone(offset))
    return f"{shifted.strftime('%d-%m-%Y %H:%M:%S')} {label}"


def format_iso(value: Optional[datetime] = None, offset: timedelta = IST_OFFSET) -> str:
    """ISO-8601 string with millisecond precision at a fixed offset (default: now)"""
    if value is None:
        value = datetime.now(timezone.utc)
    return _as_utc(value).astimezone(timezone(offset)).isoformat(timespec="milliseconds")


def format_percent(part: float, whole: float) -> str:
    """Share of ``whole`` as a percentage string with 2 decimals; "0%" for a zero whole"""
    if not whole or whole <= 0:
        return "0%"
    return f"{part / whole * 100:.2f}%"


def format_month(month: int) -> str:
    return MONTH_NAMES.get(month, str(month))


def month_range(now: Optional[datetime] = None) -> Tuple[datetime, datetime]:
    """
    First and last instant of the calendar month containing ``now`` (UTC).

    Returns:
        (start, end) as naive UTC datetimes, end at 23:59:59.999999 of the last day
    """
    if now is None:
        now = datetime.now(timezone.utc)
    now = _as_utc(now).replace(tzinfo=None)

    start = datetime(now.year, now.month, 1)
    if now.month == 12:
        next_month = datetime(now.year + 1, 1, 1)
    else:
        next_month = datetime(now.year, now.month + 1, 1)
    end = next_month - timedelta(microseconds=1)
    return start, end


def end_of_day(value: Union[datetime, date]) -> datetime:
    """Last representable instant of the day ``value`` falls on"""
    if not isinstance(value, datetime):
        value = datetime(value.year, value.month, value.day)
    return value.replace(hour=23, minute=59, second=59, microsecond=999999)
