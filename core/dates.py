"""Due-date parsing and local-calendar helpers.

All instants are stored as aware UTC datetimes. Calendar questions (is it due
today? which weekday?) are answered in the local timezone.
"""

import re
from datetime import date, datetime, time, timedelta, timezone
from typing import Optional

_WEEKDAYS = {
    "mon": 0, "monday": 0,
    "tue": 1, "tuesday": 1,
    "wed": 2, "wednesday": 2,
    "thu": 3, "thursday": 3,
    "fri": 4, "friday": 4,
    "sat": 5, "saturday": 5,
    "sun": 6, "sunday": 6,
}

_KEYWORD_OFFSETS = {
    "today": 0,
    "tod": 0,
    "tomorrow": 1,
    "tom": 1,
    "yesterday": -1,
    "next week": 7,
    "next month": 30,
}

_RELATIVE_RE = re.compile(r"^\+(\d+)([dw])$", re.ASCII)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def local_date(value: datetime) -> date:
    """Calendar date of an instant in the local timezone."""
    return value.astimezone().date()


def local_today() -> date:
    return datetime.now().astimezone().date()


def end_of_day_utc(day: date) -> Optional[datetime]:
    """23:59:59 local time on `day`, expressed in UTC; None past the datetime range."""
    try:
        local_eod = datetime.combine(day, time(23, 59, 59)).astimezone()
        return local_eod.astimezone(timezone.utc)
    except (OverflowError, ValueError):
        return None


def _month_day(today: date, month: int, day: int) -> Optional[date]:
    try:
        candidate = date(today.year, month, day)
    except ValueError:
        return None
    if candidate < today:
        try:
            return date(today.year + 1, month, day)
        except ValueError:
            return candidate
    return candidate


def _parse_day(text: str, today: date) -> Optional[date]:
    if text in _KEYWORD_OFFSETS:
        return today + timedelta(days=_KEYWORD_OFFSETS[text])

    match = _RELATIVE_RE.match(text)
    if match:
        amount = int(match.group(1))
        unit = 7 if match.group(2) == "w" else 1
        try:
            return today + timedelta(days=amount * unit)
        except OverflowError:
            return None

    if text in _WEEKDAYS:
        ahead = (_WEEKDAYS[text] - today.weekday() + 7) % 7
        return today + timedelta(days=ahead or 7)

    for fmt in ("%Y-%m-%d", "%Y/%m/%d"):
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            pass

    parts = text.split("/")
    if len(parts) == 2 and all(p.isascii() and p.isdigit() for p in parts):
        first, second = int(parts[0]), int(parts[1])
        # MM/DD first, DD/MM when the first reading is not a valid date
        resolved = _month_day(today, first, second)
        if resolved is None and second <= 12:
            resolved = _month_day(today, second, first)
        return resolved
    return None


def parse_due_date(text: str, today: Optional[date] = None) -> Optional[datetime]:
    """Resolve free-form due-date text to an end-of-day UTC instant.

    Accepts keywords (today/tod, tomorrow/tom, yesterday, next week, next
    month), relative offsets (+3d, +2w), weekday names (mon, friday, ...),
    YYYY-MM-DD, YYYY/MM/DD, MM/DD and DD/MM. Returns None for anything else.
    """
    normalized = (text or "").strip().lower()
    if not normalized:
        return None
    day = _parse_day(normalized, today or local_today())
    if day is None:
        return None
    return end_of_day_utc(day)


def format_relative_date(value: datetime, today: Optional[date] = None) -> str:
    day = local_date(value)
    ref = today or local_today()
    if day == ref:
        return "Today"
    if day == ref + timedelta(days=1):
        return "Tomorrow"
    if day == ref - timedelta(days=1):
        return "Yesterday"
    if ref < day <= ref + timedelta(days=7):
        return day.strftime("%a %d")
    return day.strftime("%b %d")


def format_due_date(value: Optional[datetime]) -> str:
    return format_relative_date(value) if value else ""


__all__ = [
    "utc_now",
    "local_date",
    "local_today",
    "end_of_day_utc",
    "parse_due_date",
    "format_relative_date",
    "format_due_date",
]
