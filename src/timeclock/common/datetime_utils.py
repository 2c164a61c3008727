from __future__ import annotations

from datetime import date, datetime, time, timedelta, timezone, tzinfo
from typing import Optional
from zoneinfo import ZoneInfo

from ..core.constants import WEEKDAY_LABELS

ONE_MINUTE = timedelta(minutes=1)


def get_timezone(name: str) -> ZoneInfo:
    """Resolve an IANA zone name, e.g. ``Asia/Tokyo``."""
    return ZoneInfo(name)


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def parse_clock(value: str) -> time:
    """Parse HH:MM string into time."""
    return datetime.strptime(value, "%H:%M").time()


def now_local(tz: tzinfo) -> datetime:
    """Current time in the given zone.

    Wrapped so tests can patch it.
    """
    return datetime.now(tz)


def to_local(value: datetime, tz: tzinfo) -> datetime:
    # Naive values come from DATETIME columns, which hold UTC
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(tz)


def to_utc_naive(value: datetime) -> datetime:
    """Convert an aware datetime to the naive UTC form stored in MySQL."""
    if value.tzinfo is None:
        raise ValueError("naive datetime has no timezone to convert from")
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def local_day(value: datetime, tz: tzinfo) -> date:
    """Calendar day of an instant, taken from its local components."""
    return to_local(value, tz).date()


def combine_local(day: date, clock: time, tz: tzinfo) -> datetime:
    return datetime.combine(day, clock, tzinfo=tz)


def day_start(day: date, tz: tzinfo) -> datetime:
    return combine_local(day, time.min, tz)


def elapsed(start: datetime, end: datetime) -> timedelta:
    # Subtracting in UTC keeps DST transitions out of the arithmetic
    return to_local(end, timezone.utc) - to_local(start, timezone.utc)


def whole_minutes(delta: timedelta) -> int:
    """Floor a timedelta to whole minutes."""
    return delta // ONE_MINUTE


def format_clock(value: Optional[datetime], tz: tzinfo) -> str:
    if value is None:
        return ""
    return to_local(value, tz).strftime("%H:%M")


def format_duration(minutes: int) -> str:
    """Format minutes as H:MM (8:30 for 510)."""
    if minutes < 0:
        return ""
    return f"{minutes // 60}:{minutes % 60:02d}"


def format_day_label(day: date) -> str:
    """MM/DD plus the weekday, e.g. ``06/02(月)``."""
    return f"{day.month:02d}/{day.day:02d}({WEEKDAY_LABELS[day.weekday()]})"


def date_range_label(start: date, end: date) -> str:
    if (start.year, start.month) == (end.year, end.month):
        return f"{start.year}年{start.month}月"
    return f"{start.year}年{start.month}月～{end.year}年{end.month}月"


def month_bounds(day: date) -> tuple[date, date]:
    """First and last day of the month containing ``day``."""
    first = day.replace(day=1)
    next_month = (first + timedelta(days=32)).replace(day=1)
    return first, next_month - timedelta(days=1)
