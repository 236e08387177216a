from __future__ import annotations
from datetime import date, datetime, time
from typing import Optional, Tuple, Union
from zoneinfo import ZoneInfo

DateLike = Union[date, datetime]

TIME_SEPARATOR = " - "


def same_calendar_day(a: DateLike, b: DateLike) -> bool:
    # Component-wise so the time of day (and any tz on an aware datetime) never shifts the day.
    return a.year == b.year and a.month == b.month and a.day == b.day


def is_today(a: DateLike, now: Optional[datetime] = None, tz: Optional[ZoneInfo] = None) -> bool:
    if now is None:
        now = datetime.now(tz=tz)
    return same_calendar_day(a, now)


def parse_date_str(value: object) -> Optional[date]:
    """Parse ``YYYY-MM-DD`` into a calendar date, or None when it is not one."""
    if not isinstance(value, str):
        return None
    parts = value.strip().split("-")
    if len(parts) != 3:
        return None
    try:
        year, month, day = (int(p) for p in parts)
    except ValueError:
        return None
    try:
        return date(year, month, day)
    except ValueError:
        return None


def parse_clock(value: str, allow_midnight_end: bool = False) -> Optional[int]:
    """``HH:MM`` -> minutes since midnight. ``24:00`` maps to 0, end times only."""
    parts = value.strip().split(":")
    if len(parts) != 2:
        return None
    try:
        hh, mm = int(parts[0]), int(parts[1])
    except ValueError:
        return None
    if allow_midnight_end and hh == 24 and mm == 0:
        return 0
    if not (0 <= hh <= 23 and 0 <= mm <= 59):
        return None
    return hh * 60 + mm


def parse_time_range(value: object) -> Optional[Tuple[int, int]]:
    """Parse ``"HH:MM - HH:MM"``. A lone ``"HH:MM"`` is read as a one-hour slot."""
    if not isinstance(value, str) or not value.strip():
        return None
    if TIME_SEPARATOR not in value:
        start = parse_clock(value)
        if start is None:
            return None
        return start, (start + 60) % 1440
    start_s, end_s = value.split(TIME_SEPARATOR, 1)
    start = parse_clock(start_s)
    end = parse_clock(end_s, allow_midnight_end=True)
    if start is None or end is None:
        return None
    return start, end


def fmt_clock(minutes: int) -> str:
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def minutes_of(dt: Union[datetime, time]) -> int:
    return dt.hour * 60 + dt.minute
