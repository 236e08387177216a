from __future__ import annotations
from datetime import date, datetime
import logging
from typing import Any, Iterable, List, Optional, Tuple
from zoneinfo import ZoneInfo

from .dates import minutes_of, parse_date_str, parse_time_range
from .models import EXTERNAL, LOCAL, LOCAL_CATEGORIES, Event, Normalized, Record, SkipReason

log = logging.getLogger(__name__)


def _text(value: Any) -> Optional[str]:
    if value is None:
        return None
    value = str(value)
    return value if value.strip() else None


def normalize_local(record: Record) -> Normalized:
    if not isinstance(record, dict):
        return Normalized.skip(SkipReason.MISSING_FIELD, "record is not a mapping")
    if record.get("id") is None:
        return Normalized.skip(SkipReason.MISSING_FIELD, "id")
    raw_date = record.get("date")
    if not raw_date:
        return Normalized.skip(SkipReason.MISSING_FIELD, "date")

    day = parse_date_str(raw_date)
    if day is None:
        return Normalized.skip(SkipReason.BAD_DATE, repr(raw_date))

    span = parse_time_range(record.get("time"))
    if span is None:
        return Normalized.skip(SkipReason.BAD_TIME, repr(record.get("time")))
    start, end = span

    # Older rows used "type" for the category.
    category = record.get("category") or record.get("type") or "meeting"
    if category not in LOCAL_CATEGORIES:
        category = "meeting"

    title = str(record.get("title") or "")
    return Normalized(event=Event(
        id=record["id"],
        title=title,
        date=day,
        source=LOCAL,
        category=category,
        contact=str(record.get("contact") or title),
        start_minutes=start,
        end_minutes=end,
        all_day=False,
        location=_text(record.get("location")),
        description=_text(record.get("description")),
        prospect_id=record.get("prospectId"),
        status=record.get("status"),
    ))


def _to_local(value: Any, tz: Optional[ZoneInfo]) -> Optional[datetime]:
    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
        except ValueError:
            return None
    if isinstance(value, datetime):
        if value.tzinfo is not None and tz is not None:
            return value.astimezone(tz)
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    return None


def _is_date_only(value: Any) -> bool:
    if isinstance(value, datetime):
        return False
    if isinstance(value, date):
        return True
    return isinstance(value, str) and parse_date_str(value) is not None


def normalize_external(record: Record, tz: Optional[ZoneInfo] = None) -> Normalized:
    if not isinstance(record, dict):
        return Normalized.skip(SkipReason.MISSING_FIELD, "record is not a mapping")
    raw_start = record.get("start")
    raw_end = record.get("end")
    if raw_start is None or raw_start == "":
        return Normalized.skip(SkipReason.MISSING_FIELD, "start")
    if raw_end is None or raw_end == "":
        return Normalized.skip(SkipReason.MISSING_FIELD, "end")

    start = _to_local(raw_start, tz)
    end = _to_local(raw_end, tz)
    if start is None or end is None:
        return Normalized.skip(SkipReason.BAD_INSTANT, f"{raw_start!r} / {raw_end!r}")

    all_day = bool(record.get("allDay", False)) or _is_date_only(raw_start)
    title = str(record.get("title") or "")
    return Normalized(event=Event(
        id=record.get("id"),
        title=title,
        date=start.date(),
        source=EXTERNAL,
        category=EXTERNAL,
        contact=title,
        start_minutes=None if all_day else minutes_of(start),
        end_minutes=None if all_day else minutes_of(end),
        all_day=all_day,
        location=_text(record.get("location")),
        description=_text(record.get("description")),
        color=record.get("color"),
    ))


Skipped = List[Tuple[Record, Normalized]]


def normalize_all(
    local_records: Iterable[Record],
    external_records: Iterable[Record] = (),
    tz: Optional[ZoneInfo] = None,
) -> Tuple[List[Event], Skipped]:
    """Eagerly normalize both sources. Local events come first, then external."""
    events: List[Event] = []
    skipped: Skipped = []

    results = [(r, LOCAL, normalize_local(r)) for r in local_records or []]
    results += [(r, EXTERNAL, normalize_external(r, tz)) for r in external_records or []]

    for record, source, result in results:
        if result.ok:
            events.append(result.event)
            continue
        ident = record.get("id") if isinstance(record, dict) else None
        log.warning("Skipping %s record %r: %s (%s)", source, ident, result.reason.value, result.detail)
        skipped.append((record, result))

    return events, skipped
