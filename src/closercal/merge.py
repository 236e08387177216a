from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional, Sequence, Tuple
from zoneinfo import ZoneInfo

from .dates import DateLike, same_calendar_day
from .models import EXTERNAL, LOCAL, Event


@dataclass(frozen=True)
class DayEvents:
    timed: List[Event] = field(default_factory=list)
    all_day: List[Event] = field(default_factory=list)


def events_for_date(day: DateLike, events: Sequence[Event]) -> DayEvents:
    """Timed events (local first, then external) and the separate all-day lane.

    No de-duplication across sources.
    """
    on_day = [e for e in events if same_calendar_day(e.date, day)]

    local = [e for e in on_day if e.source == LOCAL and not e.all_day]
    external = [e for e in on_day if e.source == EXTERNAL and not e.all_day]
    all_day = [e for e in on_day if e.all_day]

    return DayEvents(timed=[*local, *external], all_day=all_day)


def month_cell(day: DateLike, events: Sequence[Event], limit: int = 3) -> Tuple[List[Event], int]:
    timed = events_for_date(day, events).timed
    visible = timed[:limit]
    return visible, len(timed) - len(visible)


def events_for_today(
    events: Sequence[Event],
    now: Optional[datetime] = None,
    tz: Optional[ZoneInfo] = None,
) -> List[Event]:
    if now is None:
        now = datetime.now(tz=tz)
    return events_for_date(now, events).timed
