from __future__ import annotations
import calendar
from dataclasses import dataclass, replace
from datetime import date, datetime, timedelta
from enum import Enum
from typing import List, Optional, Union

MONTH_GRID_CELLS = 42
THREE_DAY_STEP = 2


class ViewMode(str, Enum):
    DAY = "day"
    THREE_DAY = "threeDay"
    MONTH = "month"

    @classmethod
    def parse(cls, value: Union[str, "ViewMode"]) -> "ViewMode":
        if isinstance(value, ViewMode):
            return value
        if value == "week":
            return cls.THREE_DAY
        return cls(value)


def _as_date(value: Union[date, datetime]) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value


def month_grid_start(anchor: date) -> date:
    first = _as_date(anchor).replace(day=1)
    return first - timedelta(days=first.weekday())


def visible_dates(anchor: Union[date, datetime], mode: Union[str, ViewMode]) -> List[date]:
    anchor = _as_date(anchor)
    mode = ViewMode.parse(mode)
    if mode is ViewMode.DAY:
        return [anchor]
    if mode is ViewMode.THREE_DAY:
        return [anchor + timedelta(days=i) for i in range(3)]
    start = month_grid_start(anchor)
    return [start + timedelta(days=i) for i in range(MONTH_GRID_CELLS)]


def _add_months(d: date, months: int) -> date:
    index = d.year * 12 + (d.month - 1) + months
    year, month = divmod(index, 12)
    month += 1
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(d.day, last_day))


def navigate(anchor: Union[date, datetime], mode: Union[str, ViewMode], direction: int) -> date:
    """New anchor one step forward (direction > 0) or back (direction < 0).

    The 3-day view moves by two days, so consecutive windows share a day.
    """
    anchor = _as_date(anchor)
    mode = ViewMode.parse(mode)
    step = 1 if direction > 0 else -1
    if mode is ViewMode.DAY:
        return anchor + timedelta(days=step)
    if mode is ViewMode.THREE_DAY:
        return anchor + timedelta(days=THREE_DAY_STEP * step)
    return _add_months(anchor, step)


def in_anchor_month(day: date, anchor: date) -> bool:
    return day.year == anchor.year and day.month == anchor.month


@dataclass(frozen=True)
class AgendaState:
    anchor: date
    mode: ViewMode = ViewMode.THREE_DAY

    def visible_dates(self) -> List[date]:
        return visible_dates(self.anchor, self.mode)

    def next(self) -> "AgendaState":
        return replace(self, anchor=navigate(self.anchor, self.mode, 1))

    def prev(self) -> "AgendaState":
        return replace(self, anchor=navigate(self.anchor, self.mode, -1))

    def today(self, now: Optional[datetime] = None) -> "AgendaState":
        now = now or datetime.now()
        return replace(self, anchor=now.date())

    def with_mode(self, mode: Union[str, ViewMode]) -> "AgendaState":
        return replace(self, mode=ViewMode.parse(mode))
