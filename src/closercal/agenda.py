from __future__ import annotations
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from typing import List, Optional, Sequence

from .clock import current_position_percent
from .dates import is_today
from .layout import HOUR_HEIGHT_DEFAULT, SHORT_EVENT_HOURS, BlockLayout, continuations_for, layout_day
from .merge import events_for_date, month_cell
from .models import Event
from .views import AgendaState, ViewMode, in_anchor_month


@dataclass
class DayColumn:
    date: date
    is_today: bool
    in_month: bool = True
    all_day: List[Event] = field(default_factory=list)
    blocks: List[BlockLayout] = field(default_factory=list)
    continuations: List[BlockLayout] = field(default_factory=list)
    preview: List[Event] = field(default_factory=list)   # month mode only
    hidden_count: int = 0
    now_percent: Optional[float] = None


@dataclass
class AgendaView:
    state: AgendaState
    hour_height: float
    columns: List[DayColumn]

    @property
    def today_column(self) -> Optional[DayColumn]:
        return next((c for c in self.columns if c.is_today), None)


def build_agenda(
    state: AgendaState,
    events: Sequence[Event],
    now: Optional[datetime] = None,
    hour_height: float = HOUR_HEIGHT_DEFAULT,
    short_threshold: float = SHORT_EVENT_HOURS,
    month_preview_limit: int = 3,
) -> AgendaView:
    now = now or datetime.now()
    columns: List[DayColumn] = []

    for day in state.visible_dates():
        today = is_today(day, now)
        column = DayColumn(date=day, is_today=today)
        day_events = events_for_date(day, events)
        column.all_day = day_events.all_day

        if state.mode is ViewMode.MONTH:
            column.in_month = in_anchor_month(day, state.anchor)
            column.preview, column.hidden_count = month_cell(day, events, month_preview_limit)
        else:
            column.blocks = layout_day(day_events.timed, hour_height, short_threshold)
            previous = events_for_date(day - timedelta(days=1), events).timed
            column.continuations = continuations_for(previous, hour_height, short_threshold)
            if today:
                column.now_percent = current_position_percent(now)

        columns.append(column)

    return AgendaView(state=state, hour_height=hour_height, columns=columns)
