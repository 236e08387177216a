"""Vertical placement of timed events on a 24-hour grid.

Positions are in pixels from midnight, ``hour_height`` pixels per hour.
Overnight events are clipped at midnight on their start day; the part after
midnight is laid out separately as a continuation block on the next day.
Overlapping events are not stacked: they are returned in input order and the
renderer draws them on top of each other.
"""

from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime
from typing import List, Sequence

from .dates import fmt_clock
from .models import Event

HOUR_HEIGHT_DEFAULT = 80
SHORT_EVENT_HOURS = 0.75
ARROW = "→"


@dataclass(frozen=True)
class BlockLayout:
    event: Event
    top: float
    height: float
    start_hour: float
    duration: float
    is_overnight: bool
    is_short: bool
    is_continuation: bool
    time_label: str


def is_short(duration: float, threshold: float = SHORT_EVENT_HOURS) -> bool:
    return duration < threshold


def layout_event(
    event: Event,
    hour_height: float = HOUR_HEIGHT_DEFAULT,
    short_threshold: float = SHORT_EVENT_HOURS,
) -> BlockLayout:
    if event.all_day or event.start_minutes is None or event.end_minutes is None:
        raise ValueError(f"event {event.id!r} has no time range to lay out")

    start_hour = event.start_minutes / 60
    end_hour = event.end_minutes / 60
    overnight = event.end_minutes < event.start_minutes

    duration = (24 - start_hour) if overnight else (end_hour - start_hour)
    end_label = ARROW if overnight else fmt_clock(event.end_minutes)

    # No clamping for zero-length events; the renderer floors the height.
    return BlockLayout(
        event=event,
        top=start_hour * hour_height,
        height=duration * hour_height,
        start_hour=start_hour,
        duration=duration,
        is_overnight=overnight,
        is_short=is_short(duration, short_threshold),
        is_continuation=False,
        time_label=f"{fmt_clock(event.start_minutes)} - {end_label}",
    )


def layout_continuation(
    event: Event,
    hour_height: float = HOUR_HEIGHT_DEFAULT,
    short_threshold: float = SHORT_EVENT_HOURS,
) -> BlockLayout:
    """The after-midnight part of an overnight event, drawn on the following day."""
    if not event.is_overnight:
        raise ValueError(f"event {event.id!r} does not cross midnight")

    end_hour = event.end_minutes / 60
    return BlockLayout(
        event=event,
        top=0.0,
        height=end_hour * hour_height,
        start_hour=0.0,
        duration=end_hour,
        is_overnight=True,
        is_short=is_short(end_hour, short_threshold),
        is_continuation=True,
        time_label=f"{ARROW} {fmt_clock(event.end_minutes)}",
    )


def layout_day(
    timed: Sequence[Event],
    hour_height: float = HOUR_HEIGHT_DEFAULT,
    short_threshold: float = SHORT_EVENT_HOURS,
) -> List[BlockLayout]:
    return [layout_event(e, hour_height, short_threshold) for e in timed]


def continuations_for(
    previous_day_timed: Sequence[Event],
    hour_height: float = HOUR_HEIGHT_DEFAULT,
    short_threshold: float = SHORT_EVENT_HOURS,
) -> List[BlockLayout]:
    return [
        layout_continuation(e, hour_height, short_threshold)
        for e in previous_day_timed
        if e.is_overnight
    ]


def scroll_offset(now: datetime, hour_height: float = HOUR_HEIGHT_DEFAULT) -> float:
    # Two hours of context above the current hour.
    return max(0, now.hour - 2) * hour_height
