from __future__ import annotations
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Any, Dict, Optional

LOCAL = "local"
EXTERNAL = "external"

LOCAL_CATEGORIES = ("call", "video", "meeting")

@dataclass(frozen=True)
class Event:
    id: Any
    title: str
    date: date
    source: str                 # "local" / "external"
    category: str               # call / video / meeting / external
    contact: str = ""
    start_minutes: Optional[int] = None   # None for all-day
    end_minutes: Optional[int] = None     # may be < start_minutes (overnight)
    all_day: bool = False
    location: Optional[str] = None
    description: Optional[str] = None
    color: Optional[str] = None
    prospect_id: Optional[int] = None
    status: Optional[str] = None

    @property
    def read_only(self) -> bool:
        return self.source == EXTERNAL

    @property
    def is_overnight(self) -> bool:
        if self.all_day or self.start_minutes is None or self.end_minutes is None:
            return False
        return self.end_minutes < self.start_minutes


class SkipReason(str, Enum):
    MISSING_FIELD = "missing_field"
    BAD_DATE = "bad_date"
    BAD_TIME = "bad_time"
    BAD_INSTANT = "bad_instant"


@dataclass(frozen=True)
class Normalized:
    """Outcome of normalizing one upstream record: an event or the reason it was dropped."""
    event: Optional[Event] = None
    reason: Optional[SkipReason] = None
    detail: str = ""

    @property
    def ok(self) -> bool:
        return self.event is not None

    @classmethod
    def skip(cls, reason: SkipReason, detail: str = "") -> "Normalized":
        return cls(reason=reason, detail=detail)


Record = Dict[str, Any]
