from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List
import yaml

@dataclass
class GridConfig:
    hour_height: float
    min_block_height: float
    short_event_hours: float

@dataclass
class ViewConfig:
    default_mode: str
    month_preview_limit: int

@dataclass
class LocalConfig:
    records_path: str

@dataclass
class GoogleConfig:
    enabled: bool
    calendar_ids: List[str]

@dataclass
class AppConfig:
    timezone: str
    grid: GridConfig
    view: ViewConfig
    local: LocalConfig
    google: GoogleConfig

def load_config(path: str) -> AppConfig:
    p = Path(path)
    data: Dict[str, Any] = {}
    if p.exists():
        data = yaml.safe_load(p.read_text(encoding="utf-8")) or {}

    grid = data.get("grid", {})
    view = data.get("view", {})
    local = data.get("local", {})
    google = data.get("google", {})

    return AppConfig(
        timezone=data.get("timezone", "Europe/Paris"),
        grid=GridConfig(
            hour_height=float(grid.get("hour_height", 80)),
            min_block_height=float(grid.get("min_block_height", 20)),
            short_event_hours=float(grid.get("short_event_hours", 0.75)),
        ),
        view=ViewConfig(
            default_mode=str(view.get("default_mode", "threeDay")),
            month_preview_limit=int(view.get("month_preview_limit", 3)),
        ),
        local=LocalConfig(
            records_path=str(local.get("records_path", "meetings.json")),
        ),
        google=GoogleConfig(
            enabled=bool(google.get("enabled", False)),
            calendar_ids=list(google.get("calendar_ids", ["primary"])),
        ),
    )
