from __future__ import annotations

import os
from datetime import datetime
from typing import List, Optional
from zoneinfo import ZoneInfo

from dotenv import load_dotenv

from .agenda import AgendaView, build_agenda
from .calendar_google import fetch_google_records
from .config import AppConfig, load_config
from .dates import parse_date_str
from .models import Record
from .normalize import Skipped, normalize_all
from .render import render_agenda
from .repository import clear_local_records, load_local_records
from .views import AgendaState, ViewMode

CONFIG_PATH_DEFAULT = "config.yaml"


def _fetch_external_records(cfg: AppConfig, state: AgendaState, tz: ZoneInfo) -> List[Record]:
    if not cfg.google.enabled:
        return []
    creds_path = os.environ.get("GOOGLE_CREDENTIALS_JSON", "")
    token_path = os.environ.get("GOOGLE_TOKEN_JSON", "")
    if not (creds_path and token_path):
        print("Google enabled but GOOGLE_CREDENTIALS_JSON/GOOGLE_TOKEN_JSON not set; skipping Google.")
        return []
    dates = state.visible_dates()
    return fetch_google_records(cfg.google.calendar_ids, dates[0], dates[-1], tz, creds_path, token_path)


def summarize(view: AgendaView, skipped: Skipped) -> List[str]:
    lines = []
    for column in view.columns:
        timed = len(column.preview) + column.hidden_count if view.state.mode is ViewMode.MONTH else len(column.blocks)
        marker = " (today)" if column.is_today else ""
        lines.append(
            f"{column.date.isoformat()}{marker}: {timed} timed, {len(column.all_day)} all-day, "
            f"{len(column.continuations)} carried over"
        )
    for record, result in skipped:
        ident = record.get("id") if isinstance(record, dict) else None
        lines.append(f"skipped {ident!r}: {result.reason.value} {result.detail}".rstrip())
    return lines


def run_once(
    config_path: str = CONFIG_PATH_DEFAULT,
    records_path: Optional[str] = None,
    anchor: Optional[str] = None,
    mode: Optional[str] = None,
    out_path: Optional[str] = None,
    use_google: bool = True,
    reset_local: bool = False,
) -> AgendaView:
    load_dotenv()
    cfg = load_config(config_path)
    tz = ZoneInfo(cfg.timezone)
    now = datetime.now(tz=tz)
    records_path = records_path or cfg.local.records_path

    if reset_local:
        removed = clear_local_records(records_path)
        print(f"Local records reset ({'removed' if removed else 'nothing to remove'}): {records_path}")

    anchor_date = parse_date_str(anchor) if anchor else None
    if anchor and anchor_date is None:
        print(f"Invalid --date {anchor!r}; using today")
    state = AgendaState(
        anchor=anchor_date or now.date(),
        mode=ViewMode.parse(mode or cfg.view.default_mode),
    )

    local_records = load_local_records(records_path)
    external_records = _fetch_external_records(cfg, state, tz) if use_google else []
    events, skipped = normalize_all(local_records, external_records, tz)

    view = build_agenda(
        state,
        events,
        now=now,
        hour_height=cfg.grid.hour_height,
        short_threshold=cfg.grid.short_event_hours,
        month_preview_limit=cfg.view.month_preview_limit,
    )

    print(
        f"Loaded {len(local_records)} local and {len(external_records)} external records; "
        f"{len(events)} events, {len(skipped)} skipped; view={state.mode.value} anchor={state.anchor}"
    )
    for line in summarize(view, skipped):
        print(line)

    if out_path:
        img = render_agenda(view, min_block_height=cfg.grid.min_block_height)
        img.save(out_path)
        print(f"Wrote {out_path}")

    return view


def main():
    import argparse

    ap = argparse.ArgumentParser()
    ap.add_argument("--config", default=CONFIG_PATH_DEFAULT)
    ap.add_argument("--records")
    ap.add_argument("--date", help="anchor date, YYYY-MM-DD")
    ap.add_argument("--view", choices=["day", "threeDay", "week", "month"])
    ap.add_argument("--out", help="write a PNG of the view")
    ap.add_argument("--no-google", action="store_true")
    ap.add_argument("--reset-local", action="store_true")
    args = ap.parse_args()

    run_once(
        config_path=args.config,
        records_path=args.records,
        anchor=args.date,
        mode=args.view,
        out_path=args.out,
        use_google=not args.no_google,
        reset_local=args.reset_local,
    )


if __name__ == "__main__":
    main()
