from __future__ import annotations
from datetime import date, datetime, timedelta
import logging
from typing import Any, Dict, List
from zoneinfo import ZoneInfo
import os

from google.oauth2.credentials import Credentials
from google_auth_oauthlib.flow import InstalledAppFlow
from googleapiclient.discovery import build

from .models import Record

log = logging.getLogger(__name__)

SCOPES = ["https://www.googleapis.com/auth/calendar.readonly"]
GOOGLE_BLUE = "#4285F4"
MAX_RESULTS = 100

def _get_creds(credentials_path: str, token_path: str) -> Credentials:
    if os.path.exists(token_path):
        return Credentials.from_authorized_user_file(token_path, SCOPES)

    flow = InstalledAppFlow.from_client_secrets_file(credentials_path, SCOPES)
    creds = flow.run_local_server(port=0)
    os.makedirs(os.path.dirname(token_path) or ".", exist_ok=True)
    with open(token_path, "w", encoding="utf-8") as f:
        f.write(creds.to_json())
    return creds

def query_range(first_day: date, last_day: date, tz: ZoneInfo):
    # Includes the day before the window for overnight carry-over blocks.
    start_day = first_day - timedelta(days=1)
    end_day = last_day + timedelta(days=1)
    start = datetime(start_day.year, start_day.month, start_day.day, tzinfo=tz)
    end = datetime(end_day.year, end_day.month, end_day.day, tzinfo=tz)
    return start, end

def item_to_record(item: Dict[str, Any]) -> Record:
    start_obj = item.get("start", {})
    end_obj = item.get("end", {})

    # All-day events have "date" not "dateTime"
    all_day = "dateTime" not in start_obj and "date" in start_obj

    return {
        "id": f"google-{item.get('id')}",
        "title": f"📅 {item.get('summary') or 'Sans titre'}",
        "start": start_obj.get("dateTime") or start_obj.get("date"),
        "end": end_obj.get("dateTime") or end_obj.get("date"),
        "allDay": all_day,
        "description": item.get("description") or "",
        "location": item.get("location") or "",
        "color": GOOGLE_BLUE,
    }

def fetch_google_records(
    calendar_ids: List[str],
    first_day: date,
    last_day: date,
    tz: ZoneInfo,
    credentials_path: str,
    token_path: str,
) -> List[Record]:
    """External provider records covering first_day..last_day. Failures yield an empty list."""
    try:
        creds = _get_creds(credentials_path, token_path)
        service = build("calendar", "v3", credentials=creds, cache_discovery=False)

        time_min, time_max = query_range(first_day, last_day, tz)
        records: List[Record] = []
        for cal_id in calendar_ids:
            resp = service.events().list(
                calendarId=cal_id,
                timeMin=time_min.isoformat(),
                timeMax=time_max.isoformat(),
                singleEvents=True,
                orderBy="startTime",
                maxResults=MAX_RESULTS,
            ).execute()
            records.extend(item_to_record(item) for item in resp.get("items", []))
        return records
    except Exception:
        log.exception("Google Calendar fetch failed; continuing without Google events")
        return []
