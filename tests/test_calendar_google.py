from datetime import date, datetime
from types import SimpleNamespace
from zoneinfo import ZoneInfo

from closercal import calendar_google
from closercal.calendar_google import fetch_google_records, item_to_record
from closercal.normalize import normalize_external
from closercal.views import visible_dates


def test_item_to_record_timed_event():
    record = item_to_record(
        {
            "id": "abc",
            "summary": "Demo",
            "start": {"dateTime": "2025-06-01T09:00:00+02:00"},
            "end": {"dateTime": "2025-06-01T10:00:00+02:00"},
            "location": "Paris",
        }
    )

    assert record["id"] == "google-abc"
    assert record["title"] == "📅 Demo"
    assert record["allDay"] is False
    assert record["color"] == "#4285F4"
    event = normalize_external(record, ZoneInfo("Europe/Paris")).event
    assert (event.start_minutes, event.end_minutes) == (540, 600)


def test_item_to_record_all_day_and_untitled():
    record = item_to_record({"id": "x", "start": {"date": "2025-06-01"}, "end": {"date": "2025-06-02"}})

    assert record["allDay"] is True
    assert record["title"] == "📅 Sans titre"
    assert normalize_external(record).event.all_day


def test_fetch_google_records_continues_when_auth_fails(monkeypatch, caplog):
    monkeypatch.setattr(
        calendar_google,
        "_get_creds",
        lambda *_args, **_kwargs: (_ for _ in ()).throw(RuntimeError("invalid_grant")),
    )

    records = fetch_google_records(
        ["primary"], date(2025, 6, 1), date(2025, 6, 3), ZoneInfo("Europe/Paris"), "/tmp/c.json", "/tmp/t.json"
    )

    assert records == []
    assert "Google Calendar fetch failed" in caplog.text


def _stub_service(monkeypatch, items=()):
    seen = {}

    class Events:
        def list(self, **kwargs):
            seen.update(kwargs)
            return SimpleNamespace(execute=lambda: {"items": list(items)})

    monkeypatch.setattr(calendar_google, "_get_creds", lambda *_a: object())
    monkeypatch.setattr(calendar_google, "build", lambda *_a, **_k: SimpleNamespace(events=Events))
    return seen


def test_fetch_google_records_covers_three_day_window_across_month_end(monkeypatch):
    items = [{"id": "1", "summary": "A", "start": {"date": "2025-07-02"}, "end": {"date": "2025-07-03"}}]
    seen = _stub_service(monkeypatch, items)
    dates = visible_dates(date(2025, 6, 30), "threeDay")

    records = fetch_google_records(["primary"], dates[0], dates[-1], ZoneInfo("Europe/Paris"), "c", "t")

    assert [r["id"] for r in records] == ["google-1"]
    time_min = datetime.fromisoformat(seen["timeMin"])
    time_max = datetime.fromisoformat(seen["timeMax"])
    assert time_min == datetime(2025, 6, 29, tzinfo=ZoneInfo("Europe/Paris"))
    assert time_max == datetime(2025, 7, 3, tzinfo=ZoneInfo("Europe/Paris"))
    assert seen["maxResults"] == 100
    assert seen["singleEvents"] is True


def test_fetch_google_records_covers_month_grid_edges(monkeypatch):
    seen = _stub_service(monkeypatch)
    dates = visible_dates(date(2025, 6, 15), "month")

    fetch_google_records(["primary"], dates[0], dates[-1], ZoneInfo("Europe/Paris"), "c", "t")

    assert seen["timeMin"].startswith("2025-05-25T00:00:00")
    assert seen["timeMax"].startswith("2025-07-07T00:00:00")
