from datetime import date, datetime

from closercal.agenda import build_agenda
from closercal.normalize import normalize_all
from closercal.views import AgendaState, ViewMode

H = 80


def _events():
    local = [
        {"id": 1, "date": "2025-06-01", "time": "09:00 - 10:00", "category": "call", "title": "a", "contact": "A"},
        {"id": 2, "date": "2025-06-01", "time": "23:30 - 00:15", "category": "video", "title": "b", "contact": "B"},
        {"id": 3, "date": "2025-06-02", "time": "10:00 - 10:20", "category": "meeting", "title": "c", "contact": "C"},
    ]
    external = [{"id": "g1", "title": "Holiday", "start": "2025-06-02", "end": "2025-06-03", "allDay": True}]
    events, _ = normalize_all(local, external)
    return events


def test_three_day_view_columns_blocks_and_continuations():
    state = AgendaState(anchor=date(2025, 6, 1), mode=ViewMode.THREE_DAY)

    view = build_agenda(state, _events(), now=datetime(2025, 6, 2, 14, 23), hour_height=H)

    first, second, third = view.columns
    assert [b.event.id for b in first.blocks] == [1, 2]
    assert first.blocks[1].height == 0.5 * H
    assert [b.event.id for b in second.continuations] == [2]
    assert second.continuations[0].height == 0.25 * H
    assert [e.id for e in second.all_day] == ["g1"]
    assert second.blocks[0].is_short
    assert third.blocks == []


def test_now_line_only_on_today_column():
    state = AgendaState(anchor=date(2025, 6, 1), mode=ViewMode.THREE_DAY)

    view = build_agenda(state, _events(), now=datetime(2025, 6, 2, 14, 23), hour_height=H)

    assert [c.is_today for c in view.columns] == [False, True, False]
    assert view.columns[0].now_percent is None
    assert round(view.today_column.now_percent, 1) == 59.9


def test_day_view_picks_up_carry_over_from_previous_day():
    state = AgendaState(anchor=date(2025, 6, 2), mode=ViewMode.DAY)

    view = build_agenda(state, _events(), now=datetime(2025, 7, 1, 8, 0), hour_height=H)

    assert len(view.columns) == 1
    assert [b.event.id for b in view.columns[0].continuations] == [2]
    assert view.today_column is None


def test_month_view_marks_outside_days_and_previews():
    state = AgendaState(anchor=date(2025, 6, 15), mode=ViewMode.MONTH)

    view = build_agenda(state, _events(), now=datetime(2025, 6, 2, 9, 0), month_preview_limit=1)

    assert len(view.columns) == 42
    assert view.columns[0].date == date(2025, 5, 26)
    assert not view.columns[0].in_month
    june_first = next(c for c in view.columns if c.date == date(2025, 6, 1))
    assert [e.id for e in june_first.preview] == [1]
    assert june_first.hidden_count == 1
    assert june_first.blocks == []
