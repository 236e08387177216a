from datetime import date

import pytest

from closercal.actions import AgendaActions, ReadOnlyEventError
from closercal.models import Event


def _event(source: str) -> Event:
    return Event(id=7, title="Sync", date=date(2025, 6, 1), source=source, category="meeting", start_minutes=600, end_minutes=660)


def test_callbacks_receive_events():
    calls = []
    actions = AgendaActions(
        on_event_selected=lambda e: calls.append(("select", e.id)),
        on_request_create=lambda d, slot: calls.append(("create", d, slot)),
        on_request_edit=lambda e: calls.append(("edit", e.id)),
        on_request_delete=lambda e: calls.append(("delete", e.id)),
    )
    local = _event("local")

    actions.select(local)
    actions.create(date(2025, 6, 1), "09:00")
    actions.edit(local)
    actions.delete(local)

    assert calls == [("select", 7), ("create", date(2025, 6, 1), "09:00"), ("edit", 7), ("delete", 7)]


def test_external_events_are_read_only():
    deleted = []
    actions = AgendaActions(on_request_delete=deleted.append, on_request_edit=deleted.append)
    external = _event("external")

    with pytest.raises(ReadOnlyEventError):
        actions.delete(external)
    with pytest.raises(ReadOnlyEventError):
        actions.edit(external)
    assert deleted == []


def test_missing_callbacks_are_noops():
    actions = AgendaActions()

    actions.select(_event("external"))
    actions.create(date(2025, 6, 1))
    actions.edit(_event("local"))
