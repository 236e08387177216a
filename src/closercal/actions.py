from __future__ import annotations
from dataclasses import dataclass
from datetime import date
from typing import Callable, Optional

from .models import Event


class ReadOnlyEventError(RuntimeError):
    """Raised when an edit or delete is requested for an external (read-only) event."""


@dataclass
class AgendaActions:
    """Callbacks the rendering layer invokes on user interaction.

    The engine never navigates or persists anything itself.
    """
    on_event_selected: Optional[Callable[[Event], None]] = None
    on_request_create: Optional[Callable[[date, Optional[str]], None]] = None
    on_request_edit: Optional[Callable[[Event], None]] = None
    on_request_delete: Optional[Callable[[Event], None]] = None

    def select(self, event: Event) -> None:
        if self.on_event_selected:
            self.on_event_selected(event)

    def create(self, day: date, time_slot: Optional[str] = None) -> None:
        if self.on_request_create:
            self.on_request_create(day, time_slot)

    def edit(self, event: Event) -> None:
        if event.read_only:
            raise ReadOnlyEventError(f"event {event.id!r} comes from an external calendar")
        if self.on_request_edit:
            self.on_request_edit(event)

    def delete(self, event: Event) -> None:
        if event.read_only:
            raise ReadOnlyEventError(f"event {event.id!r} comes from an external calendar")
        if self.on_request_delete:
            self.on_request_delete(event)
