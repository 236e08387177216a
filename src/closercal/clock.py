from __future__ import annotations
import asyncio
from datetime import datetime
import logging
from typing import Callable, Optional
from zoneinfo import ZoneInfo

log = logging.getLogger(__name__)

MINUTES_PER_DAY = 24 * 60
TICK_SECONDS_DEFAULT = 60


def current_position_percent(now: Optional[datetime] = None, tz: Optional[ZoneInfo] = None) -> float:
    if now is None:
        now = datetime.now(tz=tz)
    return (now.hour * 60 + now.minute) / MINUTES_PER_DAY * 100


class CurrentTimeTicker:
    """Recomputes the now-line position on a fixed interval.

    Owned by a view: use as ``async with`` so the task is always cancelled on exit.
    """

    def __init__(
        self,
        on_tick: Callable[[float], None],
        interval: float = TICK_SECONDS_DEFAULT,
        tz: Optional[ZoneInfo] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        self.on_tick = on_tick
        self.interval = interval
        self.tz = tz
        self._clock = clock or (lambda: datetime.now(tz=self.tz))
        self._task: Optional[asyncio.Task] = None
        self.position: Optional[float] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def tick(self) -> float:
        self.position = current_position_percent(self._clock())
        self.on_tick(self.position)
        return self.position

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self.interval)
            try:
                self.tick()
            except Exception:
                log.exception("Current time tick failed")

    def start(self) -> None:
        if self.running:
            return
        self.tick()
        self._task = asyncio.get_running_loop().create_task(self._run())

    async def stop(self) -> None:
        task, self._task = self._task, None
        if task is None:
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            # Only absorb our own cancellation of the tick task.
            current = asyncio.current_task()
            if not task.cancelled() or (current is not None and current.cancelling()):
                raise

    async def __aenter__(self) -> "CurrentTimeTicker":
        self.start()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.stop()
