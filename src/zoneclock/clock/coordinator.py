"""TimeCoordinator: owns the moment and keeps its views in step.

The moment is an epoch in milliseconds. Derived from it, under the primary
zone, are a wall-clock tuple and a coarser calendar value. Edits may arrive
from either side:

  - ``time = ms`` moves the moment and recomputes the wall clock. The
    calendar is republished only when the visible day changes.
  - ``calendar = CalendarDate(...)`` is read in the primary zone and
    becomes a new moment.
  - changing the primary zone keeps the moment and re-renders it.

A second, comparison zone slot renders the same moment and never moves it.
Live tracking runs an asyncio task that assigns the current time on every
tick until it is switched off or the coordinator is closed.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Callable

from ..zones.types import LMT, OS, UT
from .lmt import resolve_lmt_longitude
from .types import CalendarDate, WallClockTime
from .zones import ZoneHandle, epoch_for, resolve_zone, wall_time_for

logger = logging.getLogger(__name__)

PRIMARY = 0
COMPARISON = 1

DEFAULT_TICK_INTERVAL = 0.25


def now_ms() -> int:
    return time.time_ns() // 1_000_000


class TimeCoordinator:
    """Synchronizes epoch, wall-clock and calendar views of one moment."""

    def __init__(
        self,
        *,
        primary_zone: str = OS,
        comparison_zone: str = UT,
        tick_interval: float = DEFAULT_TICK_INTERVAL,
        clock: Callable[[], int] = now_ms,
        initial_time: int | None = None,
    ) -> None:
        self._tick_interval = tick_interval
        self._clock = clock

        self._zone_name = ["", ""]
        self._time_zone: list[ZoneHandle] = [resolve_zone(OS), resolve_zone(UT)]
        self._longitude = 0.0
        self._lmt_longitude = 0.0

        self._time = clock() if initial_time is None else initial_time
        self._wall_time = wall_time_for(self._time_zone[PRIMARY], self._time)
        self._calendar = CalendarDate.from_wall_time(self._wall_time)

        self._track_time = False
        self._timer_task: asyncio.Task[None] | None = None
        self._calendar_listeners: list[Callable[[CalendarDate], None]] = []

        self.disabled = [False, False]
        self.error = ["", ""]
        self.show_longitude = False

        self.set_zone_name(primary_zone, PRIMARY)
        self.set_zone_name(comparison_zone, COMPARISON)

    # --- Zones ---

    def zone_name(self, slot: int) -> str:
        return self._zone_name[slot]

    def time_zone(self, slot: int) -> ZoneHandle:
        return self._time_zone[slot]

    def set_zone_name(self, new_zone: str | None, slot: int) -> None:
        """Bind *slot* to a canonical zone identifier.

        Empty or unchanged identifiers are ignored. Rebinding the primary
        slot re-renders the same moment in the new zone.
        """
        if not new_zone or self._zone_name[slot] == new_zone:
            return

        self._zone_name[slot] = new_zone
        handle = resolve_zone(new_zone, self._lmt_longitude)
        self._time_zone[slot] = handle
        self.error[slot] = handle.error
        self.show_longitude = LMT in self._zone_name
        logger.debug("Zone slot %d -> %s", slot, new_zone)

        if slot == PRIMARY:
            self._wall_time = wall_time_for(handle, self._time)
        self._update_calendar()

    # --- Longitude (Local Mean Time) ---

    @property
    def longitude(self) -> float:
        return self._longitude

    @longitude.setter
    def longitude(self, new_longitude: float | None) -> None:
        if self._longitude == new_longitude:
            return
        self._longitude = new_longitude or 0.0

        lmt_longitude = resolve_lmt_longitude(new_longitude)
        if self._lmt_longitude == lmt_longitude:
            return
        self._lmt_longitude = lmt_longitude

        for slot in (PRIMARY, COMPARISON):
            if self._zone_name[slot] == LMT:
                self._time_zone[slot] = resolve_zone(LMT, lmt_longitude)

        if self._zone_name[PRIMARY] == LMT:
            self._wall_time = wall_time_for(self._time_zone[PRIMARY], self._time)
            self._update_calendar()

    @property
    def lmt_longitude(self) -> float:
        return self._lmt_longitude

    # --- Moment ---

    @property
    def time(self) -> int:
        return self._time

    @time.setter
    def time(self, new_time: int) -> None:
        if self._time == new_time:
            return
        self._time = new_time
        self._wall_time = wall_time_for(self._time_zone[PRIMARY], new_time)

        if self._calendar.ymd != self._wall_time.ymd:
            self._update_calendar()

    @property
    def wall_time(self) -> WallClockTime:
        return self._wall_time

    def wall_time_at(self, slot: int) -> WallClockTime:
        """The current moment rendered in *slot*'s zone."""
        if slot == PRIMARY:
            return self._wall_time
        return wall_time_for(self._time_zone[slot], self._time)

    @property
    def calendar(self) -> CalendarDate:
        return self._calendar

    @calendar.setter
    def calendar(self, new_calendar: CalendarDate) -> None:
        if self._calendar == new_calendar:
            return
        self._calendar = new_calendar
        self.time = epoch_for(self._time_zone[PRIMARY], new_calendar.to_wall_time())

    def add_calendar_listener(self, fn: Callable[[CalendarDate], None]) -> None:
        self._calendar_listeners.append(fn)

    def _update_calendar(self) -> None:
        self._calendar = CalendarDate.from_wall_time(self._wall_time)
        for fn in self._calendar_listeners:
            fn(self._calendar)

    def set_to_now(self) -> None:
        self.time = self._clock()

    # --- Live tracking ---

    @property
    def track_time(self) -> bool:
        return self._track_time

    @track_time.setter
    def track_time(self, value: bool) -> None:
        if self._track_time == value:
            return

        if value:
            # Raises RuntimeError outside a running loop; state stays untouched
            loop = asyncio.get_running_loop()
            self._timer_task = loop.create_task(self._tick_loop())
            self._track_time = True
            logger.debug("Live clock started (every %.3fs)", self._tick_interval)
        else:
            self._track_time = False
            self._stop_timer()

    async def _tick_loop(self) -> None:
        while True:
            await asyncio.sleep(self._tick_interval)
            self.time = self._clock()

    def _stop_timer(self) -> None:
        if self._timer_task:
            self._timer_task.cancel()
            self._timer_task = None
            logger.debug("Live clock stopped")

    async def close(self) -> None:
        """Stop live tracking and wait for the tick task to finish."""
        self._track_time = False
        task = self._timer_task
        self._stop_timer()
        if task:
            try:
                await task
            except asyncio.CancelledError:
                pass
