"""Value types for wall-clock and calendar views of a moment."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class WallClockTime:
    """Local date and time of a moment in a particular zone."""

    y: int
    m: int
    d: int
    hrs: int = 12
    min: int = 0
    sec: int = 0

    @property
    def ymd(self) -> tuple[int, int, int]:
        return self.y, self.m, self.d


@dataclass(frozen=True)
class CalendarDate:
    """Calendar value exchanged with date displays.

    Time-of-day fields are optional. When a CalendarDate is assigned, a
    missing hour means noon and a missing minute or second means zero.
    """

    y: int
    m: int
    d: int
    hrs: int | None = None
    min: int | None = None
    sec: int | None = None

    @property
    def ymd(self) -> tuple[int, int, int]:
        return self.y, self.m, self.d

    def to_wall_time(self) -> WallClockTime:
        return WallClockTime(
            self.y,
            self.m,
            self.d,
            12 if self.hrs is None else self.hrs,
            self.min or 0,
            self.sec or 0,
        )

    @classmethod
    def from_wall_time(cls, wall: WallClockTime) -> CalendarDate:
        return cls(wall.y, wall.m, wall.d, wall.hrs, wall.min, wall.sec)
