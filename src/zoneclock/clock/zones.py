"""Zone resolution and epoch/wall-clock conversion.

The only place where UTC offsets are applied. Canonical identifiers map to
``tzinfo`` objects as follows:

  - ``OS``: the host's zone (TZ env var, /etc/localtime, /etc/timezone).
  - ``LMT``: a fixed offset derived from the resolved LMT longitude.
  - ``UT`` / ``UT+HH:00`` / ``UT-HH:00``: fixed whole-hour offsets.
  - anything else: an IANA zone via ``zoneinfo``.

Conversions are limited to the ``datetime`` range (years 1 to 9999);
moments outside it are clamped.
"""

from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone, tzinfo
from pathlib import Path
from zoneinfo import ZoneInfo

from ..zones.types import LMT, OS, UT
from .lmt import format_longitude, lmt_offset_minutes
from .types import WallClockTime

logger = logging.getLogger(__name__)

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_ONE_MS = timedelta(milliseconds=1)

# One day inside the datetime range so any zone offset stays representable
MIN_EPOCH_MS = (datetime(1, 1, 2, tzinfo=timezone.utc) - EPOCH) // _ONE_MS
MAX_EPOCH_MS = (datetime(9999, 12, 30, tzinfo=timezone.utc) - EPOCH) // _ONE_MS

_UT_OFFSET = re.compile(r"UT([+-])(\d\d):(\d\d)")

_cached_os_zone: tzinfo | None = None


@dataclass(frozen=True)
class ZoneHandle:
    """A resolved zone. ``error`` is set when the identifier was not usable."""

    identifier: str
    tzinfo: tzinfo
    error: str = ""


def _detect_os_zone_name() -> str | None:
    # TZ environment variable
    tz = os.environ.get("TZ")
    if tz and "/" in tz:
        return tz.lstrip(":")
    # macOS/Linux: resolve /etc/localtime symlink
    try:
        link = os.readlink("/etc/localtime")
        if "zoneinfo/" in link:
            return link.split("zoneinfo/", 1)[1]
    except OSError:
        pass
    # Debian-style /etc/timezone file
    try:
        name = Path("/etc/timezone").read_text().strip()
        if name:
            return name
    except OSError:
        pass
    return None


def os_zone() -> tzinfo:
    """Return the host's zone, detected once per process."""
    global _cached_os_zone
    if _cached_os_zone is not None:
        return _cached_os_zone
    name = _detect_os_zone_name()
    if name:
        try:
            _cached_os_zone = ZoneInfo(name)
            return _cached_os_zone
        except (KeyError, ValueError):
            logger.warning("OS time zone %r is not in the zone database", name)
    # Fixed offset of the interpreter's local time
    _cached_os_zone = datetime.now().astimezone().tzinfo or timezone.utc
    return _cached_os_zone


def _fixed_offset(minutes: int, name: str) -> tzinfo:
    if minutes == 0 and name == UT:
        return timezone.utc
    return timezone(timedelta(minutes=minutes), name)


def resolve_zone(identifier: str, lmt_longitude: float = 0.0) -> ZoneHandle:
    """Resolve a canonical identifier. Unknown zones fall back to UTC."""
    if identifier == OS:
        return ZoneHandle(OS, os_zone())
    if identifier == LMT:
        name = f"LMT {format_longitude(lmt_longitude)}"
        return ZoneHandle(LMT, _fixed_offset(lmt_offset_minutes(lmt_longitude), name))
    if identifier == UT:
        return ZoneHandle(UT, _fixed_offset(0, UT))

    m = _UT_OFFSET.fullmatch(identifier)
    if m:
        sign = -1 if m.group(1) == "-" else 1
        minutes = sign * (int(m.group(2)) * 60 + int(m.group(3)))
        return ZoneHandle(identifier, _fixed_offset(minutes, identifier))

    try:
        return ZoneHandle(identifier, ZoneInfo(identifier))
    except (KeyError, ValueError):
        logger.warning("Unknown time zone: %s, using UT", identifier)
        return ZoneHandle(
            identifier, timezone.utc, error=f"Unknown time zone: {identifier}"
        )


def clamp_epoch(epoch_ms: int) -> int:
    if epoch_ms < MIN_EPOCH_MS or epoch_ms > MAX_EPOCH_MS:
        logger.debug("Epoch %d outside the supported range, clamping", epoch_ms)
        return min(max(epoch_ms, MIN_EPOCH_MS), MAX_EPOCH_MS)
    return epoch_ms


def wall_time_for(zone: ZoneHandle, epoch_ms: int) -> WallClockTime:
    """Local wall-clock time of *epoch_ms* in *zone*."""
    dt = (EPOCH + clamp_epoch(epoch_ms) * _ONE_MS).astimezone(zone.tzinfo)
    return WallClockTime(dt.year, dt.month, dt.day, dt.hour, dt.minute, dt.second)


def epoch_for(zone: ZoneHandle, wall: WallClockTime) -> int:
    """Epoch milliseconds of *wall* read as local time in *zone*.

    Out-of-range fields roll over into the next larger unit (month 13 is
    January of the following year, day 0 is the last day of the previous
    month). Skipped local times resolve with ``fold=0``.
    """
    year = wall.y + (wall.m - 1) // 12
    month = (wall.m - 1) % 12 + 1
    if not 1 <= year <= 9999:
        logger.debug("Year %d outside the supported range, clamping", year)
        return MIN_EPOCH_MS if year < 1 else MAX_EPOCH_MS

    start = datetime(year, month, 1, tzinfo=zone.tzinfo)
    try:
        dt = start + timedelta(
            days=wall.d - 1, hours=wall.hrs, minutes=wall.min, seconds=wall.sec
        )
    except OverflowError:
        return MIN_EPOCH_MS if wall.d < 1 else MAX_EPOCH_MS
    return clamp_epoch((dt - EPOCH) // _ONE_MS)
