"""Default base catalog: IANA zones grouped into picker regions.

Groups the identifiers known to ``zoneinfo`` by region, dropping legacy
aliases and region-less names except for a handful of classic zones that
have no better home. Those land in the ``MISC`` bucket verbatim.
"""

from __future__ import annotations

import functools
import logging
import re
from collections.abc import Iterable
from zoneinfo import available_timezones

from .types import MISC, RegionAndSubzones

logger = logging.getLogger(__name__)

_SKIPPED_ZONES = re.compile(r"America/Indianapolis|America/Knox_IN|Asia/Riyadh\d\d")

_EXTENDED_REGIONS = re.compile(r"(America/Argentina|America/Indiana)/(.+)")

_SKIPPED_REGIONS = re.compile(
    r"Etc|GB|GB-Eire|GMT0|NZ|NZ-CHAT|SystemV|W-SU|Zulu|Mideast|[A-Z]{3}(\d[A-Z]{3})?"
)

_MISC_UNIQUE = re.compile(
    r"CST6CDT|EET|EST5EDT|MST7MDT|PST8PDT|SystemV/AST4ADT|SystemV/CST6CDT|"
    r"SystemV/EST5EDT|SystemV/MST7MDT|SystemV/PST8PDT|SystemV/YST9YDT|WET"
)

# Directory trees some system zoneinfo installs expose alongside the real zones
_NON_ZONE_PREFIXES = ("posix/", "right/")


def _split_zone(zone_id: str) -> tuple[str, str | None]:
    """Split *zone_id* into (region, remainder); remainder is None if bare."""
    m = _EXTENDED_REGIONS.fullmatch(zone_id)
    if m:
        return m.group(1), m.group(2)
    region, sep, rest = zone_id.partition("/")
    return region, (rest if sep else None)


def group_zones(zone_ids: Iterable[str]) -> list[RegionAndSubzones]:
    """Group *zone_ids* into regions, MISC first, the rest alphabetical."""
    grouped: dict[str, list[str]] = {}
    for zone_id in sorted(set(zone_ids)):
        if zone_id.startswith(_NON_ZONE_PREFIXES) or _SKIPPED_ZONES.fullmatch(zone_id):
            continue
        if _MISC_UNIQUE.fullmatch(zone_id):
            grouped.setdefault(MISC, []).append(zone_id)
            continue
        region, subzone = _split_zone(zone_id)
        if subzone is None or _SKIPPED_REGIONS.fullmatch(region):
            continue
        grouped.setdefault(region, []).append(subzone.replace("_", " "))

    result: list[RegionAndSubzones] = []
    if MISC in grouped:
        result.append(RegionAndSubzones(MISC, grouped.pop(MISC)))
    for region in sorted(grouped):
        result.append(RegionAndSubzones(region, grouped[region]))
    return result


@functools.lru_cache(maxsize=1)
def _system_catalog() -> tuple[tuple[str, tuple[str, ...]], ...]:
    zones = available_timezones()
    logger.debug("zoneinfo reports %d time zone(s)", len(zones))
    return tuple((r.region, tuple(r.subzones)) for r in group_zones(zones))


def load_base_catalog(zone_ids: Iterable[str] | None = None) -> list[RegionAndSubzones]:
    """Return the base catalog for *zone_ids*, or for the system zone database.

    The system catalog is computed once per process; each call returns fresh
    lists so callers may modify them freely.
    """
    if zone_ids is not None:
        return group_zones(zone_ids)
    return [RegionAndSubzones(region, list(subzones)) for region, subzones in _system_catalog()]
