"""Zone catalog construction: base IANA regions plus the synthetic pseudo-regions."""

from __future__ import annotations

import logging
from types import MappingProxyType

from .types import (
    LMT,
    LMT_OPTION,
    MISC,
    MISC_OPTION,
    OS,
    OS_OPTION,
    UT,
    UT_OPTION,
    RegionAndSubzones,
    ZoneCatalog,
)

logger = logging.getLogger(__name__)

MIN_UTC_OFFSET_HOURS = -12
MAX_UTC_OFFSET_HOURS = 14


def utc_offset_subzones() -> list[str]:
    """Return the whole-hour offset identifiers from UT-12:00 to UT+14:00."""
    offsets: list[str] = []
    for h in range(MIN_UTC_OFFSET_HOURS, MAX_UTC_OFFSET_HOURS + 1):
        if h == 0:
            offsets.append(UT)
        else:
            offsets.append(f"{UT}{'+' if h > 0 else '-'}{abs(h):02d}:00")
    return offsets


def identifier_for(region: str, subzone: str) -> str:
    """Flat identifier of a base catalog entry (MISC entries carry no prefix)."""
    zone = subzone.replace(" ", "_")
    return zone if region == MISC else f"{region}/{zone}"


def build_catalog(base: list[RegionAndSubzones]) -> ZoneCatalog:
    """Augment *base* with the synthetic regions and index it.

    The base list is left untouched. Its ``MISC`` bucket is relabelled for
    display while its identifiers stay prefix-free.
    """
    identifiers: set[str] = set()
    for entry in base:
        for subzone in entry.subzones:
            identifiers.add(identifier_for(entry.region, subzone))

    hour_offsets = utc_offset_subzones()
    identifiers.update(hour_offsets)
    identifiers.update((OS, LMT))

    regions = [
        RegionAndSubzones(
            MISC_OPTION if entry.region == MISC else entry.region,
            list(entry.subzones),
        )
        for entry in base
    ]
    regions.append(RegionAndSubzones(UT_OPTION, hour_offsets))
    regions.append(RegionAndSubzones(OS_OPTION, []))
    regions.append(RegionAndSubzones(LMT_OPTION, []))

    subzones_by_region = {r.region: tuple(r.subzones) for r in regions}
    logger.debug(
        "Built zone catalog: %d region(s), %d identifier(s)",
        len(regions),
        len(identifiers),
    )
    return ZoneCatalog(
        identifiers=frozenset(identifiers),
        subzones_by_region=MappingProxyType(subzones_by_region),
        regions=tuple(r.region for r in regions),
    )
