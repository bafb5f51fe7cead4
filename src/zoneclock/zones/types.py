"""Data models for zone catalogs and selections."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field

# Display labels for the synthetic regions shown in a region picker
MISC_OPTION = "- Miscellaneous -"
UT_OPTION = "- UTC hour offsets -"
OS_OPTION = "- Your OS time zone -"
LMT_OPTION = "- Local Mean Time -"

SENTINEL_REGIONS = frozenset({MISC_OPTION, UT_OPTION, OS_OPTION, LMT_OPTION})

# Canonical identifiers (MISC is the base catalog's no-region bucket name)
MISC = "MISC"
UT = "UT"
OS = "OS"
LMT = "LMT"


@dataclass
class RegionAndSubzones:
    """One region of a base catalog with its subzones in display order."""

    region: str
    subzones: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class ZoneCatalog:
    """Immutable region/subzone catalog, built once at startup.

    ``identifiers`` holds every legal canonical zone identifier, real and
    synthetic. ``subzones_by_region`` maps each display region to its
    subzones; index 0 is that region's default.
    """

    identifiers: frozenset[str]
    subzones_by_region: Mapping[str, tuple[str, ...]]
    regions: tuple[str, ...]

    def subzones_for(self, region: str | None) -> tuple[str, ...]:
        if region is None:
            return ()
        return self.subzones_by_region.get(region, ())

    def is_known(self, identifier: str | None) -> bool:
        return identifier is not None and identifier in self.identifiers


@dataclass(frozen=True)
class ZoneSelection:
    """Snapshot of a selector: region, subzone and the derived identifier."""

    region: str | None
    subzone: str | None
    identifier: str | None
