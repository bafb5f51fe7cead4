"""Tests for grouping IANA identifiers into picker regions."""

from zoneclock.zones.catalog import build_catalog
from zoneclock.zones.codec import decode, encode
from zoneclock.zones.source import group_zones, load_base_catalog
from zoneclock.zones.types import MISC

ZONES = [
    "America/New_York",
    "America/Argentina/Buenos_Aires",
    "America/Indiana/Knox",
    "America/Indianapolis",
    "America/Knox_IN",
    "America/Kentucky/Louisville",
    "Asia/Riyadh87",
    "Asia/Tokyo",
    "EST5EDT",
    "Etc/GMT+5",
    "GB",
    "Cuba",
    "UTC",
    "US/Eastern",
    "posix/Europe/Paris",
    "WET",
]


def _as_dict(zone_ids):
    return {r.region: r.subzones for r in group_zones(zone_ids)}


class TestGroupZones:
    def test_misc_first(self):
        regions = [r.region for r in group_zones(ZONES)]
        assert regions[0] == MISC
        assert regions[1:] == sorted(regions[1:])

    def test_extended_regions(self):
        grouped = _as_dict(ZONES)
        assert grouped["America/Argentina"] == ["Buenos Aires"]
        assert grouped["America/Indiana"] == ["Knox"]

    def test_underscores_become_spaces(self):
        grouped = _as_dict(ZONES)
        assert "New York" in grouped["America"]
        assert "Kentucky/Louisville" in grouped["America"]

    def test_skipped_zones(self):
        grouped = _as_dict(ZONES)
        assert "Indianapolis" not in grouped["America"]
        assert "Knox IN" not in grouped["America"]
        assert "Riyadh87" not in grouped.get("Asia", [])

    def test_skipped_regions_and_bare_names(self):
        grouped = _as_dict(ZONES)
        assert "Etc" not in grouped
        assert "GB" not in grouped
        assert "Cuba" not in grouped.get(MISC, [])
        assert "UTC" not in grouped.get(MISC, [])
        assert "posix" not in grouped

    def test_misc_unique_kept(self):
        grouped = _as_dict(ZONES)
        assert grouped[MISC] == ["EST5EDT", "WET"]

    def test_other_regions_kept(self):
        assert _as_dict(ZONES)["US"] == ["Eastern"]


class TestLoadBaseCatalog:
    def test_explicit_zone_ids(self):
        regions = [r.region for r in load_base_catalog(["Europe/Paris"])]
        assert regions == ["Europe"]

    def test_system_catalog_round_trips(self):
        catalog = build_catalog(load_base_catalog())
        assert "Europe/Paris" in catalog.identifiers
        for zone in catalog.identifiers:
            assert encode(*decode(zone)) == zone

    def test_returns_fresh_lists(self):
        first = load_base_catalog()
        first[0].subzones.clear()
        second = load_base_catalog()
        assert second[0].subzones
