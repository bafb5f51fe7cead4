"""Tests for the zoneclock command line."""

from __future__ import annotations

import pytest

from zoneclock.clock.types import CalendarDate
from zoneclock.main import _build_parser, _run, parse_at
from zoneclock.zones.types import LMT_OPTION, MISC_OPTION, OS_OPTION, UT_OPTION


class TestParseAt:
    def test_date_only_is_noon(self):
        cal = parse_at("2024-06-15")
        assert cal == CalendarDate(2024, 6, 15)
        assert cal.to_wall_time().hrs == 12

    def test_date_and_time(self):
        assert parse_at("2024-06-15T08:30") == CalendarDate(2024, 6, 15, 8, 30, 0)

    def test_seconds(self):
        assert parse_at("2024-06-15T08:30:45") == CalendarDate(2024, 6, 15, 8, 30, 45)

    def test_invalid(self):
        with pytest.raises(ValueError):
            parse_at("15/06/2024")


async def _main(capsys, *argv: str) -> tuple[int, str]:
    rc = await _run(_build_parser().parse_args(list(argv)))
    return rc, capsys.readouterr().out


class TestRun:
    async def test_list_regions(self, capsys):
        rc, out = await _main(capsys, "--list-regions", "--no-geo")
        regions = out.splitlines()
        assert rc == 0
        assert regions[0] == MISC_OPTION
        assert regions[-3:] == [UT_OPTION, OS_OPTION, LMT_OPTION]
        assert "Europe" in regions

    async def test_list_zones(self, capsys):
        rc, out = await _main(capsys, "--list-zones", "Europe", "--no-geo")
        assert rc == 0
        assert "Paris" in out.splitlines()

    async def test_list_zones_unknown_region(self, capsys):
        rc, out = await _main(capsys, "--list-zones", "Atlantis", "--no-geo")
        assert rc == 1
        assert "No subzones" in out

    async def test_epoch_in_two_zones(self, capsys):
        rc, out = await _main(
            capsys,
            "--zone", "UT", "--compare", "Asia/Tokyo", "--epoch", "1704067200000", "--no-geo",
        )
        assert rc == 0
        assert "Epoch    1704067200000" in out
        assert "2024-01-01 00:00:00" in out
        assert "2024-01-01 09:00:00" in out

    async def test_at_in_primary_zone(self, capsys):
        rc, out = await _main(
            capsys, "--zone", "Asia/Tokyo", "--compare", "UT", "--at", "2024-01-01T09:00", "--no-geo"
        )
        assert rc == 0
        assert "Epoch    1704067200000" in out

    async def test_lmt_label(self, capsys):
        rc, out = await _main(
            capsys, "--zone", "LMT", "--longitude", "10.2", "--epoch", "0", "--no-geo"
        )
        assert rc == 0
        assert "LMT 10.25°E" in out
        assert "1970-01-01 00:41:00" in out

    async def test_invalid_at(self, capsys):
        rc, out = await _main(capsys, "--zone", "UT", "--at", "yesterday", "--no-geo")
        assert rc == 1
        assert "invalid date/time" in out

    async def test_bad_settings(self, capsys, monkeypatch):
        monkeypatch.setenv("ZONECLOCK_LONGITUDE", "999")
        rc, out = await _main(capsys, "--list-regions")
        assert rc == 1
        assert "out of range" in out

    async def test_track_seconds_from_settings(self, capsys, monkeypatch, tmp_path):
        (tmp_path / "settings.toml").write_text(
            '[clock]\nprimary_zone = "UT"\ntrack_time = true\ntrack_seconds = 0.05\n'
        )
        monkeypatch.setenv("ZONECLOCK_DIR", str(tmp_path))
        rc, out = await _main(capsys, "--no-geo")
        assert rc == 0
        assert out.count("Epoch") >= 2

    async def test_no_tracking_prints_once(self, capsys):
        rc, out = await _main(capsys, "--zone", "UT", "--epoch", "0", "--no-geo")
        assert rc == 0
        assert out.count("Epoch") == 1
