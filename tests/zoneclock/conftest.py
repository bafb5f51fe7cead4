"""Shared fixtures: a small base catalog shaped like the real one."""

import pytest

from zoneclock.zones.catalog import build_catalog
from zoneclock.zones.types import MISC, RegionAndSubzones, ZoneCatalog


def sample_base_catalog() -> list[RegionAndSubzones]:
    return [
        RegionAndSubzones(MISC, ["CST6CDT", "EST5EDT", "SystemV/AST4ADT", "WET"]),
        RegionAndSubzones("America", ["Chicago", "Kentucky/Louisville", "New York", "Port-au-Prince"]),
        RegionAndSubzones("America/Argentina", ["Buenos Aires", "Cordoba", "Ushuaia"]),
        RegionAndSubzones("America/Indiana", ["Indianapolis", "Knox", "Tell City"]),
        RegionAndSubzones("Asia", ["Kolkata", "Taipei", "Tokyo"]),
        RegionAndSubzones("Europe", ["Berlin", "London", "Paris"]),
    ]


@pytest.fixture
def base_catalog() -> list[RegionAndSubzones]:
    return sample_base_catalog()


@pytest.fixture
def catalog(base_catalog: list[RegionAndSubzones]) -> ZoneCatalog:
    return build_catalog(base_catalog)
