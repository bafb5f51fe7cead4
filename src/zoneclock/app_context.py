"""AppContext: bundles config with the catalog and the engine instances.

The catalog is built once here and passed by reference to every consumer
(both zone selectors and the geolocation service); nothing mutates it
afterwards. Each selector's change callback is bound to its zone slot on
the coordinator, so picking a zone re-renders the shared moment.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

from .clock.coordinator import COMPARISON, PRIMARY, TimeCoordinator, now_ms
from .geolocation import GeolocationService
from .settings import AppConfig
from .zones.catalog import build_catalog
from .zones.selector import ZoneSelector
from .zones.source import load_base_catalog
from .zones.types import OS, RegionAndSubzones, ZoneCatalog

logger = logging.getLogger(__name__)


@dataclass
class AppContext:
    """Runtime context for one zone clock."""

    config: AppConfig
    catalog: ZoneCatalog
    coordinator: TimeCoordinator
    selectors: tuple[ZoneSelector, ZoneSelector]
    geolocation: GeolocationService | None = None

    @property
    def primary(self) -> ZoneSelector:
        return self.selectors[PRIMARY]

    @property
    def comparison(self) -> ZoneSelector:
        return self.selectors[COMPARISON]

    async def apply_suggested_zone(self) -> str | None:
        """Move the primary slot to the geolocated zone, if one is found.

        Only done while the primary slot is still on the OS default.
        """
        if self.geolocation is None or self.coordinator.zone_name(PRIMARY) != OS:
            return None
        zone = await self.geolocation.suggest_zone()
        if zone:
            self.primary.value = zone
        return zone

    async def close(self) -> None:
        for selector in self.selectors:
            selector.close()
        await self.coordinator.close()


def _slot_binding(coordinator: TimeCoordinator, slot: int) -> Callable[[str | None], None]:
    def on_change(zone: str | None) -> None:
        coordinator.set_zone_name(zone, slot)

    return on_change


def create_app_context(
    cfg: AppConfig,
    *,
    base_catalog: list[RegionAndSubzones] | None = None,
    clock: Callable[[], int] = now_ms,
) -> AppContext:
    """Build the catalog, coordinator and selectors described by *cfg*."""
    catalog = build_catalog(base_catalog if base_catalog is not None else load_base_catalog())

    coordinator = TimeCoordinator(
        primary_zone=cfg.primary_zone,
        comparison_zone=cfg.comparison_zone,
        tick_interval=cfg.tick_interval,
        clock=clock,
    )
    coordinator.longitude = cfg.longitude

    selectors = (ZoneSelector(catalog), ZoneSelector(catalog))
    for slot, selector in enumerate(selectors):
        configured = coordinator.zone_name(slot)
        selector.write_value(configured)
        if selector.value != configured:
            logger.warning("Malformed zone %r, using %s", configured, selector.value)
            coordinator.set_zone_name(selector.value, slot)
        selector.register_on_change(_slot_binding(coordinator, slot))

    geolocation = None
    if cfg.geolocation_enabled:
        geolocation = GeolocationService(
            catalog.identifiers,
            url=cfg.geolocation_url,
            timeout=cfg.geolocation_timeout,
        )

    logger.info(
        "Zone clock ready: primary=%s comparison=%s (%d zones)",
        coordinator.zone_name(PRIMARY),
        coordinator.zone_name(COMPARISON),
        len(catalog.identifiers),
    )
    return AppContext(
        config=cfg,
        catalog=catalog,
        coordinator=coordinator,
        selectors=selectors,
        geolocation=geolocation,
    )
