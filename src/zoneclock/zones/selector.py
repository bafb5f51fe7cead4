"""ZoneSelector: region/subzone selection state behind a two-level zone picker.

Holds the selected region and subzone, derives the canonical identifier
from them, and remembers the last subzone picked in each region so that
revisiting a region restores it.

Binding contract for the owning form control:
  - ``write_value()`` accepts an externally pushed identifier silently.
  - the change callback fires when interaction changes the identifier.
  - the touched callback fires on the first settled loss of focus.
  - ``set_disabled_state()`` mirrors an externally imposed disabled flag.

The region and subzone controls together form one logical widget. Moving
focus between them produces a blur immediately followed by a focus, so
blur settlement is deferred by one event-loop turn and skipped if focus
came back in the meantime.
"""

from __future__ import annotations

import asyncio
import logging
from collections import deque
from collections.abc import Callable
from typing import Any

from .codec import decode, encode
from .types import LMT, LMT_OPTION, OS, OS_OPTION, UT, UT_OPTION, ZoneCatalog, ZoneSelection

logger = logging.getLogger(__name__)


def _noop(*_args: Any) -> None:
    pass


class ZoneSelector:
    """Selection state machine for one zone picker."""

    def __init__(
        self,
        catalog: ZoneCatalog,
        *,
        loop: asyncio.AbstractEventLoop | None = None,
    ) -> None:
        self.catalog = catalog
        self.disabled = False

        self._region: str | None = UT_OPTION
        self._subzone: str | None = UT
        self._value: str | None = UT
        self._last_subzones: dict[str | None, str] = {UT_OPTION: UT}

        self._loop = loop
        self._has_focus = False
        self._focus_count = 0
        self._touched = False
        self._pending_blurs: deque[asyncio.Handle] = deque()

        self._on_change: Callable[[str | None], None] = _noop
        self._on_touched: Callable[[], None] = _noop
        self._focus_listeners: list[Callable[[Any], None]] = []
        self._blur_listeners: list[Callable[[Any], None]] = []

    # --- Catalog views ---

    @property
    def regions(self) -> list[str]:
        return list(self.catalog.regions)

    @property
    def subzones(self) -> list[str]:
        return list(self.catalog.subzones_for(self._region))

    # --- Identifier ---

    @property
    def value(self) -> str | None:
        return encode(self._region, self._subzone)

    @value.setter
    def value(self, new_zone: str | None) -> None:
        if self._value == new_zone:
            return
        previous = self._value
        self._update_value(new_zone)
        self._value = self.value
        if self._value != previous:
            logger.debug("Zone selection changed: %s -> %s", previous, self._value)
            self._on_change(self._value)

    @property
    def selection(self) -> ZoneSelection:
        return ZoneSelection(self._region, self._subzone, self.value)

    def _update_value(self, new_zone: str | None) -> None:
        if new_zone is None:
            self._region = self._subzone = self._value = None
            return
        region, subzone = decode(new_zone)
        self.set_region(region)
        self.set_subzone(subzone, notify=False)

    # --- Region / subzone ---

    @property
    def region(self) -> str | None:
        return self._region

    @region.setter
    def region(self, new_region: str | None) -> None:
        self.set_region(new_region, notify=True)

    def set_region(self, new_region: str | None, notify: bool = False) -> None:
        """Switch region, restoring its remembered subzone or its first one."""
        if self._region == new_region:
            return

        self._region = new_region
        self._subzone = ""
        subzones = self.catalog.subzones_for(new_region)
        last_subzone = self._last_subzones.get(new_region)

        if last_subzone:
            self._subzone = last_subzone
        elif subzones:
            self._subzone = subzones[0]
            self._last_subzones[new_region] = self._subzone

        if new_region is None:
            self._value = None
        elif self._subzone:
            self._value = self.value
        elif new_region == LMT_OPTION:
            self._value = LMT
        elif new_region == OS_OPTION:
            self._value = OS

        if notify:
            self._on_change(self._value)

    @property
    def subzone(self) -> str | None:
        return self._subzone

    @subzone.setter
    def subzone(self, new_subzone: str | None) -> None:
        self.set_subzone(new_subzone)

    def set_subzone(self, new_subzone: str | None, notify: bool = True) -> None:
        """Select *new_subzone* in the current region.

        Empty values are ignored: clearing a selection goes through
        ``set_region`` or ``value = None``.
        """
        if not new_subzone or self._subzone == new_subzone:
            return

        self._subzone = new_subzone
        self._last_subzones[self._region] = new_subzone
        self._value = self.value

        if notify:
            self._on_change(self._value)

    # --- Form-control binding ---

    def write_value(self, new_zone: str | None) -> None:
        if self._value != new_zone:
            self._update_value(new_zone)
            self._value = self.value

    def register_on_change(self, fn: Callable[[str | None], None]) -> None:
        self._on_change = fn

    def register_on_touched(self, fn: Callable[[], None]) -> None:
        self._on_touched = fn

    def set_disabled_state(self, is_disabled: bool) -> None:
        self.disabled = is_disabled

    # --- Focus tracking ---

    @property
    def touched(self) -> bool:
        return self._touched

    @property
    def has_focus(self) -> bool:
        return self._has_focus

    def add_focus_listener(self, fn: Callable[[Any], None]) -> None:
        self._focus_listeners.append(fn)

    def add_blur_listener(self, fn: Callable[[Any], None]) -> None:
        self._blur_listeners.append(fn)

    def on_focus(self, event: Any = None) -> None:
        """One of the picker's controls gained focus."""
        self._has_focus = True
        self._focus_count += 1

        if self._focus_count == 1:
            for fn in self._focus_listeners:
                fn(event)

    def on_blur(self, event: Any = None) -> None:
        """One of the picker's controls lost focus; settle on the next turn.

        Must be called on the event loop, or after one was injected.
        Without a loop it raises RuntimeError and nothing changes.
        """
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        self._has_focus = False
        self._pending_blurs.append(self._loop.call_soon(self._settle_blur, event))

    def _settle_blur(self, event: Any) -> None:
        self._pending_blurs.popleft()

        if self._focus_count > 0:
            self._focus_count -= 1
        else:
            logger.debug("Blur settled with no focus holder")

        if not self._has_focus:
            if not self._touched:
                self._touched = True
                self._on_touched()
            for fn in self._blur_listeners:
                fn(event)

    def close(self) -> None:
        """Cancel any blur settlement still waiting for its turn."""
        while self._pending_blurs:
            self._pending_blurs.popleft().cancel()
