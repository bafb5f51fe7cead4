"""Settings: reads .env + settings.toml to produce an AppConfig.

Everything is optional; a missing settings.toml yields the defaults.
Environment variables (possibly loaded from .env) override the file.

Key entities:
  - AppConfig: frozen dataclass with all resolved settings.
  - load_settings(): parse .env + settings.toml → AppConfig.

Example settings.toml::

    [clock]
    primary_zone = "Europe/Paris"
    comparison_zone = "UT"
    longitude = 2.35
    tick_interval = 0.25
    track_time = false
    track_seconds = 5.0

    [geolocation]
    enabled = true
    url = "http://ip-api.com/json"
    timeout = 5.0

``track_time`` makes the ``zoneclock`` command run the live clock for
``track_seconds`` seconds before printing the final moment.
"""

from __future__ import annotations

import logging
import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

from .clock.coordinator import DEFAULT_TICK_INTERVAL
from .geolocation import DEFAULT_GEOLOCATION_URL, DEFAULT_TIMEOUT
from .zones.types import OS, UT

logger = logging.getLogger(__name__)

# How long the command line runs the live clock when track_time is set
DEFAULT_TRACK_SECONDS = 5.0


def zoneclock_dir() -> Path:
    """Base config directory: $ZONECLOCK_DIR or ~/.zoneclock."""
    raw = os.environ.get("ZONECLOCK_DIR", "")
    return Path(raw).expanduser() if raw else Path.home() / ".zoneclock"


@dataclass(frozen=True)
class AppConfig:
    """Resolved application settings."""

    config_dir: Path = field(default_factory=zoneclock_dir)

    # Clock
    primary_zone: str = OS
    comparison_zone: str = UT
    longitude: float = 0.0
    tick_interval: float = DEFAULT_TICK_INTERVAL
    track_time: bool = False
    track_seconds: float = DEFAULT_TRACK_SECONDS

    # Geolocation
    geolocation_enabled: bool = True
    geolocation_url: str = DEFAULT_GEOLOCATION_URL
    geolocation_timeout: float = DEFAULT_TIMEOUT

    @property
    def settings_file(self) -> Path:
        return self.config_dir / "settings.toml"


def _as_float(key: str, value: object) -> float:
    try:
        return float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        raise ValueError(f"'{key}' must be a number, got {value!r}") from None


def _as_bool(key: str, value: object) -> bool:
    if isinstance(value, bool):
        return value
    raise ValueError(f"'{key}' must be true or false, got {value!r}")


def load_settings(config_dir: Path | None = None) -> AppConfig:
    """Read .env + settings.toml and return the AppConfig.

    Args:
        config_dir: Override for the base config directory.
                    Defaults to ``zoneclock_dir()``.

    Raises:
        ValueError: If a setting has the wrong type or range.
    """
    if config_dir is None:
        config_dir = zoneclock_dir()

    # Load .env files (local cwd first, then config_dir)
    local_env = Path(".env")
    global_env = config_dir / ".env"
    if local_env.is_file():
        load_dotenv(local_env)
    if global_env.is_file():
        load_dotenv(global_env)

    raw: dict = {}
    toml_path = config_dir / "settings.toml"
    if toml_path.is_file():
        try:
            with open(toml_path, "rb") as f:
                raw = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise ValueError(f"Invalid {toml_path}: {e}") from None
        logger.debug("Loaded settings from %s", toml_path)

    clock = raw.get("clock", {})
    geo = raw.get("geolocation", {})

    primary_zone = os.getenv("ZONECLOCK_PRIMARY_ZONE") or str(clock.get("primary_zone", OS))
    comparison_zone = os.getenv("ZONECLOCK_COMPARISON_ZONE") or str(
        clock.get("comparison_zone", UT)
    )
    longitude = _as_float(
        "longitude", os.getenv("ZONECLOCK_LONGITUDE") or clock.get("longitude", 0.0)
    )
    if not -180.0 <= longitude <= 360.0:
        raise ValueError(f"'longitude' out of range: {longitude}")

    tick_interval = _as_float("tick_interval", clock.get("tick_interval", DEFAULT_TICK_INTERVAL))
    if tick_interval <= 0:
        raise ValueError(f"'tick_interval' must be positive, got {tick_interval}")

    track_seconds = _as_float(
        "track_seconds", clock.get("track_seconds", DEFAULT_TRACK_SECONDS)
    )
    if track_seconds < 0:
        raise ValueError(f"'track_seconds' must not be negative, got {track_seconds}")

    return AppConfig(
        config_dir=config_dir,
        primary_zone=primary_zone,
        comparison_zone=comparison_zone,
        longitude=longitude,
        tick_interval=tick_interval,
        track_time=_as_bool("track_time", clock.get("track_time", False)),
        track_seconds=track_seconds,
        geolocation_enabled=_as_bool("enabled", geo.get("enabled", True)),
        geolocation_url=str(geo.get("url", DEFAULT_GEOLOCATION_URL)),
        geolocation_timeout=_as_float("timeout", geo.get("timeout", DEFAULT_TIMEOUT)),
    )
