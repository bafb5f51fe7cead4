"""Longitude to Local Mean Time resolution.

LMT zones are quantized to a quarter degree of longitude, which is one
minute of clock time, and normalized into [0, 360).
"""

from __future__ import annotations

import math

MINUTES_PER_DEGREE = 4


def resolve_lmt_longitude(longitude: float | None) -> float:
    """Quantize *longitude* (degrees, east positive) for an LMT zone.

    Rounds half up to the nearest quarter degree, then applies a floored
    modulo so western longitudes map into [180, 360).
    """
    if not longitude or not math.isfinite(longitude):
        return 0.0
    quantized = math.floor(longitude * 4 + 0.5) / 4
    return quantized % 360.0 + 0.0


def lmt_offset_minutes(lmt_longitude: float) -> int:
    """UTC offset in minutes of the LMT zone at a resolved longitude."""
    degrees = lmt_longitude % 360.0
    if degrees > 180.0:
        degrees -= 360.0
    return round(degrees * MINUTES_PER_DEGREE)


def format_longitude(lmt_longitude: float) -> str:
    """Human-readable form, e.g. ``10.25°E`` or ``10.00°W``."""
    degrees = lmt_longitude % 360.0
    if degrees > 180.0:
        return f"{360.0 - degrees:.2f}°W"
    return f"{degrees:.2f}°E"
