"""Conversion between canonical zone identifiers and (region, subzone) pairs.

Identifier grammar::

    OS | LMT | UT | UT[+-]HH:00 | <bare-subzone> | SystemV/<name>
    | <Region>/<Subzone_with_underscores>
    | America/Argentina/<Subzone> | America/Indiana/<Subzone>

Both directions are total: malformed input decodes to the plain ``UT``
zone rather than raising.
"""

from __future__ import annotations

import re

from .types import LMT, LMT_OPTION, MISC_OPTION, OS, OS_OPTION, UT, UT_OPTION

# The SystemV family is one unit of variable arity. Multi-segment prefixes
# come before the generic "Region/" split so they win.
_ZONE_PATTERN = re.compile(
    r"(?P<sysv>SystemV/\w+)"
    r"|(?P<prefix>America/Argentina/|America/Indiana/|\w+/)(?P<rest>[^/]+(?:/[^/]+)*)"
    r"|(?P<unit>[-+:0-9A-Za-z]+)"
)

FALLBACK = (UT_OPTION, UT)


def decode(identifier: str | None) -> tuple[str | None, str | None]:
    """Split *identifier* into the (region, subzone) pair a picker displays."""
    if identifier is None:
        return None, None

    m = _ZONE_PATTERN.fullmatch(identifier)
    if not m:
        return FALLBACK

    if m.group("sysv"):
        return MISC_OPTION, m.group("sysv")
    if m.group("prefix"):
        return m.group("prefix")[:-1], m.group("rest").replace("_", " ")

    unit = m.group("unit")
    if unit.startswith(UT):
        return UT_OPTION, unit
    if unit == LMT:
        return LMT_OPTION, ""
    if unit == OS:
        return OS_OPTION, ""
    return MISC_OPTION, unit


def encode(region: str | None, subzone: str | None) -> str | None:
    """Inverse of :func:`decode`. Returns None for an incomplete selection."""
    if not region or subzone is None:
        return None
    if region in (MISC_OPTION, UT_OPTION):
        return subzone
    if region == LMT_OPTION:
        return LMT
    if region == OS_OPTION:
        return OS
    return f"{region}/{subzone}".replace(" ", "_")
