"""zoneclock - time zone selector with a synchronized moment editor.

Keeps one moment in time consistent across an epoch timestamp, a wall-clock
tuple in a chosen zone, and a live-ticking clock. Zones come from the IANA
database plus synthetic pseudo-zones (UTC hour offsets, the OS zone, and
longitude-based Local Mean Time).

Package entry point. Exports the version string only; functional modules
are imported lazily by main.py to keep startup fast.
"""

__version__ = "0.1.0"
