"""Application entry point: the ``zoneclock`` command.

Shows one moment in a primary and a comparison time zone. The moment can
be given as an epoch (``--epoch``), as a local date/time in the primary
zone (``--at``), or left as "now"; ``--track N`` keeps the clock ticking
for N seconds. Unless a zone is given, the primary zone is suggested by
IP geolocation.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from datetime import datetime
from typing import TYPE_CHECKING

from .clock.coordinator import COMPARISON, PRIMARY
from .clock.lmt import format_longitude
from .clock.types import CalendarDate
from .zones.types import LMT

if TYPE_CHECKING:
    from .app_context import AppContext

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="zoneclock",
        description="Show one moment in two time zones.",
    )
    parser.add_argument("--zone", help="primary zone (e.g. Europe/Paris, UT+05:00, OS, LMT)")
    parser.add_argument("--compare", help="comparison zone (default UT)")
    parser.add_argument("--longitude", type=float, help="longitude for LMT, east positive")
    moment = parser.add_mutually_exclusive_group()
    moment.add_argument("--at", help="local date or date/time in the primary zone (ISO 8601)")
    moment.add_argument("--epoch", type=int, help="moment as epoch milliseconds")
    parser.add_argument("--track", type=float, metavar="SECONDS", help="run the live clock")
    parser.add_argument("--no-geo", action="store_true", help="skip IP geolocation")
    parser.add_argument("--list-regions", action="store_true", help="list picker regions")
    parser.add_argument("--list-zones", metavar="REGION", help="list the subzones of a region")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    return parser


def parse_at(text: str) -> CalendarDate:
    """Parse ``YYYY-MM-DD`` (noon) or ``YYYY-MM-DDTHH:MM[:SS]``."""
    dt = datetime.fromisoformat(text)
    if len(text.strip()) <= 10:
        return CalendarDate(dt.year, dt.month, dt.day)
    return CalendarDate(dt.year, dt.month, dt.day, dt.hour, dt.minute, dt.second)


def _format_slot(ctx: AppContext, slot: int) -> str:
    coordinator = ctx.coordinator
    wall = coordinator.wall_time_at(slot)
    name = coordinator.zone_name(slot)
    if name == LMT:
        name = f"LMT {format_longitude(coordinator.lmt_longitude)}"
    line = (
        f"{'Primary' if slot == PRIMARY else 'Compare':<8} {name:<32} "
        f"{wall.y:04d}-{wall.m:02d}-{wall.d:02d} {wall.hrs:02d}:{wall.min:02d}:{wall.sec:02d}"
    )
    if coordinator.error[slot]:
        line += f"  ({coordinator.error[slot]})"
    return line


def _print_moment(ctx: AppContext) -> None:
    print(f"Epoch    {ctx.coordinator.time}")
    print(_format_slot(ctx, PRIMARY))
    print(_format_slot(ctx, COMPARISON))


async def _run(args: argparse.Namespace) -> int:
    from dataclasses import replace

    from .app_context import create_app_context
    from .settings import load_settings

    try:
        cfg = load_settings()
    except ValueError as e:
        print(f"Error: {e}\n")
        print("Check your settings.toml configuration.")
        return 1

    overrides: dict = {}
    if args.zone:
        overrides["primary_zone"] = args.zone
    if args.compare:
        overrides["comparison_zone"] = args.compare
    if args.longitude is not None:
        overrides["longitude"] = args.longitude
    if args.no_geo:
        overrides["geolocation_enabled"] = False
    cfg = replace(cfg, **overrides)

    ctx = create_app_context(cfg)
    try:
        if args.list_regions:
            for region in ctx.catalog.regions:
                print(region)
            return 0
        if args.list_zones:
            subzones = ctx.catalog.subzones_for(args.list_zones)
            if not subzones:
                print(f"No subzones for region: {args.list_zones}")
                return 1
            for subzone in subzones:
                print(subzone)
            return 0

        await ctx.apply_suggested_zone()

        if args.epoch is not None:
            ctx.coordinator.time = args.epoch
        elif args.at:
            try:
                ctx.coordinator.calendar = parse_at(args.at)
            except ValueError:
                print(f"Error: invalid date/time: {args.at}")
                return 1

        track = args.track
        if track is None:
            track = cfg.track_seconds if cfg.track_time else 0.0
        if track > 0:
            ctx.coordinator.track_time = True
            loop = asyncio.get_running_loop()
            deadline = loop.time() + track
            while loop.time() < deadline:
                _print_moment(ctx)
                await asyncio.sleep(min(1.0, max(0.0, deadline - loop.time())))
            ctx.coordinator.track_time = False

        _print_moment(ctx)
        return 0
    finally:
        await ctx.close()


def main() -> None:
    args = _build_parser().parse_args()

    logging.basicConfig(
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        level=logging.WARNING,
    )
    if args.verbose:
        logging.getLogger("zoneclock").setLevel(logging.DEBUG)

    try:
        sys.exit(asyncio.run(_run(args)))
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    main()
