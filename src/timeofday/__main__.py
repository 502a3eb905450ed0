from __future__ import annotations

import argparse
from datetime import datetime
import logging
from pathlib import Path
import sys
from typing import Sequence

from .config import ConfigManager
from .errors import TimeOfDayError
from .parser import parse_time_of_day
from .scheduler import Scheduler
from .timeutils import UnknownZoneError, local_zone, resolve_zone

logger = logging.getLogger("timeofday")

EXIT_USAGE = 2


def _iso_datetime(value: str) -> datetime:
    try:
        return datetime.fromisoformat(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"not an ISO 8601 timestamp: {value!r}") from exc


def _positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError("must be at least 1")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="timeofday",
        description="Parse daily times like '3:09 PM' and find when they next occur.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    next_cmd = sub.add_parser("next", help="print the next occurrence(s) of a time spec")
    next_cmd.add_argument("spec", help="time spec, e.g. '3:09 PM', '15:09' or '24:00'")
    next_cmd.add_argument("--zone", help="IANA zone name (defaults to the local zone)")
    next_cmd.add_argument("--after", type=_iso_datetime, help="reference instant (ISO 8601)")
    next_cmd.add_argument("--count", type=_positive_int, default=1)

    list_cmd = sub.add_parser("list", help="print the agenda of configured times")
    list_cmd.add_argument("--config", type=Path, help="path to config.toml")
    list_cmd.add_argument("--after", type=_iso_datetime, help="reference instant (ISO 8601)")
    list_cmd.add_argument("--days", type=_positive_int, default=1)

    tui_cmd = sub.add_parser("tui", help="start the interactive clock")
    tui_cmd.add_argument("--config", type=Path, help="path to config.toml")
    return parser


def _cmd_next(args: argparse.Namespace) -> int:
    zone = resolve_zone(args.zone) if args.zone else local_zone()
    value = parse_time_of_day(args.spec, zone)
    logger.debug("Parsed %r as %s in %s", args.spec, value, zone)
    after = args.after or datetime.now(value.zone)
    for moment in value.occurrences(after, args.count):
        print(moment.isoformat())
    return 0


def _cmd_list(args: argparse.Namespace) -> int:
    manager = ConfigManager(args.config)
    config = manager.load()
    for message in manager.errors():
        print(f"warning: {message}", file=sys.stderr)
    scheduler = Scheduler(config)
    for item in scheduler.agenda(args.after, days=args.days):
        label = item.time_of_day.format_12h() if config.clock.twelve_hour else str(item.time_of_day)
        print(f"{item.at.isoformat()}  {label:>8}  {item.name}")
    return 0


def _cmd_tui(args: argparse.Namespace) -> int:
    from .tui.app import ClockApp

    ClockApp(args.config).run()
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    handlers = {"next": _cmd_next, "list": _cmd_list, "tui": _cmd_tui}
    try:
        return handlers[args.command](args)
    except (TimeOfDayError, UnknownZoneError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return EXIT_USAGE


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
