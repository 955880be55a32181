#!/usr/bin/env python3
"""Command-line interface for the sleep duration calculator."""
from __future__ import annotations

import argparse
import logging
import sys
import time
from datetime import date
from pathlib import Path
from typing import Optional, Sequence

from .calculator import CalculatorConfig, SleepCalculator
from .config import SETTINGS_PATH, Settings, load_settings
from .errors import InvalidTimezoneError, SleepDurationError
from .reporting import render_summary
from .telemetry import log_run, record_metadata

COMMAND_ALIASES = {"demo", "calculate"}

DEMO_RUNS = (
    ("Example 1: Basic usage", "22:30", "07:15", None),
    ("Example 2: 12-hour format", "10:30 PM", "6:45 AM", None),
    ("Example 3: Timezone support", "22:30", "07:15", "America/New_York"),
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Sleep Duration Calculator CLI")
    subparsers = parser.add_subparsers(dest="command")

    demo_parser = subparsers.add_parser(
        "demo",
        help="Print the bundled example calculations",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    demo_parser.add_argument(
        "--settings",
        default=str(SETTINGS_PATH),
        help="YAML settings file with guidelines and defaults",
    )
    demo_parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    demo_parser.set_defaults(command="demo")

    calculate_parser = subparsers.add_parser(
        "calculate",
        help="Calculate sleep duration for one bedtime/wake-up pair",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    calculate_parser.add_argument("--bedtime", required=True, help="Bedtime, e.g. 22:30 or 10:30 PM")
    calculate_parser.add_argument("--wake-up", dest="wake_up", required=True, help="Wake-up time")
    calculate_parser.add_argument(
        "--timezone",
        default=None,
        help="IANA timezone identifier. Defaults to the configured or host timezone.",
    )
    calculate_parser.add_argument(
        "--date",
        type=date.fromisoformat,
        default=None,
        help="Base calendar date (YYYY-MM-DD). Defaults to today.",
    )
    calculate_parser.add_argument(
        "--no-dst",
        dest="handle_dst",
        action="store_false",
        help="Skip the DST offset drift adjustment",
    )
    calculate_parser.add_argument(
        "--settings",
        default=str(SETTINGS_PATH),
        help="YAML settings file with guidelines and defaults",
    )
    calculate_parser.add_argument(
        "--telemetry-dir",
        dest="telemetry_dir",
        default=None,
        help="Append a telemetry entry to DIR/telemetry.jsonl",
    )
    calculate_parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    calculate_parser.set_defaults(command="calculate")

    return parser


def parse_args(args: Optional[list[str]] = None) -> argparse.Namespace:
    if args is None:
        args = sys.argv[1:]
    parser = build_parser()
    if args and args[0] in {"-h", "--help"}:
        return parser.parse_args(args=args)
    if not args:
        args = ["demo"]
    elif args[0] not in COMMAND_ALIASES:
        args = ["demo", *args]
    return parser.parse_args(args=args)


def configure_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s")


def build_calculator(settings: Settings) -> SleepCalculator:
    return SleepCalculator(CalculatorConfig.from_settings(settings))


def _emit(lines: Sequence[str]) -> None:
    for line in lines:
        print(line)
    print()


def run_demo(args: argparse.Namespace) -> int:
    configure_logging(args.verbose)
    calculator = build_calculator(load_settings(Path(args.settings)))
    print("Sleep Duration Calculator with Timezone Support")
    print()

    failures = 0
    for title, bedtime, wake_up, tz_name in DEMO_RUNS:
        print(title)
        try:
            record = calculator.calculate_sleep_duration(bedtime, wake_up, timezone=tz_name)
            verdict = calculator.validate_sleep_duration(record)
            tz_info = calculator.get_timezone_info(tz_name) if tz_name else None
        except SleepDurationError as exc:
            failures += 1
            print(f"Error: {exc}")
            print()
            continue
        _emit(render_summary(bedtime, wake_up, record, verdict, tz_info=tz_info))
    return 1 if failures else 0


def run_calculate(args: argparse.Namespace) -> int:
    configure_logging(args.verbose)
    start = time.time()
    settings = load_settings(Path(args.settings))
    calculator = build_calculator(settings)
    telemetry_dir = args.telemetry_dir
    if telemetry_dir is None and settings.telemetry_enabled:
        telemetry_dir = settings.telemetry_output_dir

    try:
        record = calculator.calculate_sleep_duration(
            args.bedtime,
            args.wake_up,
            timezone=args.timezone,
            date=args.date,
            handle_dst=args.handle_dst,
        )
    except SleepDurationError as exc:
        logging.error("%s", exc)
        if telemetry_dir:
            log_run("calculate", start_time=start, output_dir=telemetry_dir, status="error", error=str(exc))
        return 1

    verdict = calculator.validate_sleep_duration(record)
    tz_name = args.timezone or calculator.get_default_timezone()
    tz_info = None
    try:
        tz_info = calculator.get_timezone_info(tz_name)
    except InvalidTimezoneError:
        logging.warning("Unknown timezone %s; showing host-local results", tz_name)
    _emit(render_summary(args.bedtime, args.wake_up, record, verdict, tz_info=tz_info))

    if telemetry_dir:
        path = log_run(
            "calculate",
            start_time=start,
            output_dir=telemetry_dir,
            metadata=record_metadata(record, verdict),
        )
        logging.debug("Telemetry appended to %s", path)
    return 0


def main(args: Optional[list[str]] = None) -> int:
    namespace = parse_args(args=args)
    if namespace.command == "calculate":
        return run_calculate(namespace)
    return run_demo(namespace)


if __name__ == "__main__":
    raise SystemExit(main())
