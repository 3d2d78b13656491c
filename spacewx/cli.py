"""CLI entry point for the 3-day forecast bulletin parser."""

import argparse
import json
import logging
import sys

from pydantic import ValidationError

from spacewx.config.loader import get_config_value, load_config, set_config_value
from spacewx.config.schema import AppConfig
from spacewx.pipeline.forecast_pipeline import ForecastPipeline
from spacewx.reporting.formatters import format_report_json, format_report_text


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="spacewx",
        description="Parse NOAA SWPC 3-Day Forecast bulletins",
    )
    parser.add_argument(
        "--config", default=None, help="Config YAML path (default: ops/configs/default.yaml)"
    )
    parser.add_argument(
        "--set", dest="overrides", action="append", default=[],
        metavar="KEY=VALUE", help="Override a config value, e.g. parser.sort_series=false",
    )
    parser.add_argument(
        "--log-level", default="WARNING", type=str.upper,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"], help="Logging level",
    )

    sub = parser.add_subparsers(dest="command")

    # parse
    parse_p = sub.add_parser("parse", help="Parse a bulletin and print JSON")
    parse_p.add_argument("file", help="Bulletin text file, or - for stdin")

    # summary
    summary_p = sub.add_parser("summary", help="Parse a bulletin and print a day table")
    summary_p.add_argument("file", help="Bulletin text file, or - for stdin")

    # config show / config get
    config_p = sub.add_parser("config", help="Config operations")
    config_sub = config_p.add_subparsers(dest="config_command")
    config_sub.add_parser("show", help="Display current config")
    get_p = config_sub.add_parser("get", help="Display one config value")
    get_p.add_argument("key", help="Dotted key, e.g. parser.triplet_window")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    logging.basicConfig(
        level=args.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        config = _load(args)
    except (OSError, ValidationError, KeyError, ValueError) as e:
        print(f"Error: {e}")
        return 1

    if args.command in ("parse", "summary"):
        return _cmd_report(config, args)
    elif args.command == "config":
        return _cmd_config(config, args)
    else:
        parser.print_help()
        return 1


def _load(args) -> AppConfig:
    config = load_config(args.config)
    for kv in args.overrides:
        if "=" not in kv:
            raise ValueError(f"override {kv!r} is not in key=value format")
        key, value = kv.split("=", 1)
        config = set_config_value(config, key.strip(), value.strip())
    return config


def _read_text(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    with open(path, encoding="utf-8") as f:
        return f.read()


def _cmd_report(config: AppConfig, args) -> int:
    try:
        text = _read_text(args.file)
    except (OSError, UnicodeDecodeError) as e:
        print(f"Error: {e}")
        return 1
    report = ForecastPipeline(config).run(text)
    if args.command == "parse":
        print(format_report_json(report, indent=config.output.json_indent))
    else:
        print(format_report_text(report))
    return 0


def _cmd_config(config: AppConfig, args) -> int:
    if args.config_command == "show":
        print(config.model_dump_json(indent=2))
        return 0
    elif args.config_command == "get":
        try:
            value = get_config_value(config, args.key)
        except KeyError as e:
            print(f"Error: {e}")
            return 1
        if hasattr(value, "model_dump"):
            value = value.model_dump()
        print(json.dumps(value))
        return 0
    else:
        print("Use: config show | config get key")
        return 1
