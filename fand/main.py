"""Entry point for the fand host health analyzer."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from fand import __version__
from fand.config import LOG_LEVELS, settings
from fand.errors import ConfigError
from fand.options import DEFAULT_CATEGORIES, Options, parse_categories
from fand.orchestrator import Orchestrator, telemetry
from fand.registry import get as get_profile, profile_ids
from fand.result import Issue, Result
from fand.render import print_result

logger = logging.getLogger(__name__)

console = Console()
err_console = Console(stderr=True)


def _categories(value: str):
    try:
        return parse_categories(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e)) from None


def _log_level(value: str) -> str:
    level = value.strip().lower()
    if level not in LOG_LEVELS:
        raise argparse.ArgumentTypeError(
            f"invalid log level '{value}' (choose from {', '.join(LOG_LEVELS)})"
        )
    return level


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="fand", description="fand system health analyzer")

    # options are listed alphabetically in --help
    parser.add_argument(
        "-x", "--category", dest="categories", type=_categories, default=DEFAULT_CATEGORIES,
        help="Comma separated categories (cpu, filesystem, memory, network, performance)",
    )
    parser.add_argument("-c", "--config", type=Path, help="Configuration file")
    parser.add_argument(
        "-l", "--log-level", type=_log_level, default=_log_level(settings.log_level),
        help=f"Log level ({', '.join(LOG_LEVELS)})",
    )
    parser.add_argument(
        "-s", "--system", default=settings.system,
        help="System type (default: $FAND_SYSTEM)",
    )
    parser.add_argument(
        "-v", "--version", action="version", version=f"fand {__version__}",
        help="Print version string",
    )

    sub = parser.add_subparsers(dest="command", required=True)

    check = sub.add_parser("check", help="Collect data and check it")
    check.add_argument("-f", "--file", type=Path, help="Input file of previously collected data")
    check.add_argument("-j", "--json", action="store_true", help="JSON output format")

    collect = sub.add_parser("collect", help="Collect data and stop")
    collect.add_argument("-f", "--file", type=Path, help="Output file")

    sub.add_parser("list", help="List the configured checks")

    return parser


def make_options(args: argparse.Namespace) -> Options:
    """Turn parsed arguments into run options, validating the paths."""
    if args.config is not None and not args.config.exists():
        raise ConfigError(f"configuration file '{args.config}' does not exist")

    input_file = output_file = None
    if args.command == "check" and args.file is not None:
        if not args.file.exists():
            raise ConfigError(f"input file '{args.file}' does not exist")
        input_file = args.file
    elif args.command == "collect" and args.file is not None:
        if args.file.exists():
            raise ConfigError(f"output file '{args.file}' already exists")
        output_file = args.file

    return Options(
        system=args.system,
        categories=frozenset(args.categories),
        config_file=args.config,
        input_file=input_file,
        output_file=output_file,
        json_result=getattr(args, "json", False),
        log_level=args.log_level,
    )


def setup_logging(level: str) -> None:
    logging.basicConfig(
        level=LOG_LEVELS[level],
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
        stream=sys.stderr,
        force=True,
    )


def run_check(fand: Orchestrator, overall: Result) -> int:
    options = fand.options
    if options.input_file is not None:
        with open(options.input_file, encoding="utf-8", errors="replace") as fh:
            fand.load_data(fh)

    fand.check()
    print_result(console, overall, as_json=options.json_result)

    return 0 if overall.issue is Issue.NO else 1


def run_collect(fand: Orchestrator) -> int:
    records = fand.collect()
    if fand.options.output_file is None:
        telemetry.write_records(records, sys.stdout)
    else:
        with open(fand.options.output_file, "x", encoding="utf-8", errors="replace") as fh:
            telemetry.write_records(records, fh)
    logger.info("wrote %d telemetry records", len(records))
    return 0


def run_list(fand: Orchestrator) -> int:
    logger.debug("invoking list subcommand")
    profile = get_profile(fand.options.system)
    title = profile.profile_id
    if profile.description:
        title = f"{title}: {profile.description}"

    table = Table(
        title=title, title_justify="left", box=None, show_edge=False, header_style="bold"
    )
    table.add_column("Check", min_width=30)
    table.add_column("Data", min_width=30)
    for pair in fand.pairs:
        table.add_row(pair.check.name, pair.data.name)
    console.print(table)
    return 0


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level)

    try:
        options = make_options(args)
        fand = Orchestrator(options)

        # every check result hangs off this node
        overall = Result(brief="Overall system health status")
        fand.make_check_pairs(overall)
    except ConfigError as e:
        err_console.print(
            f"[bold red]error:[/bold red] {escape(str(e))}", highlight=False, soft_wrap=True
        )
        logger.debug("known systems: %s", ", ".join(profile_ids()))
        return 1

    if args.command == "check":
        return run_check(fand, overall)
    if args.command == "collect":
        return run_collect(fand)
    return run_list(fand)


if __name__ == "__main__":
    sys.exit(main())
