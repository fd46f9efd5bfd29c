"""
ruler — command-line front end for the rule engine.

Usage:
  ruler <command> [options]

Commands:
  check   Evaluates a record file against a rule-set file.
  types   Lists registered rule types.
"""

from __future__ import annotations

import argparse

import ruler
from ruler_cli import _config
from ruler_cli.commands import check as cmd_check
from ruler_cli.commands import rule_types as cmd_types


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ruler",
        description="Evaluate structured records against AND / OR rule sets.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--version", action="version", version=f"ruler {ruler.__version__}"
    )
    parser.add_argument(
        "--log-level",
        choices=_config.LOG_LEVELS,
        type=str.upper,
        default=None,
        help="Logging level (default: $RULER_LOG_LEVEL or WARNING).",
    )

    subparsers = parser.add_subparsers(
        title="commands",
        metavar="<command>",
        dest="command",
    )
    subparsers.required = True

    cmd_check.add_parser(subparsers)
    cmd_types.add_parser(subparsers)

    return parser


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    _config.setup_logging(args.log_level)
    args.func(args)


if __name__ == "__main__":
    main()
