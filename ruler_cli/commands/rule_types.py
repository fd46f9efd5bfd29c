"""Command: ruler types — lists registered rule types and their strategies."""

from __future__ import annotations

import argparse

from rich import box
from rich.console import Console
from rich.table import Table

from ruler import lookup, registered_types

console = Console()


def run(args: argparse.Namespace) -> None:
    names = registered_types()
    if args.sort:
        names = sorted(names)

    table = Table(box=box.SIMPLE_HEAD, header_style="bold white", show_header=True)
    table.add_column("TYPE",       style="bold cyan", no_wrap=True)
    table.add_column("COMPARATOR", no_wrap=True)
    table.add_column("PLUCK",      style="dim", no_wrap=True)

    for name in names:
        strategy = lookup(name)
        table.add_row(
            name,
            getattr(strategy.comparator, "__name__", repr(strategy.comparator)),
            getattr(strategy.pluck, "__name__", repr(strategy.pluck)),
        )

    console.print(table)
    console.print(f"  [dim]{len(names)} rule type(s); unknown types fall back to EQ[/dim]")


def add_parser(subparsers: argparse._SubParsersAction) -> None:  # type: ignore[type-arg]
    p = subparsers.add_parser(
        "types",
        help="Lists registered rule types.",
    )
    p.add_argument(
        "--sort",
        action="store_true",
        help="Sort alphabetically instead of registration order.",
    )
    p.set_defaults(func=run)
