"""Command: ruler check — evaluates a record file against a rule-set file."""

from __future__ import annotations

import argparse
import json
import pathlib
import sys

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ruler import DecodeError, RuleSetError, load_record, load_ruleset, record_format, report_to_dict
from ruler_cli import _config

console = Console(width=160)

EXIT_PASS  = 0
EXIT_FAIL  = 1
EXIT_ERROR = 2


def _short(value: object, limit: int = 60) -> str:
    text = json.dumps(value, ensure_ascii=False, default=str)
    return text if len(text) <= limit else text[: limit - 1] + "…"


def _verdict(ok: bool, combinator: str, n_rules: int) -> None:
    if ok:
        console.print(f"[green]PASS[/green]  {combinator} of {n_rules} rule(s) satisfied.")
    else:
        console.print(f"[red]FAIL[/red]  {combinator} of {n_rules} rule(s) not satisfied.")


def run(args: argparse.Namespace) -> None:
    # --- Rule set --------------------------------------------------------
    try:
        ruler = load_ruleset(args.ruleset)
    except RuleSetError as exc:
        console.print(f"[red]Invalid rule set:[/red] {escape(exc.message)}")
        for problem in exc.errors:
            console.print(f"  [yellow]·[/yellow] {escape(problem)}")
        raise SystemExit(EXIT_ERROR)

    # --- Record ----------------------------------------------------------
    record_path = pathlib.Path(args.record)
    if not record_path.exists():
        console.print(f"[red]Record file not found:[/red] {escape(str(record_path))}")
        raise SystemExit(EXIT_ERROR)

    fmt = args.format or record_format(record_path, default=_config.record_format())

    try:
        record = load_record(record_path, fmt)
    except (DecodeError, ValueError, OSError) as exc:
        console.print(f"[red]Cannot read record:[/red] {escape(str(exc))}")
        raise SystemExit(EXIT_ERROR)

    combinator = str(ruler.combinator)
    n_rules    = len(ruler.rules)

    # --- Quiet mode ------------------------------------------------------
    if args.quiet:
        ok = ruler.validate(record)
        if args.json_output:
            print(json.dumps({"passed": ok}))
        else:
            _verdict(ok, combinator, n_rules)
        sys.exit(EXIT_PASS if ok else EXIT_FAIL)

    # --- Diagnostic mode -------------------------------------------------
    report, ok = ruler.validate_with_result(record)

    if args.json_output:
        out = {"passed": ok, "combinator": combinator, "results": report_to_dict(report)}
        print(json.dumps(out, ensure_ascii=False, indent=2, default=str))
        sys.exit(EXIT_PASS if ok else EXIT_FAIL)

    table = Table(box=box.SIMPLE_HEAD, show_header=True, header_style="bold")
    table.add_column("Path",     style="cyan", no_wrap=True)
    table.add_column("Type",     style="magenta", no_wrap=True)
    table.add_column("Expected")
    table.add_column("Actual")
    table.add_column("Match",    no_wrap=True)
    table.add_column("Error",    style="yellow")

    rule_types = {rule.path: rule.rule_type for rule in ruler.rules}
    for path, result in report.items():
        mark = "[green]yes[/green]" if result.ok else "[red]no[/red]"
        error = f"{result.error.kind}: {result.error.message}" if result.error else ""
        table.add_row(
            escape(path),
            rule_types.get(path, "?"),
            escape(_short(result.expected)),
            escape(_short(result.actual)),
            mark,
            escape(error),
        )

    console.print(table)
    _verdict(ok, combinator, n_rules)
    sys.exit(EXIT_PASS if ok else EXIT_FAIL)


def add_parser(subparsers: argparse._SubParsersAction) -> None:  # type: ignore[type-arg]
    p = subparsers.add_parser(
        "check",
        help="Evaluates a record file against a rule-set file.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description="""\
Evaluates a record (JSON / XML / YAML) against a rule set (JSON / YAML).

Exit codes:
  0  rule set satisfied
  1  rule set not satisfied
  2  rule set or record could not be loaded

Examples:
  ruler check rules.yaml order.json
  ruler check rules.json order.xml --quiet
  ruler check rules.json payload.txt --format yaml --json-output
        """,
    )
    p.add_argument("ruleset", metavar="RULESET", help="Rule-set file (.json, .yaml, .yml).")
    p.add_argument("record", metavar="RECORD", help="Record file to evaluate.")
    p.add_argument(
        "--format", "-f",
        choices=("json", "xml", "yaml"),
        default=None,
        help="Record format (default: from the file suffix, else $RULER_RECORD_FORMAT).",
    )
    p.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Short-circuit evaluation; print only the verdict.",
    )
    p.add_argument(
        "--json-output",
        action="store_true",
        help="Print the result as JSON on stdout.",
    )
    p.set_defaults(func=run)
