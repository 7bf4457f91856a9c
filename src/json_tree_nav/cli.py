"""
json-tree-nav CLI - Command Line Interface

Usage:
    json-tree-nav query abi.json '.abi[0].name'
    json-tree-nav query abi.json '.abi[] | {name,type}'
    json-tree-nav path abi.json 3 12
    json-tree-nav keys config.yaml --type object
    json-tree-nav table abi.json 2 5
    json-tree-nav browse abi.json

Lines and columns on the command line are 1-based and count characters.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path as FilePath

import structlog
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from json_tree_nav import api
from json_tree_nav.config import DocumentKind, NavigatorConfig
from json_tree_nav.exceptions import JsonTreeNavError, NotFoundError
from json_tree_nav.navigation import NavigationSession
from json_tree_nav.path import Index
from json_tree_nav.resolver import HybridResolver
from json_tree_nav.tree.adapter import byte_column
from json_tree_nav.tree.nodes import NodeKind

logger = structlog.get_logger(__name__)

BROWSE_HELP = "commands: ls, cd SEGMENT, back (or cd ..), pwd, cat, help, quit"


def _configure_logging(verbose: bool) -> None:
    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.DEBUG if verbose else logging.WARNING
        ),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
    )


def _one_based(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"expected a 1-based position, got {value}")
    return number


def _read(args: argparse.Namespace) -> tuple[str, DocumentKind]:
    file = FilePath(args.file)
    kind = DocumentKind(args.kind) if args.kind else DocumentKind.from_path(file)
    return file.read_text(encoding="utf-8"), kind


def _config(args: argparse.Namespace, kind: DocumentKind) -> NavigatorConfig:
    return NavigatorConfig(
        kind=kind,
        evaluator=args.jq,
        timeout=args.timeout,
        structural_first=not getattr(args, "no_structural", False),
    )


def cmd_query(args: argparse.Namespace, console: Console) -> int:
    """Resolve a path or filter expression."""
    text, kind = _read(args)
    resolution = api.resolve(args.expression, text, config=_config(args, kind))
    if not resolution.found:
        raise NotFoundError(resolution.message)
    console.print(resolution.text, markup=False, highlight=False)
    return 0


def cmd_path(args: argparse.Namespace, console: Console) -> int:
    """Print the path of the value at a position."""
    text, kind = _read(args)
    line = args.line - 1
    path = api.path_at(text, line, byte_column(text, line, args.column - 1), kind)
    console.print(path.render(), markup=False, highlight=False)
    return 0


def cmd_keys(args: argparse.Namespace, console: Console) -> int:
    """List the top-level keys."""
    text, kind = _read(args)
    entries = api.keys(text, args.type, kind)
    table = Table(title=f"Keys of {FilePath(args.file).name}")
    table.add_column("Key")
    table.add_column("Type")
    table.add_column("Line", justify="right")
    for entry in entries:
        table.add_row(entry.key, str(entry.kind), str(entry.start.line + 1))
    console.print(table)
    return 0


def cmd_table(args: argparse.Namespace, console: Console) -> int:
    """Print the surrounding object or array as a markdown table."""
    text, kind = _read(args)
    line = args.line - 1
    table = api.markdown_table(text, line, byte_column(text, line, args.column - 1), kind)
    console.print(table, markup=False, highlight=False)
    return 0


def cmd_browse(args: argparse.Namespace, console: Console) -> int:
    """Interactive drill-down/back exploration."""
    text, kind = _read(args)
    session = NavigationSession(HybridResolver(_config(args, kind)))
    session.open(text)
    console.print(f"[dim]{BROWSE_HELP}[/dim]")

    while True:
        try:
            line = console.input(f"[bold]{escape(session.copy_path())}[/bold]> ")
        except EOFError:
            break
        command, _, argument = line.strip().partition(" ")
        argument = argument.strip()
        try:
            if command in ("quit", "exit", "q"):
                break
            if command == "ls":
                for entry in session.children():
                    console.print(f"{entry.segment.render()}  {entry.kind}", markup=False)
            elif command == "cd" and argument == "..":
                session.go_back()
            elif command == "cd" and argument:
                target: str | int = argument
                if argument.isdigit() and any(isinstance(e.segment, Index) for e in session.children()):
                    target = int(argument)
                session.drill_down(target)
            elif command == "back":
                session.go_back()
            elif command == "pwd":
                console.print(session.copy_path(), markup=False)
            elif command == "cat":
                console.print(session.content, markup=False, highlight=False)
            elif command in ("help", "?"):
                console.print(BROWSE_HELP)
            elif command:
                console.print(f"[yellow]unknown command: {escape(command)}[/yellow]")
        except JsonTreeNavError as exc:
            console.print(f"[red]{escape(str(exc))}[/red]")

    session.close()
    return 0


COMMANDS = {
    "query": cmd_query,
    "path": cmd_path,
    "keys": cmd_keys,
    "table": cmd_table,
    "browse": cmd_browse,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="json-tree-nav",
        description="Structural navigation and path resolution for JSON/YAML documents",
    )
    parser.add_argument(
        "--kind",
        choices=[k.value for k in DocumentKind],
        help="Document kind (default: inferred from the file suffix)",
    )
    parser.add_argument("--jq", default="jq", help="Evaluator executable (default: jq)")
    parser.add_argument(
        "--timeout",
        type=float,
        default=10.0,
        help="Seconds to wait for the evaluator (default: 10)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Show debug logs")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    query_parser = subparsers.add_parser("query", help="Resolve a path or filter expression")
    query_parser.add_argument("file", help="Path to a JSON or YAML file")
    query_parser.add_argument("expression", help="Path or jq filter, e.g. '.abi[0].name'")
    query_parser.add_argument(
        "--no-structural",
        action="store_true",
        help="Always delegate to the evaluator",
    )

    path_parser = subparsers.add_parser("path", help="Show the path at a position")
    path_parser.add_argument("file", help="Path to a JSON or YAML file")
    path_parser.add_argument("line", type=_one_based, help="1-based line")
    path_parser.add_argument("column", type=_one_based, help="1-based column")

    keys_parser = subparsers.add_parser("keys", help="List top-level keys")
    keys_parser.add_argument("file", help="Path to a JSON or YAML file")
    keys_parser.add_argument(
        "--type",
        choices=[k.value for k in NodeKind if k is not NodeKind.PAIR],
        help="Only keys whose value has this kind",
    )

    table_parser = subparsers.add_parser("table", help="Markdown table of the container at a position")
    table_parser.add_argument("file", help="Path to a JSON or YAML file")
    table_parser.add_argument("line", type=_one_based, help="1-based line")
    table_parser.add_argument("column", type=_one_based, help="1-based column")

    browse_parser = subparsers.add_parser("browse", help="Explore a document interactively")
    browse_parser.add_argument("file", help="Path to a JSON or YAML file")

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)

    handler = COMMANDS.get(args.command)
    if handler is None:
        parser.print_help()
        return 2

    console = Console(soft_wrap=True)
    errors = Console(stderr=True)
    try:
        return handler(args, console)
    except ValueError as exc:
        # Unrecognised file suffix or invalid option values.
        errors.print(f"[red]Error:[/red] {escape(str(exc))}", highlight=False)
        return 2
    except (JsonTreeNavError, OSError) as exc:
        logger.debug("command_failed", command=args.command, error=str(exc))
        errors.print(f"[red]Error:[/red] {escape(str(exc))}", highlight=False)
        return 1
