"""Main entry point for DataUI CLI."""
from __future__ import annotations

import json
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

from dataui.config import settings
from dataui.kernel.table import DataTable
from dataui.models import TableConfig
from dataui_cli import __version__

logger = logging.getLogger(__name__)


def print_help():
    """Print help message."""
    print(f"""
DataUI CLI v{__version__}

Usage:
  dataui FILE [options]

FILE is a JSON table: {{"title", "columns", "data", "view"}}.

Options:
  --search TERM         Free-text search across all fields
  --filter KEY=VALUE    Column filter (repeatable; VALUE "all" clears it)
  --sort FIELD          Sort by column (repeatable; repeating a field flips ASC/DESC)
  --page N              Page to show
  --page-size N         Rows per page (default: {settings.DEFAULT_PAGE_SIZE})
  --query               Also print the encoded API query
  --api-url URL         Prefix the query with URL/<resource>
  --resource NAME       Resource name for the query URL (default: table's resource)
  -h, --help            Show this help
  -v, --version         Show version

Environment:
  DATAUI_API_URL            Same as --api-url
  DATAUI_DEFAULT_PAGE_SIZE  Default rows per page

Examples:
  dataui students.json --search alice
  dataui students.json --filter status=active --sort name --sort name
  dataui students.json --page-size 5 --page 2 --query
""")


def _fail(message: str):
    print(f"Error: {message}")
    print("Run 'dataui --help' for usage.")
    sys.exit(1)


def _take_value(args: list[str], i: int, flag: str) -> str:
    if i + 1 < len(args):
        return args[i + 1]
    _fail(f"{flag} requires a value")


def parse_args(args: list[str]) -> dict:
    """
    Parse command line arguments.

    Returns dict with:
        file: str | None
        search: str | None
        filters: list[tuple[str, str]]
        sorts: list[str]
        page: int | None
        page_size: int | None
        show_query: bool
        api_url: str | None
        resource: str | None
        show_help: bool
        show_version: bool
    """
    result = {
        "file": None,
        "search": None,
        "filters": [],
        "sorts": [],
        "page": None,
        "page_size": None,
        "show_query": False,
        "api_url": None,
        "resource": None,
        "show_help": False,
        "show_version": False,
    }

    i = 0
    while i < len(args):
        arg = args[i]

        if arg == "--search":
            result["search"] = _take_value(args, i, arg)
            i += 1
        elif arg == "--filter":
            raw = _take_value(args, i, arg)
            key, sep, value = raw.partition("=")
            if not sep or not key:
                _fail(f"--filter expects KEY=VALUE, got {raw!r}")
            result["filters"].append((key, value))
            i += 1
        elif arg == "--sort":
            result["sorts"].append(_take_value(args, i, arg))
            i += 1
        elif arg in ("--page", "--page-size"):
            raw = _take_value(args, i, arg)
            try:
                n = int(raw)
            except ValueError:
                _fail(f"{arg} expects an integer, got {raw!r}")
            result["page" if arg == "--page" else "page_size"] = n
            i += 1
        elif arg == "--query":
            result["show_query"] = True
        elif arg == "--api-url":
            result["api_url"] = _take_value(args, i, arg)
            i += 1
        elif arg == "--resource":
            result["resource"] = _take_value(args, i, arg)
            i += 1
        elif arg in ("--help", "-h"):
            result["show_help"] = True
        elif arg in ("--version", "-v"):
            result["show_version"] = True
        elif arg.startswith("-"):
            _fail(f"Unknown option: {arg}")
        elif result["file"] is None:
            result["file"] = arg
        else:
            _fail(f"Unexpected argument: {arg}")

        i += 1

    return result


def load_table(path: str) -> TableConfig:
    """Read and validate a JSON table file. Exits with status 1 on failure."""
    try:
        raw = json.loads(Path(path).read_text(encoding="utf-8"))
    except OSError as e:
        logger.warning("dataui: cannot read %s: %s", path, e)
        _fail(f"cannot read {path}: {e.strerror or e}")
    except json.JSONDecodeError as e:
        logger.warning("dataui: invalid JSON in %s: %s", path, e)
        _fail(f"{path} is not valid JSON: {e}")

    try:
        return TableConfig.model_validate(raw)
    except ValidationError as e:
        logger.warning("dataui: invalid table in %s", path)
        _fail(f"{path} is not a valid table:\n{e}")


def build_table(config: TableConfig, args: dict) -> DataTable:
    """Create the table and replay the command-line selections onto it in UI order."""
    state = config.view.to_state() if config.view else None
    table = DataTable(
        config.column_specs(),
        config.data,
        title=config.title,
        description=config.description,
        page_size=settings.DEFAULT_PAGE_SIZE,
        state=state,
    )

    if args["search"] is not None:
        table.apply_search(args["search"])
    for key, value in args["filters"]:
        table.apply_column_filter(key, value)
    for field in args["sorts"]:
        result = table.apply_sort(field)
        if not result.applied:
            _fail(result.error)
    if args["page_size"] is not None:
        result = table.set_page_size(args["page_size"])
        if not result.applied:
            _fail(result.error)
    if args["page"] is not None:
        table.set_page(args["page"])

    return table


def query_line(table: DataTable, config: TableConfig, args: dict) -> str:
    resource = args["resource"] or config.resource or ""
    return settings.query_url(resource, table.query(), api_url=args["api_url"])


def main(argv: list[str] | None = None):
    """Main entry point."""
    args = parse_args(sys.argv[1:] if argv is None else argv)

    if args["show_help"]:
        print_help()
        return

    if args["show_version"]:
        print(f"dataui-cli {__version__}")
        return

    if args["file"] is None:
        _fail("a table FILE is required")

    config = load_table(args["file"])
    table = build_table(config, args)

    print(table.render())

    if args["show_query"]:
        print()
        print(query_line(table, config, args))


if __name__ == "__main__":
    main()
