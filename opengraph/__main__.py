"""CLI entry point: python -m opengraph (--url URL | --file PATH | -) [options]"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Any

from opengraph.graph import OpenGraph, Slot
from opengraph.query import FetchError, fetch, parse
from opengraph.settings import DEFAULT_TIMEOUT, ISO8601

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_NO_DATA = 1
EXIT_ERROR = 2


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="opengraph",
        description="Print the Open Graph (og:*) metadata of a web page.",
    )
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--url", metavar="URL",
                        help="Fetch and parse this page")
    source.add_argument("--file", metavar="PATH",
                        help="Parse a local HTML file ('-' reads stdin)")
    parser.add_argument("--date", default=ISO8601, metavar="FMT",
                        help="strftime format for dates, or 'object' (default: ISO-8601)")
    parser.add_argument("--timezone", default=None, metavar="TZ",
                        help="Convert dates into this IANA timezone")
    parser.add_argument("--no-cast", action="store_true", default=False,
                        help="Keep every value as the raw string")
    parser.add_argument("--json", action="store_true", default=False,
                        help="Print JSON instead of a table")
    parser.add_argument("--timeout", type=float, default=DEFAULT_TIMEOUT, metavar="SECS",
                        help=f"Network timeout (default: {DEFAULT_TIMEOUT})")
    parser.add_argument("--no-redirects", action="store_true", default=False,
                        help="Do not follow HTTP redirects")
    parser.add_argument("--user-agent", default=None, metavar="UA",
                        help="User-Agent header to send (default: a desktop browser)")
    parser.add_argument("--proxy", default=None, metavar="URL",
                        help="HTTP proxy, e.g. http://host:8080")
    parser.add_argument("--log-level", default="WARNING",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                        metavar="{DEBUG,INFO,WARNING,ERROR}",
                        help="Logging level (default: WARNING)")
    return parser


def _json_default(obj: Any) -> Any:
    if isinstance(obj, datetime):
        return obj.isoformat()
    raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")


def _format_value(value: Any) -> str:
    if isinstance(value, tuple):
        return "\n".join(_format_slot(s) for s in value)
    if isinstance(value, datetime):
        return value.isoformat()
    return repr(value) if not isinstance(value, str) else value


def _format_slot(slot: Slot) -> str:
    return ", ".join(f"{k}={_format_value(v)}" for k, v in slot.items())


def _print_table(graph: OpenGraph, source: str) -> None:
    from rich import box
    from rich.console import Console
    from rich.table import Table
    from rich.text import Text

    console = Console()
    tbl = Table(
        title=f"[bold green]Open Graph ({len(graph)} keys)[/bold green]",
        caption=source,
        box=box.SIMPLE_HEAVY,
    )
    tbl.add_column("Key", style="cyan", no_wrap=True)
    tbl.add_column("Value")
    for key, value in graph:
        tbl.add_row(key, Text(_format_value(value)))
    console.print(tbl)
    if graph.has_location():
        console.print("  [bold]Location data     :[/bold] [green]yes[/green]")
    schema = graph.schema()
    if schema:
        console.print(f"  [bold]Schema            :[/bold] {schema}")


def _read_source(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    return Path(path).read_text(encoding="utf-8", errors="replace")


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=args.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    options = {
        "date": args.date,
        "timezone": args.timezone,
        "cast": not args.no_cast,
    }

    try:
        if args.url:
            source = args.url
            graph = fetch(
                args.url,
                options,
                timeout=args.timeout,
                follow_redirects=not args.no_redirects,
                user_agent=args.user_agent,
                proxy=args.proxy,
            )
        else:
            source = args.file
            graph = parse(_read_source(args.file), options)
    except FetchError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return EXIT_ERROR
    except (OSError, ValueError) as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return EXIT_ERROR

    if graph is None:
        logger.info("No Open Graph data in %s", source)
        print(f"No Open Graph data found in {source}", file=sys.stderr)
        return EXIT_NO_DATA

    if args.json:
        print(json.dumps(graph.as_dict(), indent=2, ensure_ascii=False, default=_json_default))
    else:
        _print_table(graph, source)
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
