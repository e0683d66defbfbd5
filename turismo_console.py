#!/usr/bin/env python3
"""
Command line front end for the tourism flow records API.

Browse, filter, add, edit and delete records from a terminal.  All
data goes through :class:`turismo_client.TurismoAPI`; this script only
parses arguments and renders results as a text table.

Usage:
    python turismo_console.py list [--page 0 --size 20] [--date 2024-02-01]
    python turismo_console.py get 6580f1a6-cd7c-4e2d-b1cc-cf0ca9cd6891
    python turismo_console.py add --from-comunidad Andalucía --from-provincia Sevilla \\
        --to-comunidad "Comunidad de Madrid" --to-provincia Madrid \\
        --start 2024-02-01 --end 2024-02-28 --period 2024M02 --total 2000
    python turismo_console.py update <id> --total 3000
    python turismo_console.py delete <id>
    python turismo_console.py communities
    python turismo_console.py community "Comunidad de Madrid"

The API location is taken from ``--base-url`` or the
``TURISMO_BASE_URL`` environment variable.
"""

import argparse
import logging
import sys
from datetime import date
from typing import Any, Dict, List, Optional, Sequence

from turismo_client import TurismoAPI

logger = logging.getLogger(__name__)

# (header, path into the record) pairs, in display order
COLUMNS = [
    ("ID", ("_id",)),
    ("From Comunidad", ("from", "comunidad")),
    ("From Provincia", ("from", "provincia")),
    ("To Comunidad", ("to", "comunidad")),
    ("To Provincia", ("to", "provincia")),
    ("Start Date", ("timeRange", "fecha_inicio")),
    ("End Date", ("timeRange", "fecha_fin")),
    ("Total", ("total",)),
]

# argparse destination -> (record section, field); section None means top level
FIELD_OPTIONS = {
    "from_comunidad": ("from", "comunidad"),
    "from_provincia": ("from", "provincia"),
    "to_comunidad": ("to", "comunidad"),
    "to_provincia": ("to", "provincia"),
    "start": ("timeRange", "fecha_inicio"),
    "end": ("timeRange", "fecha_fin"),
    "period": ("timeRange", "period"),
    "total": (None, "total"),
}


def _cell(record: Dict[str, Any], path: Sequence[str]) -> str:
    value: Any = record
    for key in path:
        if not isinstance(value, dict):
            return ""
        value = value.get(key)
    return "" if value is None else str(value)


def format_table(records: List[Dict[str, Any]]) -> str:
    """Render records as an aligned text table with a header row."""
    headers = [header for header, _ in COLUMNS]
    rows = [[_cell(record, path) for _, path in COLUMNS] for record in records]
    widths = [len(h) for h in headers]
    for row in rows:
        widths = [max(w, len(c)) for w, c in zip(widths, row)]
    lines = ["  ".join(h.ljust(w) for h, w in zip(headers, widths))]
    lines.append("  ".join("-" * w for w in widths))
    for row in rows:
        lines.append("  ".join(c.ljust(w) for c, w in zip(row, widths)))
    return "\n".join(lines)


def apply_fields(record: Dict[str, Any], args: argparse.Namespace) -> Dict[str, Any]:
    """Overlay the field options given on the command line onto ``record``."""
    for dest, (section, field) in FIELD_OPTIONS.items():
        value = getattr(args, dest, None)
        if value is None:
            continue
        if section is None:
            record[field] = value
        else:
            record.setdefault(section, {})
            if record[section] is None:
                record[section] = {}
            record[section][field] = value
    return record


def _add_field_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--from-comunidad", help="Origin community")
    parser.add_argument("--from-provincia", help="Origin province")
    parser.add_argument("--to-comunidad", help="Destination community")
    parser.add_argument("--to-provincia", help="Destination province")
    parser.add_argument("--start", help="Start date (YYYY-MM-DD)")
    parser.add_argument("--end", help="End date (YYYY-MM-DD)")
    parser.add_argument("--period", help="Period label, e.g. 2024M02")
    parser.add_argument("--total", type=int, help="Visitor count")


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Manage tourism flow records through the REST API.")
    ap.add_argument("--base-url", help="API base URL (default: $TURISMO_BASE_URL or http://localhost:8083)")
    ap.add_argument("-v", "--verbose", action="store_true", help="Log HTTP requests")
    sub = ap.add_subparsers(dest="command", required=True)

    p_list = sub.add_parser("list", help="List records")
    p_list.add_argument("--page", type=int, help="Zero-based page number (requires --size)")
    p_list.add_argument("--size", type=int, help="Page size (requires --page)")
    p_list.add_argument("--date", type=date.fromisoformat, help="Only records starting on this date")

    p_get = sub.add_parser("get", help="Show one record")
    p_get.add_argument("record_id")

    p_add = sub.add_parser("add", help="Add a record")
    _add_field_options(p_add)

    p_update = sub.add_parser("update", help="Edit a record; unspecified fields keep their value")
    p_update.add_argument("record_id")
    _add_field_options(p_update)

    p_delete = sub.add_parser("delete", help="Delete a record")
    p_delete.add_argument("record_id")

    sub.add_parser("communities", help="List destination communities")

    p_community = sub.add_parser("community", help="Show the records grouped under a community")
    p_community.add_argument("name")
    return ap


def _fail(message: str) -> int:
    print(f"[!] {message}", file=sys.stderr)
    return 1


def run(args: argparse.Namespace, api: TurismoAPI) -> int:
    """Execute the parsed command against ``api`` and return the exit status."""
    if args.command == "list":
        if (args.page is None) != (args.size is None):
            return _fail("--page and --size must be given together.")
        records, error = api.list_records(page=args.page, size=args.size)
        if error:
            return _fail(f"Failed to fetch data: {error['message']}")
        if args.date is not None:
            records = api.filter_by_start_date(records, args.date)
            if not records:
                print("No matching rows.")
                return 0
        print(format_table(records))
        return 0

    if args.command == "get":
        record, error = api.get_record(args.record_id)
        if error:
            if error["status_code"] == 404:
                return _fail("Record not found.")
            return _fail(f"Failed to fetch record: {error['message']}")
        print(format_table([record]))
        return 0

    if args.command == "add":
        payload = apply_fields({}, args)
        message, error = api.create_record(payload)
        if error:
            return _fail(f"Failed to add record: {error['message']}")
        print(f"[+] {message}")
        return 0

    if args.command == "update":
        # Start from the latest stored version so unspecified fields survive
        # the full overwrite performed by the server.
        record, error = api.get_record(args.record_id)
        if error:
            if error["status_code"] == 404:
                return _fail("Record not found.")
            return _fail(f"Failed to fetch record: {error['message']}")
        message, error = api.update_record(args.record_id, apply_fields(record, args))
        if error:
            return _fail(f"Failed to update record: {error['message']}")
        print(f"[+] {message}")
        return 0

    if args.command == "delete":
        message, error = api.delete_record(args.record_id)
        if error:
            return _fail(f"Failed to delete record: {error['message']}")
        print(f"[+] {message}")
        return 0

    if args.command == "communities":
        records, error = api.list_records()
        if error:
            return _fail(f"Failed to fetch community codes: {error['message']}")
        for code in api.community_codes(records):
            print(code)
        return 0

    if args.command == "community":
        records, error = api.get_community_records(args.name)
        if error:
            if error["status_code"] == 404:
                return _fail(f"No records found for community: {args.name}")
            return _fail(f"Failed to fetch community data: {error['message']}")
        print(format_table(records))
        return 0

    return _fail(f"Unknown command: {args.command}")


def main(argv: Optional[Sequence[str]] = None, api: Optional[TurismoAPI] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(message)s",
    )
    if api is None:
        api = TurismoAPI(base_url=args.base_url)
    logger.debug("Running %s against %s", args.command, api.base_url)
    return run(args, api)


if __name__ == "__main__":
    sys.exit(main())
