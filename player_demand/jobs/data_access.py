"""Read-only access to stored runs from the shell, independent of the dashboard.

Usage: python -m player_demand.jobs.data_access [list|latest|files|help]
"""

from __future__ import annotations

import argparse
import logging
from typing import List, Optional

from player_demand.core.config import get_settings
from player_demand.core.storage import ResultStore

logger = logging.getLogger(__name__)

COMMANDS = {
    "list": "list",
    "ls": "list",
    "latest": "latest",
    "last": "latest",
    "files": "files",
    "all": "files",
    "help": "help",
    "-h": "help",
    "--help": "help",
}

USAGE = """Commands:
  list    (ls)    List all stored runs, newest first
  latest  (last)  Show details of the newest run
  files   (all)   Show every file in the data directory
  help            Show this message"""


def list_runs(store: ResultStore) -> int:
    runs = store.list_all()
    if not runs:
        print("No results found. Run a collection first.")
        return 0

    print(f"{'id':<45} {'type':<16} {'timestamp':<32} {'entities':>8} {'markets':>7} {'keywords':>8} {'cost':>8}")
    for run in runs:
        meta = run.metadata
        print(
            f"{run.id:<45} {run.test_type:<16} {run.timestamp:<32} "
            f"{len(meta.entities):>8} {len(meta.markets):>7} {meta.keyword_count:>8} {meta.actual_cost:>8.2f}"
        )
    print(f"\nData directory: {store.directory}")
    print(f"Stored runs: {len(runs)}")
    return 0


def show_latest(store: ResultStore) -> int:
    runs = store.list_all()
    if not runs:
        print("No results found.")
        return 0

    run = runs[0]
    meta = run.metadata
    preview = ", ".join(meta.entities[:3])
    print(f"ID: {run.id}")
    print(f"Test Type: {run.test_type}")
    print(f"Source: {run.source}")
    print(f"Timestamp: {run.timestamp}")
    print(f"API Mode: {meta.api_mode}")
    print(f"Entities: {len(meta.entities)} ({preview}{'...' if len(meta.entities) > 3 else ''})")
    print(f"Markets: {', '.join(meta.markets)}")
    print(f"Keywords: {meta.keyword_count}")
    print(f"Cost: ${meta.actual_cost:.2f}")
    print(f"Failed batches: {len(run.failures)}")

    for market, records in run.raw_results.items():
        print(f"\nSample data from {market}: {len(records)} keywords")
        if records:
            first = records[0]
            volume = first.get("search_volume")
            print(f"Sample: {first.get('keyword')} - {volume if volume is not None else 'N/A'} searches")
        break

    print(f"\nFile: {store.path_for(run.id)}")
    return 0


def show_files(store: ResultStore) -> int:
    entries = store.files()
    if not entries:
        print("No files found.")
        return 0

    for entry in entries:
        print(f"{entry['file']:<60} {entry['type']:<18} {entry['size_kb']:>8.1f} KB  {entry['modified']}")
    total = sum(entry["size_kb"] for entry in entries)
    print(f"\nDirectory: {store.directory}")
    print(f"Total size: {total:.1f} KB")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Inspect stored keyword demand runs",
        add_help=False,
    )
    parser.add_argument("command", nargs="?", default="list", help="list | latest | files | help")
    parser.add_argument("--data-dir", dest="data_dir", help="Directory holding stored runs (defaults to DATA_DIR)")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s - %(message)s")
    args, extra = build_parser().parse_known_args(argv)

    command = COMMANDS.get(args.command.lower())
    # argparse treats "-h"/"--help" as unknown options once add_help is off
    if extra and extra[0] in ("-h", "--help"):
        command, extra = "help", extra[1:]
    if command is None or extra:
        print(f"Unknown command: {' '.join([args.command, *extra])}\n")
        print(USAGE)
        return 1
    if command == "help":
        print(USAGE)
        return 0

    store = ResultStore(args.data_dir or get_settings().data_dir)
    if not store.directory.is_dir():
        logger.error("Data directory not found: %s", store.directory)
        return 1

    handlers = {"list": list_runs, "latest": show_latest, "files": show_files}
    return handlers[command](store)


if __name__ == "__main__":
    raise SystemExit(main())
