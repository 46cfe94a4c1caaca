"""CLI entrypoint for the publication searcher."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv

from config import load_config
from display import render_table
from models import SORT_FIELDS, BatchFile
from session import SearchSession


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line flags."""
    parser = argparse.ArgumentParser(description="Search publications by author, date range and keyword")
    parser.add_argument("--last-name", action="append", default=[], help="Author surname filter (repeatable)")
    parser.add_argument("--keyword", action="append", default=[], help="Keyword filter (repeatable)")
    parser.add_argument("--start-date", default="", help="Earliest publication date (YYYY-MM-DD)")
    parser.add_argument("--end-date", default="", help="Latest publication date (YYYY-MM-DD)")
    parser.add_argument(
        "--batch-file",
        type=Path,
        default=None,
        help="CSV of search criteria; when given, the search is sent in batch mode",
    )
    parser.add_argument(
        "--sort",
        action="append",
        choices=SORT_FIELDS,
        default=[],
        help=(
            "Click a column header (repeatable). Clicking the active column flips "
            "direction; a new column starts descending for matchPercent, ascending otherwise."
        ),
    )
    parser.add_argument("--select", action="append", default=[], help="Paper id to include in the export (repeatable)")
    parser.add_argument("--select-all", action="store_true", help="Toggle selection of every result")
    parser.add_argument("--output", type=Path, default=None, help="Export path (default: EXPORT_CSV_PATH)")
    parser.add_argument("--no-export", action="store_true", help="Only print the results table")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def run(args: argparse.Namespace, session: SearchSession) -> int:
    """Apply CLI filters to the session, search, print and export."""
    for name in args.last_name:
        session.filters.last_names.add(name)
    for keyword in args.keyword:
        session.filters.keywords.add(keyword)
    session.filters.start_date = args.start_date
    session.filters.end_date = args.end_date
    if args.batch_file is not None:
        try:
            content = args.batch_file.read_bytes()
        except OSError as exc:
            logging.error("Could not read batch file %s: %s", args.batch_file, exc)
            return 1
        session.filters.batch_file = BatchFile(filename=args.batch_file.name, content=content)

    if not session.submit():
        logging.error("Search failed: %s", session.error)
        return 1

    for field in args.sort:
        session.click_header(field)

    for paper_id in args.select:
        session.toggle_selection(paper_id, True)
    if args.select_all:
        session.select_all()

    print(session.result_summary)
    if session.advisory:
        print(session.advisory)
    print(render_table(session.sorted_papers, session.sort, session.selection.selected))

    if args.no_export:
        return 0

    path = session.download(args.output)
    if path is None:
        logging.info("Nothing to export")
    else:
        print(f"Exported to {path}")
    return 0


def main(argv: list[str] | None = None) -> int:
    """Initialize config and execute one search."""
    load_dotenv()
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(message)s",
    )
    session = SearchSession(load_config())
    return run(args, session)


if __name__ == "__main__":
    sys.exit(main())
