"""CSV export of the currently loaded (or selected) papers."""

from __future__ import annotations

import csv
import io
import logging
import os
from collections.abc import Collection, Sequence
from pathlib import Path

from models import Paper

EXPORT_CSV_PATH = os.getenv("EXPORT_CSV_PATH", "filtered_papers.csv")

LOGGER = logging.getLogger(__name__)

CSV_COLUMNS = [
    "Names",
    "Paper Title",
    "Journal",
    "Year",
    "DOI",
]


def papers_to_export(papers: Sequence[Paper], selected_ids: Collection[str]) -> list[Paper]:
    """Selected papers in display order, or every paper when nothing is selected."""
    if selected_ids:
        return [paper for paper in papers if paper.id in selected_ids]
    return list(papers)


def export_csv(papers: Sequence[Paper], selected_ids: Collection[str] = ()) -> str | None:
    """Serialize papers to CSV text, or return None if there is nothing to export.

    Every field is quoted and embedded quotes are doubled. Rows are separated
    by "\\n" with no trailing newline.
    """
    rows = papers_to_export(papers, selected_ids)
    if not rows:
        LOGGER.info("CSV export skipped: no papers to export")
        return None

    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerow(CSV_COLUMNS)
    for paper in rows:
        writer.writerow([paper.names, paper.title, paper.journal, paper.year, paper.doi])
    LOGGER.info("CSV export: rows=%s selected=%s", len(rows), len(selected_ids))

    # Last row ends with a closing quote followed by the terminator.
    return buffer.getvalue()[:-1]


def write_export(
    papers: Sequence[Paper],
    selected_ids: Collection[str] = (),
    path: str | Path | None = None,
) -> Path | None:
    """Write the export to path (default EXPORT_CSV_PATH); no file if nothing to export."""
    text = export_csv(papers, selected_ids)
    if text is None:
        return None

    target = Path(path if path is not None else EXPORT_CSV_PATH)
    target.write_text(text, encoding="utf-8", newline="")
    LOGGER.info("Wrote CSV export to %s", target)
    return target
