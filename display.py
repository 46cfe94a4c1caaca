"""Plain-text presentation helpers for the results table."""

from __future__ import annotations

from collections.abc import Collection, Sequence

from models import Paper, SortSpec
from sorting import sort_indicator

STRONG_MATCH_THRESHOLD = 75.0
NO_RESULTS_TEXT = "No papers found"

# (sort field or None, header label)
TABLE_HEADERS: list[tuple[str | None, str]] = [
    ("matchPercent", "Match %"),
    (None, ""),
    ("title", "Title"),
    ("authors", "Authors"),
    ("date", "Date"),
    ("keywords", "Keywords"),
    (None, "DOI"),
]


def author_preview(authors: str, threshold: int = 3) -> tuple[str, int]:
    """Return (text to show, number of hidden authors) for a collapsed author cell."""
    author_list = [name.strip() for name in authors.split(",") if name.strip()]
    if len(author_list) <= threshold:
        return authors, 0
    return ", ".join(author_list[:threshold]), len(author_list) - threshold


def doi_url(doi: str) -> str | None:
    if doi == "No DOI":
        return None
    return doi if doi.startswith("http") else f"https://{doi}"


def format_match(paper: Paper) -> str:
    return f"{paper.match_percent:.1f}%"


def is_strong_match(paper: Paper) -> bool:
    return paper.match_percent > STRONG_MATCH_THRESHOLD


def render_table(
    papers: Sequence[Paper],
    spec: SortSpec,
    selected_ids: Collection[str] = (),
    author_threshold: int = 3,
) -> str:
    """Render papers (already in display order) as an aligned text table."""
    header = []
    for field, label in TABLE_HEADERS:
        arrow = sort_indicator(spec, field) if field else ""
        header.append(f"{label} {arrow}".strip())

    if not papers:
        return "\n".join([" | ".join(header), NO_RESULTS_TEXT])

    rows: list[list[str]] = []
    for paper in papers:
        shown, hidden = author_preview(paper.authors, author_threshold)
        rows.append([
            format_match(paper) + (" *" if is_strong_match(paper) else ""),
            "[x]" if paper.id in selected_ids else "[ ]",
            paper.title,
            f"{shown} +{hidden} more" if hidden else shown,
            paper.date,
            ", ".join(paper.keywords),
            doi_url(paper.doi) or paper.doi,
        ])

    widths = [
        max(len(header[col]), *(len(row[col]) for row in rows))
        for col in range(len(header))
    ]
    lines = [" | ".join(cell.ljust(width) for cell, width in zip(header, widths))]
    lines.append("-+-".join("-" * width for width in widths))
    for row in rows:
        lines.append(" | ".join(cell.ljust(width) for cell, width in zip(row, widths)))
    return "\n".join(line.rstrip() for line in lines)
