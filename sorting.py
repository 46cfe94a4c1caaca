"""Stable, direction-toggling ordering of canonical Paper records."""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable
from datetime import UTC, datetime
from typing import Any

from models import ASC, DESC, Paper, SortSpec

DEFAULT_SORT = SortSpec("matchPercent", DESC)

# Year-only and year-month dates, read as the first day of that period.
_PARTIAL_DATE = re.compile(r"(\d{4})(?:-(\d{2}))?")


def _date_timestamp(raw: str) -> float:
    """Parse an ISO-ish date to a POSIX timestamp; unparsable dates sort as 0."""
    if not raw:
        return 0.0
    partial = _PARTIAL_DATE.fullmatch(raw.strip())
    try:
        if partial:
            parsed = datetime(int(partial.group(1)), int(partial.group(2) or 1), 1)
        else:
            parsed = datetime.fromisoformat(raw.replace("Z", "+00:00"))
    except ValueError:
        return 0.0
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    try:
        return parsed.timestamp()
    except (OverflowError, OSError):
        return 0.0


SORT_KEYS: dict[str, Callable[[Paper], Any]] = {
    "matchPercent": lambda p: p.match_percent,
    "title": lambda p: p.title,
    "authors": lambda p: p.authors,
    "date": lambda p: _date_timestamp(p.date),
    "keywords": lambda p: ", ".join(p.keywords),
}


def sort_papers(papers: Iterable[Paper], spec: SortSpec = DEFAULT_SORT) -> list[Paper]:
    """Return a new list ordered by spec. Ties keep their input order."""
    # sorted(reverse=True) preserves the relative order of equal keys.
    return sorted(papers, key=SORT_KEYS[spec.field], reverse=spec.direction == DESC)


def default_direction(field: str) -> str:
    return DESC if field == "matchPercent" else ASC


def next_sort(current: SortSpec, field: str) -> SortSpec:
    """Apply a header click: flip the active field, or switch with its default direction."""
    if current.field == field:
        return SortSpec(field, ASC if current.direction == DESC else DESC)
    return SortSpec(field, default_direction(field))


def sort_indicator(spec: SortSpec, field: str) -> str:
    if spec.field != field:
        return ""
    return "↑" if spec.direction == ASC else "↓"
