"""Normalize loosely-typed search-service records into canonical Paper objects."""

from __future__ import annotations

import logging
import math
import uuid
from typing import Any

from models import Paper

LOGGER = logging.getLogger(__name__)

# Source keys per canonical field, highest priority first. The service has
# shipped several response shapes; new aliases are appended here.
FIELD_SOURCES: dict[str, tuple[str, ...]] = {
    "id": ("id", "pmid"),
    "title": ("title",),
    "authors": ("names", "authors"),
    "journal": ("journal",),
    "date": ("date", "publication_date"),
    "year": ("year",),
    "doi": ("doi",),
    "keywords": ("keywords",),
    "match_percent": ("matchPercent",),
}

FALLBACKS: dict[str, str] = {
    "title": "Unknown Title",
    "authors": "Unknown Names",
    "journal": "Unknown Journal",
    "date": "",
    "doi": "No DOI",
}


class MalformedResponseError(RuntimeError):
    """The top-level search payload was not a JSON array."""


def normalize_papers(payload: Any) -> list[Paper]:
    """Convert a raw response payload into one Paper per element.

    Only a non-list payload is fatal. Missing or wrong-typed fields fall back
    to defined defaults and never raise.
    """
    if not isinstance(payload, list):
        raise MalformedResponseError(
            f"Unexpected search payload shape: expected a list, got {type(payload).__name__}"
        )

    papers = [normalize_record(item) for item in payload]
    LOGGER.info("Normalizer: raw_count=%s normalized=%s", len(payload), len(papers))
    return papers


def normalize_record(raw: Any) -> Paper:
    """Resolve every canonical field of one raw record."""
    record = raw if isinstance(raw, dict) else {}
    if record is not raw:
        LOGGER.debug("Normalizer: non-object record %r replaced with fallbacks", raw)

    date = _text_or(_resolve(record, "date"), FALLBACKS["date"])
    return Paper(
        id=_text_or(_resolve(record, "id"), "") or uuid.uuid4().hex,
        title=_text_or(_resolve(record, "title"), FALLBACKS["title"]),
        authors=_text_or(_resolve(record, "authors"), FALLBACKS["authors"]),
        journal=_text_or(_resolve(record, "journal"), FALLBACKS["journal"]),
        year=_resolve_year(_resolve(record, "year"), date),
        doi=_text_or(_resolve(record, "doi"), FALLBACKS["doi"]),
        date=date,
        keywords=_resolve_keywords(_resolve(record, "keywords")),
        match_percent=_resolve_match_percent(_resolve(record, "match_percent")),
    )


def _resolve(record: dict[str, Any], field: str) -> Any:
    """Return the first non-None source value for field, else None."""
    for key in FIELD_SOURCES[field]:
        value = record.get(key)
        if value is not None:
            return value
    return None


def _text_or(value: Any, fallback: str) -> str:
    if value is None:
        return fallback
    if isinstance(value, str):
        return value
    if isinstance(value, (list, tuple)):
        return ", ".join(str(part) for part in value if part is not None)
    return str(value)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _resolve_year(value: Any, date: str) -> str:
    if _is_number(value):
        if isinstance(value, float) and value.is_integer():
            return str(int(value))
        return str(value)
    if isinstance(value, str):
        return value
    # Derive from the date, dropping any time suffix ("2021-03-04T00:00:00").
    return date.split("T", 1)[0]


def _resolve_keywords(value: Any) -> tuple[str, ...]:
    if isinstance(value, str):
        return tuple(part.strip() for part in value.split(",") if part.strip())
    if isinstance(value, (list, tuple)):
        return tuple(str(part) for part in value if part is not None)
    return ()


def _resolve_match_percent(value: Any) -> float:
    if _is_number(value):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value)
        except ValueError:
            return 0.0
    else:
        return 0.0

    if not math.isfinite(number):
        return 0.0
    return min(max(number, 0.0), 100.0)
