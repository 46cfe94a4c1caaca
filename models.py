"""Shared typed models for the publication searcher."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from tag_set import TagSet

SORT_FIELDS = ("matchPercent", "title", "authors", "date", "keywords")
ASC = "asc"
DESC = "desc"


@dataclass(frozen=True, slots=True)
class Paper:
    """Canonical search result; every field is always populated."""

    id: str
    title: str
    authors: str
    journal: str
    year: str
    doi: str
    date: str
    keywords: tuple[str, ...]
    match_percent: float

    @property
    def names(self) -> str:
        return self.authors


@dataclass(frozen=True, slots=True)
class SortSpec:
    field: str = "matchPercent"
    direction: str = DESC

    def __post_init__(self) -> None:
        if self.field not in SORT_FIELDS:
            raise ValueError(f"Unknown sort field: {self.field}")
        if self.direction not in (ASC, DESC):
            raise ValueError(f"Unknown sort direction: {self.direction}")


@dataclass(frozen=True, slots=True)
class BatchFile:
    """An uploaded batch-criteria file, kept as opaque bytes."""

    filename: str
    content: bytes
    content_type: str = "text/csv"


@dataclass
class FilterState:
    last_names: TagSet = field(default_factory=TagSet)
    start_date: str = ""
    end_date: str = ""
    keywords: TagSet = field(default_factory=TagSet)
    batch_file: BatchFile | None = None


@dataclass(frozen=True, slots=True)
class SearchRequest:
    """One outbound call: either query params (GET) or multipart (POST)."""

    method: str
    url: str
    params: dict[str, str] | None = None
    data: dict[str, str] | None = None
    files: dict[str, Any] | None = None
