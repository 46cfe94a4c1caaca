"""Process-wide search configuration, read once at startup."""

from __future__ import annotations

import os
from dataclasses import dataclass

_DEFAULT_API_BASE = "http://0.0.0.0:8000"
_DEFAULT_TIMEOUT_SECONDS = 30
_DEFAULT_RESULT_CAP = 500


@dataclass(frozen=True, slots=True)
class SearchConfig:
    """Endpoint and limits for the remote publication-search service.

    result_cap is the row limit the service applies to one query; a result set
    of exactly that size means the query was truncated.
    """

    api_base: str = _DEFAULT_API_BASE
    timeout_seconds: float = _DEFAULT_TIMEOUT_SECONDS
    result_cap: int = _DEFAULT_RESULT_CAP


def load_config() -> SearchConfig:
    """Build a SearchConfig from SEARCH_* environment variables."""
    api_base = os.getenv("SEARCH_API_BASE", _DEFAULT_API_BASE).rstrip("/")
    return SearchConfig(
        api_base=api_base,
        timeout_seconds=float(os.getenv("SEARCH_TIMEOUT_SECONDS", _DEFAULT_TIMEOUT_SECONDS)),
        result_cap=int(os.getenv("SEARCH_RESULT_CAP", _DEFAULT_RESULT_CAP)),
    )
