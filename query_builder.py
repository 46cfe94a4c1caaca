"""Turn the current filter state into a single outbound search request."""

from __future__ import annotations

import logging

from config import SearchConfig
from models import FilterState, SearchRequest

PAPERS_PATH = "/api/papers"
BATCH_PATH = "/api/search-csv"

LOGGER = logging.getLogger(__name__)


def build_request(filters: FilterState, config: SearchConfig) -> SearchRequest:
    """Build the GET (structured) or POST (batch) request for one submission.

    A batch file takes precedence: when present the same four criteria ride
    along as form fields next to the upload. Empty tag sets serialize to ""
    and dates are passed through untouched.
    """
    fields = {
        "lastNames": filters.last_names.joined(),
        "startDate": filters.start_date,
        "endDate": filters.end_date,
        "keywords": filters.keywords.joined(),
    }

    batch = filters.batch_file
    if batch is not None:
        LOGGER.info("Query builder: batch mode file=%s size=%s", batch.filename, len(batch.content))
        return SearchRequest(
            method="POST",
            url=f"{config.api_base}{BATCH_PATH}",
            data=fields,
            files={"file": (batch.filename, batch.content, batch.content_type)},
        )

    LOGGER.info("Query builder: structured mode params=%s", fields)
    return SearchRequest(
        method="GET",
        url=f"{config.api_base}{PAPERS_PATH}",
        params=fields,
    )
