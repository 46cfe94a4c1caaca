"""Top-level search view state: filters, results, selection, sort and busy flag."""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path
from typing import Any

from config import SearchConfig
from csv_sink import write_export
from models import FilterState, Paper, SearchRequest, SortSpec
from normalizer import MalformedResponseError, normalize_papers
from query_builder import build_request
from search_client import SearchError, execute_search
from selection import SelectionTracker
from sorting import DEFAULT_SORT, next_sort, sort_papers

CAP_ADVISORY = "Please narrow down your search!"
UNKNOWN_ERROR_MESSAGE = "Unknown error"

LOGGER = logging.getLogger(__name__)

SearchFn = Callable[[SearchRequest, SearchConfig], Any]


class SearchSession:
    """Owns the single in-memory result set and its selection.

    Results and selection are replaced wholesale, never edited in place. Each
    submission takes a new request token; a response is applied only if its
    token is still the latest one issued, so overlapping submissions resolve
    to the most recent request.
    """

    def __init__(self, config: SearchConfig, search: SearchFn = execute_search) -> None:
        self.config = config
        self.filters = FilterState()
        self.selection = SelectionTracker()
        self.sort: SortSpec = DEFAULT_SORT
        self.busy = False
        self.error: str | None = None
        self._papers: tuple[Paper, ...] = ()
        self._search = search
        self._latest_token = 0

    @property
    def papers(self) -> tuple[Paper, ...]:
        return self._papers

    @property
    def sorted_papers(self) -> list[Paper]:
        return sort_papers(self._papers, self.sort)

    @property
    def can_submit(self) -> bool:
        return not self.busy

    @property
    def advisory(self) -> str | None:
        """Warn when the service returned exactly its row cap."""
        if self._papers and len(self._papers) == self.config.result_cap:
            return CAP_ADVISORY
        return None

    @property
    def result_summary(self) -> str:
        count = len(self._papers)
        return f"Showing {count} result{'s' if count != 1 else ''}"

    def click_header(self, field: str) -> SortSpec:
        self.sort = next_sort(self.sort, field)
        return self.sort

    def submit(self) -> bool:
        """Run one search. Returns True if a fresh result set was applied."""
        self._latest_token += 1
        token = self._latest_token
        self.busy = True
        self.error = None
        LOGGER.info("Search submitted: token=%s", token)

        try:
            request = build_request(self.filters, self.config)
            payload = self._search(request, self.config)
            papers = normalize_papers(payload)
        except MalformedResponseError as exc:
            if self._is_current(token):
                self._replace_results(())
                self.error = str(exc)
            return False
        except SearchError as exc:
            if self._is_current(token):
                self.error = str(exc) or UNKNOWN_ERROR_MESSAGE
            return False
        except Exception as exc:  # keep the view usable on any local failure
            LOGGER.exception("Search failed locally: token=%s", token)
            if self._is_current(token):
                self.error = str(exc) or UNKNOWN_ERROR_MESSAGE
            return False
        finally:
            if token == self._latest_token:
                self.busy = False

        if not self._is_current(token):
            return False
        self._replace_results(papers)
        LOGGER.info("Search applied: token=%s results=%s", token, len(papers))
        return True

    def toggle_selection(self, paper_id: str, included: bool) -> bool:
        """Select or deselect a loaded paper. Ids outside the result set are ignored."""
        if not any(paper.id == paper_id for paper in self._papers):
            LOGGER.warning("Ignoring selection of unknown paper id=%s", paper_id)
            return False
        self.selection.toggle(paper_id, included)
        return True

    def select_all(self) -> None:
        self.selection.select_all(paper.id for paper in self._papers)

    @property
    def select_all_label(self) -> str:
        if self.selection.all_selected(paper.id for paper in self._papers):
            return "Clear All"
        return "Select All"

    def download(self, path: str | Path | None = None) -> Path | None:
        """Export selected (or all) papers in the current display order."""
        return write_export(self.sorted_papers, self.selection.selected, path)

    def reset(self) -> None:
        """Clear filters, results, selection and error; pending responses are dropped."""
        self._latest_token += 1
        self.filters = FilterState()
        self._replace_results(())
        self.sort = DEFAULT_SORT
        self.error = None
        self.busy = False
        LOGGER.info("Session reset")

    def _is_current(self, token: int) -> bool:
        if token != self._latest_token:
            LOGGER.info("Discarding stale search response: token=%s latest=%s", token, self._latest_token)
            return False
        return True

    def _replace_results(self, papers: list[Paper] | tuple[Paper, ...]) -> None:
        self._papers = tuple(papers)
        self.selection.clear()
