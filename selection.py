"""Selected-paper bookkeeping for the current result set."""

from __future__ import annotations

from collections.abc import Iterable


class SelectionTracker:
    """Set of selected Paper ids.

    The underlying set is swapped wholesale on every change, so a reference
    obtained from `selected` never changes under the reader.
    """

    def __init__(self) -> None:
        self._selected: frozenset[str] = frozenset()

    @property
    def selected(self) -> frozenset[str]:
        return self._selected

    def toggle(self, paper_id: str, included: bool) -> None:
        if included:
            self._selected = self._selected | {paper_id}
        else:
            self._selected = self._selected - {paper_id}

    def select_all(self, all_ids: Iterable[str]) -> None:
        """Select every id, or clear if every id is already selected."""
        ids = frozenset(all_ids)
        self._selected = frozenset() if self._selected == ids else ids

    def all_selected(self, all_ids: Iterable[str]) -> bool:
        return self._selected == frozenset(all_ids)

    def clear(self) -> None:
        self._selected = frozenset()

    def is_selected(self, paper_id: str) -> bool:
        return paper_id in self._selected

    def __len__(self) -> int:
        return len(self._selected)
